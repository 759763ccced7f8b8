# Copyright (c) Sebastian Scholz
# See LICENSE for details.
"""
This is an example of how to register and authenticate oauth2 clients with this library.
The applications are stored in a config file next to this script. The configuration
hashes new secrets with SHA-256 and still accepts plaintext secrets that were stored
with the plain strategy before hashing was enabled, rewriting them on their next
successful authentication.
"""

import logging
import os
import sys

from txoauth2clients import ApplicationRegistry, Configuration
from txoauth2clients.imp import ConfigParserApplicationStorage, DictAccessTokenStorage, \
    DictAccessGrantStorage

EXAMPLE_DIR = os.path.dirname(os.path.abspath(__file__))


def setupRegistry(storagePath=None, configPath=None):
    """
    Setup an application registry that stores its applications in a config file.
    :param storagePath: The path of the application storage file.
    :param configPath: The path of the configuration file.
    :return: The application registry.
    """
    if storagePath is None:
        storagePath = os.path.join(EXAMPLE_DIR, 'applicationStorage')
    if configPath is None:
        configPath = os.path.join(EXAMPLE_DIR, 'oauth2.ini')
    return ApplicationRegistry(
        Configuration.fromConfigFile(configPath), ConfigParserApplicationStorage(storagePath),
        DictAccessTokenStorage(), DictAccessGrantStorage())


def main():
    """
    Register a new client and authenticate it with the generated credentials.
    """
    logging.basicConfig(level=logging.INFO)
    registry = setupRegistry()
    application = registry.create(
        name='Example client', redirectUri=['https://clientServer.com/return'])
    # This is the only time the plaintext secret is available.
    print('client_id: ' + application.uid)
    print('client_secret: ' + application.plaintextSecret)
    if registry.authenticate(application.uid, application.plaintextSecret) is None:
        print('The client could not be authenticated')
        return 1
    print('The client was authenticated')
    return 0


if __name__ == '__main__':
    sys.exit(main())
