# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Issues and authenticates the credentials of oauth2 clients. """

from .application import Application
from .config import Configuration
from .registry import ApplicationRegistry

__all__ = ['Application', 'ApplicationRegistry', 'Configuration', 'application', 'config',
           'credentials', 'errors', 'generators', 'imp', 'policy', 'registry', 'revocation',
           'secretstoring', 'token']
