""" Tests for the example. """

import importlib
import os
import shutil
import sys

from tempfile import mkdtemp

from txoauth2clients.application import Application

from tests import TwistedTestCase


class ExampleTest(TwistedTestCase):
    """ Test that the example registers and authenticates clients. """
    EXAMPLE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'example'))

    def setUp(self):
        sys.path.append(self.EXAMPLE_DIR)
        self.addCleanup(sys.path.remove, self.EXAMPLE_DIR)
        self.exampleModule = importlib.import_module('main')
        self.tempDir = mkdtemp()
        self.addCleanup(shutil.rmtree, self.tempDir, ignore_errors=True)
        self.storagePath = os.path.join(self.tempDir, 'applicationStorage')

    def testRegisterAndAuthenticate(self):
        """ Test that a registered client can authenticate with the example configuration. """
        registry = self.exampleModule.setupRegistry(self.storagePath)
        application = registry.create(name='Test', redirectUri='https://client.nonexistent')
        self.assertNotEqual(application.plaintextSecret, application.secret,
                            msg='Expected the example to hash new secrets.')
        self.assertEqual(application, registry.authenticate(
            application.uid, application.plaintextSecret),
            msg='Expected the client to authenticate with its credentials.')

    def testUpgradesPlaintextSecrets(self):
        """ Test that the example accepts and upgrades secrets stored in plaintext. """
        registry = self.exampleModule.setupRegistry(self.storagePath)
        legacy = Application(name='Legacy', redirectUri='https://client.nonexistent',
                             uid='legacyUid', secret='legacySecret',
                             secretStrategyName='plain')
        registry.save(legacy)
        self.assertEqual(legacy, registry.authenticate('legacyUid', 'legacySecret'),
                         msg='Expected the plaintext secret to be accepted by the fallback.')
        self.assertNotEqual('legacySecret', registry.getApplication(legacy.id).secret,
                            msg='Expected the plaintext secret to be replaced by its hash.')
        self.assertEqual(legacy, registry.authenticate('legacyUid', 'legacySecret'),
                         msg='Expected the upgraded secret to be accepted.')
