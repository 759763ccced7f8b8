# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Generation and verification of application credentials. """

import logging

from txoauth2clients.application import setPlaintextSecret
from txoauth2clients.errors import ConfigurationError
from txoauth2clients.imp import HexIdentifierGenerator
from txoauth2clients.secretstoring import getStrategyName
from txoauth2clients.util import isBlank


class CredentialStore(object):
    """
    Generates the uid and secret of new applications and finds applications
    by their uid and secret, using the secret strategies of the configuration.
    """
    _logger = logging.getLogger('txOauth2Clients')

    def __init__(self, applicationStorage, configuration, uidGenerator=None,
                 secretGenerator=None):
        """
        :raises ConfigurationError: If the secret generator can generate secrets
                                    that are too long for the secret strategy.
        :param applicationStorage: The storage of the applications.
        :param configuration: The configuration which defines the secret strategies.
        :param uidGenerator: The IdentifierGenerator used for new uids.
        :param secretGenerator: The IdentifierGenerator used for new plaintext secrets.
        """
        super(CredentialStore, self).__init__()
        self._applicationStorage = applicationStorage
        self._configuration = configuration
        self._uidGenerator = HexIdentifierGenerator() if uidGenerator is None else uidGenerator
        self._secretGenerator = HexIdentifierGenerator() \
            if secretGenerator is None else secretGenerator
        maximumBytes = configuration.secretStrategy.maximumSecretBytes
        maximumLength = self._secretGenerator.getMaximumLength()
        if maximumBytes is not None and maximumLength is not None \
                and maximumLength > maximumBytes:
            raise ConfigurationError(
                'The secret generator generates secrets of up to {length} characters, but the '
                'secret strategy {strategy!r} only accepts {bytes} bytes'.format(
                    length=maximumLength, strategy=configuration.secretStrategy,
                    bytes=maximumBytes))

    def ensureCredentialsOnCreate(self, application):
        """
        Generate the uid and secret of a new application, if they are blank.
        A generated secret is transformed by the current secret strategy and
        the plaintext is kept on the application instance. Uid and secret values
        that are not blank are kept as they are.
        :param application: The new application.
        """
        if isBlank(application.uid):
            application.uid = self._uidGenerator.generate()
        if isBlank(application.secret):
            self._assignNewSecret(application)

    def renewSecret(self, application):
        """
        Replace the secret of an application with a newly generated one.
        The change must be persisted by the caller.
        :param application: The application.
        :return: The new plaintext secret.
        """
        self._assignNewSecret(application)
        return application.plaintextSecret

    def lookupByUidAndSecret(self, uid, secret):
        """
        Find an application by its uid and verify the secret.
        A non-confidential application is also found if the secret is blank.
        :param uid: The uid of the application.
        :param secret: The candidate plaintext secret.
        :return: The application or None, if no application with the uid exists
                 or the secret doesn't match.
        """
        if isBlank(uid):
            return None
        try:
            application = self._applicationStorage.getApplicationByUid(uid)
        except KeyError:
            self._logger.debug('Client authentication failed for uid %s', uid)
            return None
        if isBlank(secret):
            if application.isConfidential():
                self._logger.debug('Client authentication failed for uid %s', uid)
                return None
            return application
        strategy = self.secretMatches(application, secret)
        if strategy is None:
            self._logger.debug('Client authentication failed for uid %s', uid)
            return None
        if strategy is not self._configuration.secretStrategy:
            self._logger.info('Application %s was authenticated by the fallback secret '
                              'strategy %r', application.id, strategy)
            if self._configuration.upgradeFallbackSecrets \
                    and application.secretStrategyName == getStrategyName(strategy):
                self._upgradeSecret(application, secret)
        if strategy.allowsRestoringPlaintext():
            setPlaintextSecret(application, secret)
        return application

    def secretMatches(self, application, secret):
        """
        Verify a candidate secret against the stored secret of an application,
        first with the secret strategy and then with the fallback secret strategy.
        If the application knows which strategy transformed its secret,
        only that strategy is used.
        :param application: The application.
        :param secret: The candidate plaintext secret.
        :return: The strategy that verified the secret or None.
        """
        for strategy in [self._configuration.secretStrategy,
                         self._configuration.fallbackSecretStrategy]:
            if strategy is None or (application.secretStrategyName is not None and
                                    application.secretStrategyName != getStrategyName(strategy)):
                continue
            if strategy.verifySecret(application.secret, secret):
                return strategy
        return None

    def _assignNewSecret(self, application):
        """
        Generate a new plaintext secret and store its transformed value on the application.
        :param application: The application.
        """
        plaintextSecret = self._secretGenerator.generate()
        application.secret = self._configuration.secretStrategy.transformSecret(plaintextSecret)
        application.secretStrategyName = getStrategyName(self._configuration.secretStrategy)
        setPlaintextSecret(application, plaintextSecret)

    def _upgradeSecret(self, application, secret):
        """
        Store the secret with the current secret strategy.
        :param application: The application whose secret was verified by the fallback strategy.
        :param secret: The verified plaintext secret.
        """
        strategy = self._configuration.secretStrategy
        if strategy.maximumSecretBytes is not None \
                and len(secret.encode('utf-8')) > strategy.maximumSecretBytes:
            self._logger.warning('Not upgrading the secret of application %s, it is too long '
                                 'for the secret strategy %r', application.id, strategy)
            return
        application.secret = strategy.transformSecret(secret)
        application.secretStrategyName = getStrategyName(strategy)
        self._applicationStorage.update(application)
        self._logger.info('Upgraded the secret of application %s to the secret strategy %r',
                          application.id, strategy)
