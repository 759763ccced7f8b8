# Copyright (c) Sebastian Scholz
# See LICENSE for details.
"""
Strategies that define how client secrets are stored.

A strategy transforms a plaintext secret into the value that is persisted
and verifies a candidate plaintext against a persisted value.
"""

import hashlib
import hmac

from abc import ABCMeta, abstractmethod

from twisted.python.reflect import namedAny

from txoauth2clients.errors import ConfigurationError
from txoauth2clients.util import isAnyStr

try:
    import bcrypt
except ImportError:
    bcrypt = None


class SecretStrategy(metaclass=ABCMeta):
    """ The way secrets are transformed before they are stored. """
    name = None
    # The longest plaintext in bytes that transformSecret accepts or None for no limit.
    maximumSecretBytes = None

    @abstractmethod
    def transformSecret(self, plaintext):
        """
        :param plaintext: The plaintext secret.
        :return: The representation of the secret that should be stored.
        """
        raise NotImplementedError()

    def verifySecret(self, stored, candidate):
        """
        Check whether the candidate plaintext matches the stored secret.
        This must never raise if the secrets don't match.
        :param stored: The stored representation of a secret.
        :param candidate: The plaintext secret to check.
        :return: True if the candidate matches the stored secret.
        """
        if not isAnyStr(stored) or not isAnyStr(candidate):
            return False
        return secretsEqual(self.transformSecret(candidate), stored)

    def allowsRestoringPlaintext(self):
        """
        :return: Whether the stored value is the plaintext secret itself.
        """
        return False

    def validateFor(self, model):
        """
        Check that this strategy can be used to store the secrets of the given model.
        :raises ConfigurationError: If the strategy can not be used.
        :param model: The kind of secret, e.g. 'application'.
        """

    def __eq__(self, other):
        return type(self) is type(other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return '<{cls}>'.format(cls=type(self).__name__)


class Plain(SecretStrategy):
    """ Stores the secret as is. """
    name = 'plain'

    def transformSecret(self, plaintext):
        return plaintext

    def allowsRestoringPlaintext(self):
        return True


class Sha256Hash(SecretStrategy):
    """ Stores the hex encoded SHA-256 digest of the secret. """
    name = 'sha256'

    def transformSecret(self, plaintext):
        return hashlib.sha256(plaintext.encode('utf-8')).hexdigest()


class BCrypt(SecretStrategy):
    """
    Stores a salted bcrypt hash of the secret. Transforming the same secret twice
    yields different values, so it is only suitable for secrets that are
    looked up by another key, which is true for application secrets but not for tokens.
    Bcrypt only accepts secrets of up to 72 bytes.
    Requires the bcrypt package.
    """
    name = 'bcrypt'
    maximumSecretBytes = 72

    def __init__(self, rounds=12):
        """
        :param rounds: The bcrypt cost factor.
        """
        super(BCrypt, self).__init__()
        self.rounds = rounds

    def transformSecret(self, plaintext):
        return bcrypt.hashpw(
            plaintext.encode('utf-8'), bcrypt.gensalt(rounds=self.rounds)).decode('utf-8')

    def verifySecret(self, stored, candidate):
        if not isAnyStr(stored) or not isAnyStr(candidate):
            return False
        try:
            return bcrypt.checkpw(candidate.encode('utf-8'), stored.encode('utf-8'))
        except ValueError:  # The stored value is not a bcrypt hash
            return False

    def validateFor(self, model):
        if bcrypt is None:
            raise ConfigurationError(
                'The bcrypt secret strategy requires the bcrypt package to be installed')
        if model != 'application':
            raise ConfigurationError(
                'The bcrypt secret strategy can only be used for application secrets, '
                'not for {model} secrets'.format(model=model))


STRATEGIES = {strategy.name: strategy for strategy in [Plain, Sha256Hash, BCrypt]}


def secretsEqual(first, second):
    """
    Compare two secrets in constant time.
    :param first: The first secret.
    :param second: The second secret.
    :return: True if both secrets are equal.
    """
    return hmac.compare_digest(first.encode('utf-8'), second.encode('utf-8'))


def getStrategyName(strategy):
    """
    :param strategy: A SecretStrategy instance.
    :return: The name of the strategy, which getStrategy resolves back to the strategy.
             This is the dotted path of the class for strategies without a short name.
    """
    if strategy.name is not None:
        return strategy.name
    return '{module}.{name}'.format(
        module=type(strategy).__module__, name=type(strategy).__qualname__)


def getStrategy(name):
    """
    Find a secret strategy by its name.
    :raises ConfigurationError: If no strategy with that name exists.
    :param name: One of 'plain', 'sha256' or 'bcrypt', a dotted path to a SecretStrategy
                 subclass or a SecretStrategy instance, which is returned unchanged.
    :return: An instance of the secret strategy.
    """
    if isinstance(name, SecretStrategy):
        return name
    if not isAnyStr(name):
        raise ConfigurationError('Expected a secret strategy name, got ' + str(type(name)))
    strategyClass = STRATEGIES.get(name.strip().lower())
    if strategyClass is None:
        try:
            strategyClass = namedAny(name.strip())
        except (ValueError, AttributeError, ImportError) as error:
            raise ConfigurationError('Unknown secret strategy "{name}": {error}'.format(
                name=name, error=error))
        if not isinstance(strategyClass, type) or not issubclass(strategyClass, SecretStrategy):
            raise ConfigurationError(
                '"{name}" is not a SecretStrategy subclass'.format(name=name))
    return strategyClass()
