import itertools

from twisted.trial.unittest import TestCase

from txoauth2clients import Application, ApplicationRegistry, Configuration
from txoauth2clients.generators import IdentifierGenerator
from txoauth2clients.imp import DictApplicationStorage, DictAccessTokenStorage, \
    DictAccessGrantStorage
from txoauth2clients.token import AccessToken, AccessGrant


class classProperty(object):
    """ @property for class variables. """
    def __init__(self, func):
        self.func = classmethod(func)

    def __get__(self, *args):
        # noinspection PyCallingNonCallable
        return self.func.__get__(*args)()


class TwistedTestCase(TestCase):
    """ An abstract base class for the test cases. """
    longMessage = True

    @classProperty
    def __test__(self):
        return not (self.__name__.startswith('Abstract') or self.__name__ == 'TwistedTestCase')


class TestResourceOwner(object):
    """ A resource owner that can be used in tests. """
    __test__ = False

    def __init__(self, ownerId):
        self.id = ownerId  # pylint: disable=invalid-name


class TestIdentifierGenerator(IdentifierGenerator):
    """ An identifier generator that returns predefined identifiers. """
    __test__ = False

    def __init__(self, *identifiers):
        """
        :param identifiers: The identifiers to return, repeated forever.
        """
        super(TestIdentifierGenerator, self).__init__()
        self._identifiers = itertools.cycle(identifiers)

    def generate(self):
        return next(self._identifiers)


class TestEnvironment(object):
    """ A registry with in memory storages that can be used for tests. """
    __test__ = False
    _names = itertools.count(1)

    def __init__(self, configuration=None, uidGenerator=None, secretGenerator=None,
                 applicationStorage=None):
        """
        :param configuration: The configuration to use or None for the default configuration.
        :param uidGenerator: An optional IdentifierGenerator for uids.
        :param secretGenerator: An optional IdentifierGenerator for secrets.
        :param applicationStorage: The application storage to share with another environment
                                   or None to use a new one.
        """
        self.configuration = Configuration() if configuration is None else configuration
        self.applicationStorage = DictApplicationStorage() \
            if applicationStorage is None else applicationStorage
        self.tokenStorage = DictAccessTokenStorage()
        self.grantStorage = DictAccessGrantStorage()
        self.registry = ApplicationRegistry(
            self.configuration, self.applicationStorage, self.tokenStorage, self.grantStorage,
            uidGenerator=uidGenerator, secretGenerator=secretGenerator)

    def createApplication(self, **attributes):
        """
        :param attributes: Attributes that override the default test attributes.
        :return: A new application that was created with the registry.
        """
        return self.registry.create(**getTestApplicationAttributes(**attributes))

    def createAccessToken(self, application=None, resourceOwnerId=None, revokedAt=None):
        """
        :param application: The application of the token or None to create a new one.
        :param resourceOwnerId: The id of the resource owner of the token.
        :param revokedAt: The time the token was revoked or None.
        :return: A new access token that was added to the token storage.
        """
        if application is None:
            application = self.createApplication()
        token = AccessToken('token{num}'.format(num=next(self._names)), application.id,
                            resourceOwnerId, revokedAt)
        self.tokenStorage.add(token)
        return token

    def createAccessGrant(self, application, resourceOwnerId=None, revokedAt=None):
        """
        :param application: The application of the grant.
        :param resourceOwnerId: The id of the resource owner of the grant.
        :param revokedAt: The time the grant was revoked or None.
        :return: A new access grant that was added to the grant storage.
        """
        grant = AccessGrant('grant{num}'.format(num=next(self._names)), application.id,
                            resourceOwnerId, revokedAt)
        self.grantStorage.add(grant)
        return grant


def getTestApplicationAttributes(**attributes):
    """
    :param attributes: Attributes that override the default values.
    :return: Valid attributes for a new application.
    """
    result = {
        'name': 'Application {num}'.format(num=next(TestEnvironment._names)),
        'redirectUri': 'https://app.nonexistent/callback',
    }
    result.update(attributes)
    return result


def getTestApplication(**attributes):
    """
    :param attributes: Attributes that override the default values.
    :return: A valid application that has not been persisted.
    """
    return Application(**getTestApplicationAttributes(**attributes))
