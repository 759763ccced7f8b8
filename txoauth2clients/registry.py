# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" The entry point for registering, authenticating and removing applications. """

import logging

from txoauth2clients.application import Application
from txoauth2clients.credentials import CredentialStore
from txoauth2clients.policy import AuthorizationPolicy
from txoauth2clients.revocation import RevocationCoordinator


class ApplicationRegistry(object):
    """
    Manages the applications known to the server.

    New applications get a generated uid and secret, are validated and then added to the
    application storage. The plaintext secret of a new application is only available
    on the instance returned by create, so it must be handed to the client right away.
    """
    _logger = logging.getLogger('txOauth2Clients')
    ORDER_DIRECTIONS = ('asc', 'desc')

    def __init__(self, configuration, applicationStorage, tokenStorage, grantStorage,
                 uidGenerator=None, secretGenerator=None):
        """
        :param configuration: The Configuration.
        :param applicationStorage: The ApplicationStorage.
        :param tokenStorage: The AccessTokenStorage of the tokens issued to the applications.
        :param grantStorage: The AccessGrantStorage of the grants issued to the applications.
        :param uidGenerator: An optional IdentifierGenerator for uids.
        :param secretGenerator: An optional IdentifierGenerator for secrets.
        """
        super(ApplicationRegistry, self).__init__()
        self.configuration = configuration
        self._applicationStorage = applicationStorage
        self.credentialStore = CredentialStore(
            applicationStorage, configuration, uidGenerator, secretGenerator)
        self.policy = AuthorizationPolicy(applicationStorage, configuration)
        self.revocationCoordinator = RevocationCoordinator(
            applicationStorage, tokenStorage, grantStorage)

    def create(self, **attributes):
        """
        Create and persist a new application.
        :raises ValidationError: If the application is not valid.
        :raises UniquenessConflictError: If a concurrently created application got the same uid.
        :param attributes: The attributes of the application, see Application.
        :return: The new application which holds the plaintext secret.
        """
        application = Application(**attributes)
        self.save(application)
        return application

    def save(self, application, validate=True):
        """
        Persist a new or changed application. The uid and the secret
        of a new application are generated if they are blank.
        :raises ValidationError: If validate is True and the application is not valid.
        :raises UniquenessConflictError: If another application already has the same uid.
        :param application: The application to save.
        :param validate: Whether to validate the application before writing it.
        """
        if application.isPersisted():
            if validate:
                self.policy.validate(application)
            self._applicationStorage.update(application)
            self._logger.info('Updated application %s (%s)', application.id, application.uid)
        else:
            self.credentialStore.ensureCredentialsOnCreate(application)
            if validate:
                self.policy.validate(application)
            self._applicationStorage.add(application)
            self._logger.info('Created application %s (%s)', application.id, application.uid)

    def authenticate(self, uid, secret):
        """
        :param uid: The client id.
        :param secret: The plaintext client secret, may be blank for non-confidential clients.
        :return: The authenticated application or None. Unknown uids and
                 wrong secrets can not be told apart.
        """
        return self.credentialStore.lookupByUidAndSecret(uid, secret)

    def getApplication(self, applicationId):
        """
        :raises KeyError: If no application with the given id exists.
        :param applicationId: The id of the application.
        :return: The application, without its plaintext secret.
        """
        return self._applicationStorage.getApplication(applicationId)

    def destroy(self, application):
        """
        Remove an application and all of its access grants and access tokens.
        :raises KeyError: If the application is not stored.
        :param application: The application to remove.
        """
        self.revocationCoordinator.destroy(application)

    def revokeTokensAndGrantsFor(self, applicationId, resourceOwner):
        """
        Revoke all access tokens and access grants of an application.
        :param applicationId: The id of the application.
        :param resourceOwner: The resource owner whose tokens and grants should be revoked
                              or None for all resource owners.
        """
        self.revocationCoordinator.revokeTokensAndGrantsFor(applicationId, resourceOwner)

    def authorizedFor(self, resourceOwner):
        """
        :param resourceOwner: The resource owner.
        :return: The applications that the resource owner has authorized
                 and that still have an active access token.
        """
        return self.revocationCoordinator.authorizedFor(resourceOwner)

    def orderedBy(self, field, direction='asc'):
        """
        :raises ValueError: If the field or the direction is unknown.
        :param field: The name of the attribute to order by.
        :param direction: 'asc' or 'desc'.
        :return: A list of all applications ordered by the given attribute.
                 Applications with equal values keep the order they were added in.
        """
        if field not in Application.PERSISTED_ATTRIBUTES:
            raise ValueError('Unable to order applications by ' + str(field))
        direction = str(direction).lower()
        if direction not in self.ORDER_DIRECTIONS:
            raise ValueError('Unknown order direction ' + direction)
        return sorted(self._applicationStorage.getApplications(),
                      key=lambda application: _sortKey(getattr(application, field)),
                      reverse=direction == 'desc')


def _sortKey(value):
    """ None sorts before every other value. """
    return (value is not None, value)
