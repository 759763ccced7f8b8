# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Revocation and removal of the tokens and grants of applications. """

import logging


class RevocationCoordinator(object):
    """
    Fans out revocations and removals of an application
    to the token storage and the grant storage.
    """
    _logger = logging.getLogger('txOauth2Clients')

    def __init__(self, applicationStorage, tokenStorage, grantStorage):
        """
        :param applicationStorage: The storage of the applications.
        :param tokenStorage: The AccessTokenStorage.
        :param grantStorage: The AccessGrantStorage.
        """
        super(RevocationCoordinator, self).__init__()
        self._applicationStorage = applicationStorage
        self._tokenStorage = tokenStorage
        self._grantStorage = grantStorage

    def revokeTokensAndGrantsFor(self, applicationId, resourceOwner):
        """
        Revoke all access tokens and access grants of an application.
        :param applicationId: The id of the application.
        :param resourceOwner: Only revoke tokens and grants of this resource owner,
                              or of all resource owners if None.
        """
        self._tokenStorage.revokeAllFor(applicationId, resourceOwner)
        self._grantStorage.revokeAllFor(applicationId, resourceOwner)

    def authorizedFor(self, resourceOwner):
        """
        :param resourceOwner: The resource owner, an object with an id.
        :return: A list of the applications that hold at least one active access token
                 of the resource owner, in the order their first token was issued.
        """
        applications = []
        seenIds = set()
        for token in self._tokenStorage.findAllBy(resourceOwnerId=resourceOwner.id,
                                                  revoked=False):
            if token.applicationId in seenIds:
                continue
            seenIds.add(token.applicationId)
            try:
                applications.append(self._applicationStorage.getApplication(token.applicationId))
            except KeyError:
                self._logger.warning('Found an access token of the unknown application %s',
                                     token.applicationId)
        return applications

    def destroy(self, application):
        """
        Remove an application together with all of its
        access grants and access tokens, revoked or not.
        :raises KeyError: If the application is not in the application storage.
        :param application: The application to remove.
        :return: The number of removed grants and the number of removed tokens.
        """
        self._applicationStorage.getApplication(application.id)
        grantsRemoved = self._grantStorage.removeAllFor(application.id)
        tokensRemoved = self._tokenStorage.removeAllFor(application.id)
        self._applicationStorage.remove(application.id)
        self._logger.info('Destroyed application %s and removed %d grants and %d tokens',
                          application.id, grantsRemoved, tokensRemoved)
        return grantsRemoved, tokensRemoved
