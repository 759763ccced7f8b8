# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Access tokens and access grants that belong to an application and their storages. """

import time

from abc import ABCMeta, abstractmethod


class _ApplicationRecord(object):
    """ A record that was issued to an application on behalf of a resource owner. """

    def __init__(self, token, applicationId, resourceOwnerId=None, revokedAt=None):
        """
        :param token: The token string of this record.
        :param applicationId: The id of the application this record was issued to.
        :param resourceOwnerId: The id of the resource owner that authorized the application.
        :param revokedAt: The time in seconds since the epoch at which
                          the record was revoked or None.
        """
        super(_ApplicationRecord, self).__init__()
        self.token = token
        self.applicationId = applicationId
        self.resourceOwnerId = resourceOwnerId
        self.revokedAt = revokedAt

    def isRevoked(self):
        """
        :return: Whether this record has been revoked.
        """
        return self.revokedAt is not None

    def revoke(self, clock=time.time):
        """
        Revoke this record, unless it is already revoked.
        :param clock: A function returning the current time in seconds since the epoch.
        """
        if self.revokedAt is None:
            self.revokedAt = clock()

    def __repr__(self):
        return '<{cls} applicationId={applicationId!r} resourceOwnerId={ownerId!r} ' \
               'revoked={revoked}>'.format(cls=type(self).__name__,
                                           applicationId=self.applicationId,
                                           ownerId=self.resourceOwnerId,
                                           revoked=self.isRevoked())


class AccessToken(_ApplicationRecord):
    """ An access token issued to an application. """


class AccessGrant(_ApplicationRecord):
    """ An access grant (authorization code) issued to an application. """


class _ApplicationRecordStorage(metaclass=ABCMeta):
    """ A storage for records that belong to an application. """

    @abstractmethod
    def add(self, record):
        """
        Store a new record.
        :param record: The record to store.
        """
        raise NotImplementedError()

    @abstractmethod
    def revokeAllFor(self, applicationId, resourceOwner):
        """
        Revoke all records of an application.
        :param applicationId: The id of the application.
        :param resourceOwner: Only revoke the records issued on behalf of this resource owner,
                              an object with an id. None revokes the records of all owners.
        """
        raise NotImplementedError()

    @abstractmethod
    def findAllBy(self, applicationId=None, resourceOwnerId=None, revoked=None):
        """
        Find records. Every argument that is None is not used as a filter.
        :param applicationId: The id of the application the records belong to.
        :param resourceOwnerId: The id of the resource owner the records were issued for.
        :param revoked: True to only find revoked, False to only find active records.
        :return: A list of the matching records in the order they were added.
        """
        raise NotImplementedError()

    @abstractmethod
    def removeAllFor(self, applicationId):
        """
        Remove all records of an application, whether revoked or not.
        :param applicationId: The id of the application.
        :return: The number of removed records.
        """
        raise NotImplementedError()

    @abstractmethod
    def count(self):
        """
        :return: The number of records in this storage.
        """
        raise NotImplementedError()


class AccessTokenStorage(_ApplicationRecordStorage):
    """ An object that stores the access tokens of applications. """


class AccessGrantStorage(_ApplicationRecordStorage):
    """ An object that stores the access grants of applications. """
