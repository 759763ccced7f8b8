# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Implementations to some of the abstract classes used by this module. """

import itertools
import os
import secrets
import threading

from configparser import RawConfigParser

from txoauth2clients.application import Application, ApplicationStorage
from txoauth2clients.errors import UniquenessConflictError
from txoauth2clients.generators import IdentifierGenerator
from txoauth2clients.token import AccessTokenStorage, AccessGrantStorage

_MIN_IDENTIFIER_BYTES = 16


class HexIdentifierGenerator(IdentifierGenerator):
    """ An IdentifierGenerator that generates hex encoded random identifiers. """

    def __init__(self, size=32):
        """
        :raises ValueError: If size is smaller than 16 bytes (128 bits).
        :param size: The number of random bytes in an identifier.
        """
        super(HexIdentifierGenerator, self).__init__()
        if size < _MIN_IDENTIFIER_BYTES:
            raise ValueError('Identifiers need at least {min} random bytes, got {size}'
                             .format(min=_MIN_IDENTIFIER_BYTES, size=size))
        self.size = size

    def generate(self):
        """
        :return: A random identifier of 2 * size hex characters.
        """
        return secrets.token_hex(self.size)

    def getMaximumLength(self):
        return 2 * self.size


class UrlSafeIdentifierGenerator(IdentifierGenerator):
    """ An IdentifierGenerator that generates url safe base64 encoded random identifiers. """

    def __init__(self, size=32):
        """
        :raises ValueError: If size is smaller than 16 bytes (128 bits).
        :param size: The number of random bytes in an identifier.
        """
        super(UrlSafeIdentifierGenerator, self).__init__()
        if size < _MIN_IDENTIFIER_BYTES:
            raise ValueError('Identifiers need at least {min} random bytes, got {size}'
                             .format(min=_MIN_IDENTIFIER_BYTES, size=size))
        self.size = size

    def generate(self):
        """
        :return: A random url safe identifier.
        """
        return secrets.token_urlsafe(self.size)

    def getMaximumLength(self):
        # Base64 without padding
        return -(-self.size * 4 // 3)


class DictApplicationStorage(ApplicationStorage):
    """
    This application storage does not implement any type of persistence and applications
    will therefore not survive a server restart. This implementation should probably
    only be used for testing.
    """

    def __init__(self):
        super(DictApplicationStorage, self).__init__()
        self._lock = threading.RLock()
        self._applications = {}
        self._uids = {}
        self._ids = itertools.count(1)

    def add(self, application):
        with self._lock:
            self._checkUniqueUid(application)
            application.id = next(self._ids)
            self._write(application)

    def update(self, application):
        with self._lock:
            oldData = self._applications[application.id]
            self._checkUniqueUid(application)
            self._uids.pop(oldData['uid'], None)
            self._write(application)

    def remove(self, applicationId):
        with self._lock:
            data = self._applications.pop(applicationId)
            self._uids.pop(data['uid'], None)

    def getApplication(self, applicationId):
        with self._lock:
            return Application.fromDict(self._applications[applicationId])

    def getApplicationByUid(self, uid):
        with self._lock:
            return self.getApplication(self._uids[uid])

    def getApplications(self):
        with self._lock:
            return [Application.fromDict(data) for data in self._applications.values()]

    def _checkUniqueUid(self, application):
        """
        :raises UniquenessConflictError: If another application has the same uid.
        :param application: The application that is about to be written.
        """
        if application.uid is None:
            return
        ownerId = self._uids.get(application.uid)
        if ownerId is not None and ownerId != application.id:
            raise UniquenessConflictError('uid', application.uid)

    def _write(self, application):
        data = application.toDict()
        self._applications[application.id] = data
        if data['uid'] is not None:
            self._uids[data['uid']] = application.id


class ConfigParserApplicationStorage(ApplicationStorage):
    """
    An ApplicationStorage using a ConfigParser. Every application is stored in
    its own section of a config file. Owner ids must be integers or strings,
    their type is stored next to them.
    """
    _SECTION_PREFIX = 'application_'
    _KEYS = [('name', 'name'), ('uid', 'uid'), ('secret', 'secret'),
             ('redirectUri', 'redirect_uri'), ('confidential', 'confidential'),
             ('ownerId', 'owner_id'), ('scopes', 'scopes'),
             ('secretStrategyName', 'secret_strategy')]
    _OWNER_ID_TYPES = {'int': int, 'str': str}
    _configParser = None
    path = None

    def __init__(self, path):
        """
        Initialize a new ConfigParserApplicationStorage which loads and stores
        its applications from the given path.
        :param path: Path to a config file to load and store applications.
        """
        super(ConfigParserApplicationStorage, self).__init__()
        self._lock = threading.RLock()
        self._configParser = RawConfigParser()
        self.path = os.path.abspath(path)
        self._configParser.read(self.path)

    def add(self, application):
        with self._lock:
            self._checkOwnerId(application)
            self._checkUniqueUid(application)
            applicationId = max([0] + [self._getId(sectionName)
                                       for sectionName in self._getSectionNames()]) + 1
            self._configParser.add_section(self._SECTION_PREFIX + str(applicationId))
            application.id = applicationId
            self._write(application)

    def update(self, application):
        with self._lock:
            if not self._configParser.has_section(self._getSectionName(application.id)):
                raise KeyError('No application with id "{id}" exists'.format(id=application.id))
            self._checkOwnerId(application)
            self._checkUniqueUid(application)
            self._write(application)

    def remove(self, applicationId):
        with self._lock:
            if not self._configParser.remove_section(self._getSectionName(applicationId)):
                raise KeyError('No application with id "{id}" exists'.format(id=applicationId))
            self._save()

    def getApplication(self, applicationId):
        with self._lock:
            sectionName = self._getSectionName(applicationId)
            if not self._configParser.has_section(sectionName):
                raise KeyError('No application with id "{id}" exists'.format(id=applicationId))
            return self._read(sectionName)

    def getApplicationByUid(self, uid):
        with self._lock:
            for sectionName in self._getSectionNames():
                if self._configParser.get(sectionName, 'uid') == uid:
                    return self._read(sectionName)
        raise KeyError('No application with uid "{uid}" exists'.format(uid=uid))

    def getApplications(self):
        with self._lock:
            return [self._read(sectionName) for sectionName
                    in sorted(self._getSectionNames(), key=self._getId)]

    def _getSectionName(self, applicationId):
        return self._SECTION_PREFIX + str(applicationId)

    def _getSectionNames(self):
        return [sectionName for sectionName in self._configParser.sections()
                if sectionName.startswith(self._SECTION_PREFIX)]

    def _getId(self, sectionName):
        return int(sectionName[len(self._SECTION_PREFIX):])

    def _checkUniqueUid(self, application):
        """
        :raises UniquenessConflictError: If another application has the same uid.
        :param application: The application that is about to be written.
        """
        if application.uid is None:
            return
        for sectionName in self._getSectionNames():
            if self._configParser.get(sectionName, 'uid') == application.uid \
                    and self._getId(sectionName) != application.id:
                raise UniquenessConflictError('uid', application.uid)

    def _checkOwnerId(self, application):
        """
        :raises ValueError: If the owner id can not be stored.
        :param application: The application that is about to be written.
        """
        if application.ownerId is not None \
                and type(application.ownerId) not in self._OWNER_ID_TYPES.values():
            raise ValueError('Expected the owner id to be of type int or str, got '
                             + str(type(application.ownerId)))

    def _read(self, sectionName):
        data = {'id': self._getId(sectionName)}
        for name, key in self._KEYS:
            value = self._configParser.get(sectionName, key, fallback='')
            if name == 'confidential':
                value = None if value == '' else value == 'true'
            elif value == '' and name != 'scopes':
                value = None
            data[name] = value
        if data['ownerId'] is not None:
            ownerIdType = self._configParser.get(sectionName, 'owner_id_type', fallback='str')
            data['ownerId'] = self._OWNER_ID_TYPES[ownerIdType](data['ownerId'])
        return Application.fromDict(data)

    def _write(self, application):
        sectionName = self._getSectionName(application.id)
        data = application.toDict()
        for name, key in self._KEYS:
            value = data[name]
            if isinstance(value, bool):
                value = 'true' if value else 'false'
            self._configParser.set(sectionName, key, '' if value is None else str(value))
        self._configParser.set(sectionName, 'owner_id_type', '' if data['ownerId'] is None
                               else type(data['ownerId']).__name__)
        self._save()

    def _save(self):
        if not os.path.exists(os.path.dirname(self.path)):
            os.makedirs(os.path.dirname(self.path))
        with open(self.path, 'w') as configFile:
            self._configParser.write(configFile)


class _DictApplicationRecordStorage(object):
    """
    A storage for tokens or grants that does not implement any type of persistence.
    This implementation should probably only be used for testing.
    """

    def __init__(self):
        super(_DictApplicationRecordStorage, self).__init__()
        self._lock = threading.RLock()
        self._records = []

    def add(self, record):
        with self._lock:
            self._records.append(record)

    def revokeAllFor(self, applicationId, resourceOwner):
        resourceOwnerId = None if resourceOwner is None else resourceOwner.id
        for record in self.findAllBy(applicationId, resourceOwnerId, revoked=False):
            record.revoke()

    def findAllBy(self, applicationId=None, resourceOwnerId=None, revoked=None):
        with self._lock:
            return [record for record in self._records
                    if (applicationId is None or record.applicationId == applicationId)
                    and (resourceOwnerId is None or record.resourceOwnerId == resourceOwnerId)
                    and (revoked is None or record.isRevoked() == revoked)]

    def removeAllFor(self, applicationId):
        with self._lock:
            remaining = [record for record in self._records
                         if record.applicationId != applicationId]
            removed = len(self._records) - len(remaining)
            self._records = remaining
            return removed

    def count(self):
        with self._lock:
            return len(self._records)


class DictAccessTokenStorage(_DictApplicationRecordStorage, AccessTokenStorage):
    """ An AccessTokenStorage that keeps the tokens in memory. """


class DictAccessGrantStorage(_DictApplicationRecordStorage, AccessGrantStorage):
    """ An AccessGrantStorage that keeps the grants in memory. """
