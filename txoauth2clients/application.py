# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Classes for representing and storing applications, the registered oauth2 clients. """

from abc import ABCMeta, abstractmethod

from txoauth2clients.util import isAnyStr


class Application(object):
    """
    This class represents an application, a client which is registered with the server.

    An application is identified by its uid (the client id) and authenticates itself
    with its secret. The secret attribute holds the stored representation of the secret,
    which is a hash if the configured secret strategy hashes secrets.
    The plaintext secret is only available right after the secret was generated
    or verified and is never persisted.
    """
    PERSISTED_ATTRIBUTES = ('id', 'name', 'uid', 'secret', 'redirectUri',
                            'confidential', 'ownerId', 'scopes', 'secretStrategyName')
    _plaintextSecret = None

    def __init__(self, name=None, redirectUri=None, confidential=True, uid=None, secret=None,
                 owner=None, ownerId=None, scopes='', secretStrategyName=None,
                 id=None):  # pylint: disable=redefined-builtin
        """
        :param name: The name of the application.
        :param redirectUri: A list of redirect uris or a string with one uri per line.
        :param confidential: Whether the application can keep its secret confidential.
                             None means undetermined, which is not valid.
        :param uid: The client id. Will be generated on creation if it is blank.
        :param secret: The stored secret. Will be generated on creation if it is blank.
        :param owner: The owner of the application, an object with an id.
        :param ownerId: The id of the owner. Ignored if owner is given.
        :param scopes: The scopes of the application separated by spaces.
        :param secretStrategyName: The name of the secret strategy that transformed the
                                   stored secret or None, if it is not known.
        :param id: The id assigned by the application storage.
        """
        super(Application, self).__init__()
        self.id = id  # pylint: disable=invalid-name
        self.name = name
        self.uid = uid
        self.secret = secret
        self.redirectUri = redirectUri
        self.confidential = confidential
        self.ownerId = ownerId if owner is None else owner.id
        self.scopes = scopes
        self.secretStrategyName = secretStrategyName

    @property
    def redirectUri(self):
        """ The redirect uris of this application, separated by newlines. """
        return self._redirectUri

    @redirectUri.setter
    def redirectUri(self, value):
        if isinstance(value, (list, tuple)):
            for uri in value:
                if not isAnyStr(uri):
                    raise ValueError('Expected the redirect uris to be of type str, got '
                                     + str(type(uri)))
            value = '\n'.join(value)
        elif value is not None and not isAnyStr(value):
            raise ValueError('Expected redirectUri to be a list or a string, got '
                             + str(type(value)))
        self._redirectUri = value

    @property
    def redirectUris(self):
        """ The redirect uris of this application as a list. """
        if self._redirectUri is None:
            return []
        return [uri for uri in self._redirectUri.split('\n') if uri.strip() != '']

    @property
    def plaintextSecret(self):
        """
        The plaintext secret, if it was generated or verified on this instance.
        None for applications that were loaded from a storage.
        """
        return self._plaintextSecret

    def isConfidential(self):
        """
        :return: Whether this application is a confidential client.
        """
        return self.confidential is True

    def isPersisted(self):
        """
        :return: Whether this application has been added to a storage.
        """
        return self.id is not None

    def toDict(self):
        """
        :return: A dict with all attributes of this application that may be persisted.
                 The plaintext secret is never part of it.
        """
        return {name: getattr(self, name) for name in self.PERSISTED_ATTRIBUTES}

    @classmethod
    def fromDict(cls, data):
        """
        :param data: A dict as returned by toDict.
        :return: A new application with the attributes from the dict.
        """
        return cls(**{name: data[name] for name in cls.PERSISTED_ATTRIBUTES if name in data})

    def __eq__(self, other):
        if not isinstance(other, Application):
            return NotImplemented
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return object.__hash__(self) if self.id is None else hash(self.id)

    def __repr__(self):
        return '<Application id={id!r} name={name!r} uid={uid!r}>'.format(
            id=self.id, name=self.name, uid=self.uid)


def setPlaintextSecret(application, plaintextSecret):
    """
    Attach a plaintext secret to an in-memory application instance.
    :param application: The application.
    :param plaintextSecret: The plaintext secret or None to clear it.
    """
    application._plaintextSecret = plaintextSecret  # pylint: disable=protected-access


class ApplicationStorage(metaclass=ABCMeta):
    """
    This class's purpose is to persist applications and give access
    to them via their id or their uid. Implementations must enforce
    the uniqueness of the uid when writing and must only persist the
    attributes returned by Application.toDict. Every returned application
    must be a new instance, so transient state never leaks between callers.
    """

    @abstractmethod
    def add(self, application):
        """
        Persist a new application and assign it an id.
        :raises UniquenessConflictError: If another application already has the same uid.
        :param application: The application to add. Its id attribute will be set.
        """
        raise NotImplementedError()

    @abstractmethod
    def update(self, application):
        """
        Persist the changed attributes of a stored application.
        :raises KeyError: If the application is not in the storage.
        :raises UniquenessConflictError: If another application already has the same uid.
        :param application: The application to update.
        """
        raise NotImplementedError()

    @abstractmethod
    def remove(self, applicationId):
        """
        Remove an application from the storage.
        :raises KeyError: If no application with the given id exists.
        :param applicationId: The id of the application.
        """
        raise NotImplementedError()

    @abstractmethod
    def getApplication(self, applicationId):
        """
        :raises KeyError: If no application with the given id exists.
        :param applicationId: The id of the application.
        :return: The application.
        """
        raise NotImplementedError()

    @abstractmethod
    def getApplicationByUid(self, uid):
        """
        :raises KeyError: If no application with the given uid exists.
        :param uid: The uid (client id) of the application.
        :return: The application.
        """
        raise NotImplementedError()

    @abstractmethod
    def getApplications(self):
        """
        :return: A list of all applications in the order they were added.
        """
        raise NotImplementedError()
