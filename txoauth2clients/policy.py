# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" The rules an application must satisfy before it can be persisted. """

from collections import OrderedDict
from urllib.parse import urlparse

from txoauth2clients.errors import ValidationError
from txoauth2clients.util import isBlank

NATIVE_REDIRECT_URI = 'urn:ietf:wg:oauth:2.0:oob'


class AuthorizationPolicy(object):
    """ Decides whether an application is valid. """

    def __init__(self, applicationStorage, configuration):
        """
        :param applicationStorage: The storage that is used to check the uniqueness of uids.
        :param configuration: The configuration which defines
                              whether applications need an owner.
        """
        super(AuthorizationPolicy, self).__init__()
        self._applicationStorage = applicationStorage
        self._configuration = configuration

    def getErrors(self, application):
        """
        :param application: The application to check.
        :return: A dict mapping the name of every invalid field to an error message.
                 The dict is empty if the application is valid.
        """
        errors = OrderedDict()
        if isBlank(application.name):
            errors['name'] = "can't be blank"
        if application.confidential not in (True, False):
            errors['confidential'] = 'must be true or false'
        if isBlank(application.uid):
            errors['uid'] = "can't be blank"
        elif not self._isUidUnique(application):
            errors['uid'] = 'has already been taken'
        if isBlank(application.secret):
            errors['secret'] = "can't be blank"
        if isBlank(application.redirectUri):
            errors['redirectUri'] = "can't be blank"
        else:
            for uri in application.redirectUris:
                message = self._checkRedirectUri(uri)
                if message is not None:
                    errors['redirectUri'] = message
                    break
        if self._configuration.confirmApplicationOwner and application.ownerId is None:
            errors['owner'] = "can't be blank"
        return errors

    def isValid(self, application):
        """
        :param application: The application to check.
        :return: Whether the application satisfies all rules.
        """
        return len(self.getErrors(application)) == 0

    def validate(self, application):
        """
        :raises ValidationError: If the application violates one or more rules.
        :param application: The application to check.
        """
        errors = self.getErrors(application)
        if len(errors) != 0:
            raise ValidationError(application, errors)

    def _isUidUnique(self, application):
        try:
            other = self._applicationStorage.getApplicationByUid(application.uid)
        except KeyError:
            return True
        return application.id is not None and other.id == application.id

    @staticmethod
    def _checkRedirectUri(uri):
        """
        :param uri: A redirect uri.
        :return: An error message if the uri is not a valid redirect uri, None otherwise.
        """
        if uri == NATIVE_REDIRECT_URI:
            return None
        parsedUri = urlparse(uri)
        if parsedUri.fragment != '':
            return 'must not contain a fragment: ' + uri
        if parsedUri.scheme == '' or parsedUri.netloc == '':
            return 'must be an absolute uri: ' + uri
        return None
