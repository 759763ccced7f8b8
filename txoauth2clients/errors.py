# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" All errors raised while managing applications and their credentials. """


class ApplicationError(Exception):
    """ Base class of all errors raised by this library. """


class ValidationError(ApplicationError):
    """
    One or more validation rules failed for an application.
    The application was not persisted.
    """
    application = None
    errors = None

    def __init__(self, application, errors):
        """
        :param application: The application that failed validation.
        :param errors: A dict mapping the name of each invalid field to a message.
        """
        super(ValidationError, self).__init__('Validation failed: ' + ', '.join(
            '{field} {message}'.format(field=field, message=message)
            for field, message in errors.items()))
        self.application = application
        self.errors = dict(errors)

    @property
    def fields(self):
        """
        :return: The names of the fields that failed validation.
        """
        return list(self.errors.keys())


class UniquenessConflictError(ApplicationError):
    """
    A storage refused to write a record, because another record already uses
    the same value for a unique field. This usually means two concurrent creates
    raced on the same generated value. The caller may regenerate and retry.
    """
    retryable = True

    def __init__(self, field, value):
        """
        :param field: The name of the unique field.
        :param value: The conflicting value.
        """
        super(UniquenessConflictError, self).__init__(
            'An application with {field} "{value}" already exists'.format(field=field, value=value))
        self.field = field
        self.value = value


class ConfigurationError(ApplicationError):
    """ The configuration can not be used. This error is fatal. """
