# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" The configuration of the application credential handling. """

import os
import warnings

from configparser import RawConfigParser

from txoauth2clients.errors import ConfigurationError
from txoauth2clients.secretstoring import Plain, getStrategy


class Configuration(object):
    """
    An immutable configuration. It is created once at startup and passed
    to the components that need it. Use replace to derive a modified configuration.
    """
    _FIELDS = ('secretStrategy', 'fallbackSecretStrategy',
               'confirmApplicationOwner', 'upgradeFallbackSecrets')

    def __init__(self, secretStrategy=None, fallbackSecretStrategy=None,
                 confirmApplicationOwner=False, upgradeFallbackSecrets=False):
        """
        :raises ConfigurationError: If one of the strategies is unknown or can not be used.
        :param secretStrategy: The strategy used to store new application secrets,
                               as a SecretStrategy or its name. Defaults to storing
                               the secrets in plaintext.
        :param fallbackSecretStrategy: An optional strategy that is only used to verify
                                       secrets which were stored before the secret strategy
                                       was changed.
        :param confirmApplicationOwner: Whether every application must have an owner.
        :param upgradeFallbackSecrets: Whether to rewrite a secret with the current strategy
                                       after it was verified with the fallback strategy.
        """
        secretStrategy = Plain() if secretStrategy is None else getStrategy(secretStrategy)
        secretStrategy.validateFor('application')
        if fallbackSecretStrategy is not None:
            fallbackSecretStrategy = getStrategy(fallbackSecretStrategy)
            fallbackSecretStrategy.validateFor('application')
            if fallbackSecretStrategy == secretStrategy:
                warnings.warn('The fallback secret strategy {strategy!r} is the same as the '
                              'secret strategy and will never match a secret.'
                              .format(strategy=fallbackSecretStrategy), RuntimeWarning)
        if not isinstance(confirmApplicationOwner, bool):
            raise ConfigurationError('Expected confirmApplicationOwner to be a bool')
        if not isinstance(upgradeFallbackSecrets, bool):
            raise ConfigurationError('Expected upgradeFallbackSecrets to be a bool')
        object.__setattr__(self, '_secretStrategy', secretStrategy)
        object.__setattr__(self, '_fallbackSecretStrategy', fallbackSecretStrategy)
        object.__setattr__(self, '_confirmApplicationOwner', confirmApplicationOwner)
        object.__setattr__(self, '_upgradeFallbackSecrets', upgradeFallbackSecrets)

    @property
    def secretStrategy(self):
        """ The strategy used to transform all new secrets. """
        return self._secretStrategy

    @property
    def fallbackSecretStrategy(self):
        """ The strategy used to verify secrets that don't match the secretStrategy, or None. """
        return self._fallbackSecretStrategy

    @property
    def confirmApplicationOwner(self):
        """ Whether applications are only valid if they have an owner. """
        return self._confirmApplicationOwner

    @property
    def upgradeFallbackSecrets(self):
        """ Whether secrets verified by the fallback strategy get rewritten. """
        return self._upgradeFallbackSecrets

    def __setattr__(self, name, value):
        raise AttributeError('Configuration is immutable')

    def __delattr__(self, name):
        raise AttributeError('Configuration is immutable')

    def __eq__(self, other):
        if not isinstance(other, Configuration):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in self._FIELDS)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in self._FIELDS))

    def __repr__(self):
        return 'Configuration({args})'.format(args=', '.join(
            '{name}={value!r}'.format(name=name, value=getattr(self, name))
            for name in self._FIELDS))

    def replace(self, **changes):
        """
        :param changes: The attributes to change.
        :return: A new configuration with the given attributes changed.
        """
        for name in changes:
            if name not in self._FIELDS:
                raise TypeError('Unknown configuration attribute ' + name)
        attributes = {name: getattr(self, name) for name in self._FIELDS}
        attributes.update(changes)
        return Configuration(**attributes)

    @classmethod
    def fromConfigFile(cls, path, section='applications'):
        """
        Load a configuration from an ini style config file. The section may contain
        the keys secret_strategy, fallback_secret_strategy, confirm_application_owner
        and upgrade_fallback_secrets. Missing keys use their default value.
        :raises ConfigurationError: If the file or the section can not be read
                                    or contains invalid values.
        :param path: The path to the config file.
        :param section: The name of the section to read.
        :return: The configuration.
        """
        configParser = RawConfigParser()
        if not configParser.read(os.path.abspath(path)):
            raise ConfigurationError('Unable to read the config file ' + path)
        if not configParser.has_section(section):
            raise ConfigurationError('The config file {path} has no section "{section}"'
                                     .format(path=path, section=section))
        kwargs = {}
        for key, name in [('secret_strategy', 'secretStrategy'),
                          ('fallback_secret_strategy', 'fallbackSecretStrategy')]:
            value = configParser.get(section, key, fallback='').strip()
            if value != '':
                kwargs[name] = value
        for key, name in [('confirm_application_owner', 'confirmApplicationOwner'),
                          ('upgrade_fallback_secrets', 'upgradeFallbackSecrets')]:
            try:
                kwargs[name] = configParser.getboolean(section, key, fallback=False)
            except ValueError as error:
                raise ConfigurationError('Invalid value for {key}: {error}'
                                         .format(key=key, error=error))
        return cls(**kwargs)
