# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Generators for client ids and client secrets. """

from abc import ABCMeta, abstractmethod


class IdentifierGenerator(metaclass=ABCMeta):
    """ A generator that can create random identifiers. """

    @abstractmethod
    def generate(self):
        """
        Generate a new identifier. The identifier must be generated from a
        cryptographically secure random source and carry at least 128 bits of entropy,
        so that two generated identifiers practically never collide.
        It is used for client ids as well as for plaintext client secrets.
        :return: A new identifier as a string.
        """
        raise NotImplementedError()

    def getMaximumLength(self):
        """
        :return: The maximum number of ASCII characters of a generated identifier
                 or None, if it is not known.
        """
        return None
