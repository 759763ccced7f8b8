# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Utility methods. """


def isAnyStr(val):
    """
    :param val: The value to check
    :return: If it is a string value.
    """
    return isinstance(val, str)


def isBlank(val):
    """
    :param val: The value to check.
    :return: True if the value is None or a string that only contains whitespace.
    """
    return val is None or (isAnyStr(val) and val.strip() == '')
