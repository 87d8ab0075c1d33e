# Copyright (c) 2020-2025 NASK. All rights reserved.

import logging


TOPLEVEL_LOGGER_NAME = 'normalizer'

# the library itself never configures any handlers
logging.getLogger(TOPLEVEL_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name):
    """
    Get the logger for the given module name (to be called with
    `__name__` at the module level).

    >>> get_logger('normalizer.schema._schema').name
    'normalizer.schema._schema'
    """
    return logging.getLogger(name)
