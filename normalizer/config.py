# Copyright (c) 2020-2025 NASK. All rights reserved.

"""
Configuration of the *normalizer* library.

The configuration is read from INI files named ``normalizer.conf``,
looked up in :data:`ETC_DIR` and then in :data:`USER_DIR` (options
from a later file override those from an earlier one).  Only the
``[normalizer]`` section is taken into account:

.. code-block:: ini

    [normalizer]
    # the maximum nesting depth of a schema (maps/lists within maps)
    max_depth = 32

If no file exists, the defaults are used.
"""

import configparser
import functools
import os.path as osp

from normalizer.log_helpers import get_logger


LOGGER = get_logger(__name__)


ETC_DIR = '/etc/normalizer'
USER_DIR = osp.expanduser('~/.normalizer')

CONFIG_FILE_NAME = 'normalizer.conf'
CONFIG_SECTION_NAME = 'normalizer'

DEFAULT_MAX_DEPTH = 32


class ConfigError(Exception):

    """
    Raised when the configuration cannot be parsed or contains
    an illegal value.

    >>> str(ConfigError('foo', 'bar'))
    'foo bar'
    """

    def __str__(self):
        return ' '.join(map(str, self.args))


class NormalizerConfig(object):

    """
    Holds the (already converted) options of the ``[normalizer]``
    configuration section.

    >>> NormalizerConfig().max_depth
    32
    >>> NormalizerConfig.from_string('''
    ... [normalizer]
    ... max_depth = 5
    ... ''').max_depth
    5
    """

    def __init__(self, max_depth=DEFAULT_MAX_DEPTH):
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ConfigError(
                'option "max_depth" should be an integer '
                'not lesser than 1 (got: {!a})'.format(max_depth))
        self.max_depth = max_depth

    def __repr__(self):
        return '{}(max_depth={!r})'.format(self.__class__.__qualname__,
                                           self.max_depth)

    @classmethod
    def from_files(cls, paths=None):
        """
        Make an instance from the given (or the default) configuration
        file paths; files that do not exist are silently skipped.
        """
        if paths is None:
            paths = [osp.join(config_dir, CONFIG_FILE_NAME)
                     for config_dir in (ETC_DIR, USER_DIR)]
        parser = configparser.ConfigParser()
        try:
            loaded_paths = parser.read(paths, encoding='utf-8')
        except configparser.Error as exc:
            raise ConfigError('cannot parse the configuration ({})'.format(exc)) from exc
        if loaded_paths:
            LOGGER.info('normalizer configuration loaded from %s',
                        ', '.join(map(repr, loaded_paths)))
        return cls._from_parser(parser)

    @classmethod
    def from_string(cls, config_string):
        """Make an instance from the given INI-formatted string."""
        parser = configparser.ConfigParser()
        try:
            parser.read_string(config_string)
        except configparser.Error as exc:
            raise ConfigError('cannot parse the configuration ({})'.format(exc)) from exc
        return cls._from_parser(parser)

    @classmethod
    def _from_parser(cls, parser):
        if not parser.has_section(CONFIG_SECTION_NAME):
            return cls()
        section = parser[CONFIG_SECTION_NAME]
        try:
            max_depth = section.getint('max_depth', fallback=DEFAULT_MAX_DEPTH)
        except ValueError as exc:
            raise ConfigError(
                'option "max_depth" in section [{}] is not '
                'a valid integer ({})'.format(CONFIG_SECTION_NAME, exc)) from None
        return cls(max_depth=max_depth)


@functools.lru_cache(maxsize=None)
def get_config():
    """
    Get the (cached) :class:`NormalizerConfig` read from the default
    configuration file paths.
    """
    return NormalizerConfig.from_files()
