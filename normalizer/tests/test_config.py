# Copyright (c) 2020-2025 NASK. All rights reserved.

import configparser
import os.path as osp
import tempfile
import unittest
from unittest.mock import (
    ANY,
    call,
    patch,
    sentinel as sen,
)

from unittest_expander import expand, foreach, param

from normalizer.config import (
    CONFIG_FILE_NAME,
    DEFAULT_MAX_DEPTH,
    ETC_DIR,
    USER_DIR,
    ConfigError,
    NormalizerConfig,
    get_config,
)


@expand
class TestNormalizerConfig(unittest.TestCase):

    def test_defaults(self):
        config = NormalizerConfig()
        self.assertEqual(config.max_depth, DEFAULT_MAX_DEPTH)
        self.assertEqual(DEFAULT_MAX_DEPTH, 32)

    def test_repr(self):
        self.assertEqual(repr(NormalizerConfig(max_depth=5)),
                         'NormalizerConfig(max_depth=5)')

    @foreach(
        param(0),
        param(-1),
        param(True),
        param('5'),
        param(5.0),
        param(None),
    )
    def test_illegal_max_depth(self, max_depth):
        with self.assertRaises(ConfigError):
            NormalizerConfig(max_depth=max_depth)

    @foreach(
        param(
            config_string='[normalizer]\nmax_depth = 5\n',
            expected_max_depth=5,
        ).label('option given'),
        param(
            config_string='[normalizer]\n',
            expected_max_depth=DEFAULT_MAX_DEPTH,
        ).label('empty section'),
        param(
            config_string='[other]\nmax_depth = 5\n',
            expected_max_depth=DEFAULT_MAX_DEPTH,
        ).label('no section'),
        param(
            config_string='',
            expected_max_depth=DEFAULT_MAX_DEPTH,
        ).label('empty string'),
    )
    def test_from_string(self, config_string, expected_max_depth):
        config = NormalizerConfig.from_string(config_string)
        self.assertEqual(config.max_depth, expected_max_depth)

    @foreach(
        param('[normalizer]\nmax_depth = many\n').label('not an integer'),
        param('[normalizer]\nmax_depth = 0\n').label('too small'),
        param('garbage').label('no section header'),
        param('[normalizer]\nmax_depth = 5\nmax_depth = 6\n').label('duplicate option'),
        param('[normalizer\nmax_depth = 5\n').label('broken section header'),
    )
    def test_from_string_illegal(self, config_string):
        with self.assertRaises(ConfigError):
            NormalizerConfig.from_string(config_string)

    def test_from_files_later_overrides_earlier(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            etc_path = osp.join(tmp_dir, 'etc.conf')
            user_path = osp.join(tmp_dir, 'user.conf')
            nonexistent_path = osp.join(tmp_dir, 'nonexistent.conf')
            with open(etc_path, 'w', encoding='utf-8') as f:
                f.write('[normalizer]\nmax_depth = 10\n')
            with open(user_path, 'w', encoding='utf-8') as f:
                f.write('[normalizer]\nmax_depth = 20\n')
            with patch('normalizer.config.LOGGER') as LOGGER:
                config = NormalizerConfig.from_files(
                    [etc_path, nonexistent_path, user_path])
            self.assertEqual(config.max_depth, 20)
            self.assertEqual(LOGGER.mock_calls, [
                call.info(ANY, '{!r}, {!r}'.format(etc_path, user_path)),
            ])

    def test_from_files_syntax_error(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = osp.join(tmp_dir, 'broken.conf')
            with open(path, 'w', encoding='utf-8') as f:
                f.write('max_depth = 10\n')
            with self.assertRaises(ConfigError) as cm:
                NormalizerConfig.from_files([path])
        self.assertIsInstance(cm.exception.__cause__, configparser.Error)

    def test_from_files_none_exists(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with patch('normalizer.config.LOGGER') as LOGGER:
                config = NormalizerConfig.from_files([osp.join(tmp_dir, 'x.conf')])
        self.assertEqual(config.max_depth, DEFAULT_MAX_DEPTH)
        self.assertEqual(LOGGER.mock_calls, [])

    def test_from_files_default_paths(self):
        with patch('configparser.ConfigParser.read', return_value=[]) as read_mock:
            config = NormalizerConfig.from_files()
        self.assertEqual(config.max_depth, DEFAULT_MAX_DEPTH)
        self.assertEqual(read_mock.mock_calls, [
            call([osp.join(ETC_DIR, CONFIG_FILE_NAME),
                  osp.join(USER_DIR, CONFIG_FILE_NAME)],
                 encoding='utf-8'),
        ])


class Test_get_config(unittest.TestCase):

    def setUp(self):
        get_config.cache_clear()
        self.addCleanup(get_config.cache_clear)

    def test_cached(self):
        with patch.object(NormalizerConfig, 'from_files',
                          return_value=sen.config) as from_files_mock:
            self.assertIs(get_config(), sen.config)
            self.assertIs(get_config(), sen.config)
        self.assertEqual(from_files_mock.mock_calls, [call()])
