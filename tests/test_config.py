"""
Unit tests for kickstart.config module
"""
import unittest
import tempfile
import os
import shutil
import json
import logging
from pathlib import Path
from unittest.mock import patch

from rich.logging import RichHandler

from kickstart.config import (
    load_config,
    generate_config_example,
    get_default_config,
    merge_configs,
    apply_logging_config,
    logger,
)


class TestConfigManagement(unittest.TestCase):
    """Test configuration management functionality"""

    def setUp(self):
        """Set up test environment"""
        self.temp_dir = tempfile.mkdtemp()
        self.env = patch.dict(os.environ, {'HOME': self.temp_dir})
        self.env.start()
        for key in [k for k in os.environ if k.startswith('KICKSTART_')]:
            del os.environ[key]

    def tearDown(self):
        """Clean up test environment"""
        self.env.stop()
        shutil.rmtree(self.temp_dir)

    def test_get_default_config(self):
        """Test default configuration structure"""
        config = get_default_config()

        self.assertEqual(config['templates']['default_org'], 'preactjs-templates')
        self.assertEqual(config['templates']['default_site'], 'github')
        self.assertIn('timeout_seconds', config['fetch'])
        self.assertTrue(config['create']['install'])
        self.assertFalse(config['create']['use_yarn'])
        self.assertIn('level', config['logging'])

    def test_load_config_no_file(self):
        """Test loading config when no file exists"""
        self.assertEqual(load_config(), get_default_config())

    def test_load_config_json_file(self):
        """Test loading config from JSON file"""
        config_path = Path(self.temp_dir) / '.kickstartrc'
        with open(config_path, 'w') as f:
            json.dump({'templates': {'default_org': 'acme'}, 'logging': {'level': 'DEBUG'}}, f)

        config = load_config()

        self.assertEqual(config['templates']['default_org'], 'acme')
        self.assertEqual(config['templates']['default_ref'], 'master')
        self.assertEqual(config['logging']['level'], 'DEBUG')

    def test_load_config_toml_file(self):
        """Test loading config from TOML file"""
        config_content = """
[create]
use_yarn = true

[fetch]
timeout_seconds = 5
"""
        config_path = Path(self.temp_dir) / '.kickstartrc.toml'
        config_path.write_text(config_content)

        config = load_config()

        self.assertTrue(config['create']['use_yarn'])
        self.assertEqual(config['fetch']['timeout_seconds'], 5)

    def test_malformed_file_falls_back_to_defaults(self):
        """A broken config file is ignored"""
        (Path(self.temp_dir) / '.kickstartrc').write_text('{not json')

        with self.assertLogs('rich', level='WARNING'):
            config = load_config()

        self.assertEqual(config, get_default_config())

    def test_environment_override(self):
        """Test environment variable override"""
        with patch.dict(os.environ, {
            'KICKSTART_CREATE_INSTALL': 'false',
            'KICKSTART_FETCH_TIMEOUT_SECONDS': '7',
            'KICKSTART_TEMPLATES_DEFAULT_ORG': 'acme',
        }):
            config = load_config()

        self.assertFalse(config['create']['install'])
        self.assertEqual(config['fetch']['timeout_seconds'], 7)
        self.assertEqual(config['templates']['default_org'], 'acme')

    def test_apply_logging_config(self):
        """Level and message format are taken from the logging section"""
        handler = RichHandler()
        handlers = patch.object(logging.getLogger(), 'handlers', [handler])
        handlers.start()
        self.addCleanup(handlers.stop)
        self.addCleanup(logger.setLevel, logger.level)

        apply_logging_config({'logging': {'level': 'WARNING', 'format': '%(name)s: %(message)s'}})

        self.assertEqual(logger.level, logging.WARNING)
        record = logging.LogRecord('rich', logging.WARNING, __file__, 1, 'hello', None, None)
        self.assertEqual(handler.formatter.format(record), 'rich: hello')

    def test_apply_logging_config_verbose(self):
        """Verbose mode forces DEBUG"""
        self.addCleanup(logger.setLevel, logger.level)

        apply_logging_config(get_default_config(), verbose=True)

        self.assertEqual(logger.level, logging.DEBUG)

    @patch('kickstart.config.console')
    def test_generate_config_example(self, mock_console):
        """Test config example generation"""
        generate_config_example()

        config_path = Path(self.temp_dir) / '.kickstartrc.example'
        self.assertTrue(config_path.exists())

        mock_console.print.assert_called()
        call_args = mock_console.print.call_args_list[0][0][0]
        self.assertIn('example configuration file has been saved', call_args.lower())


class TestConfigValidation(unittest.TestCase):
    """Test configuration merging"""

    def test_merge_configs(self):
        """Test configuration merging"""
        base_config = {
            'fetch': {'timeout_seconds': 30, 'cache_dir': '~/.cache'},
            'logging': {'level': 'INFO'}
        }

        override_config = {
            'fetch': {'timeout_seconds': 5},
            'new_section': {'key': 'value'}
        }

        merged = merge_configs(base_config, override_config)

        self.assertEqual(merged['fetch']['cache_dir'], '~/.cache')
        self.assertEqual(merged['logging']['level'], 'INFO')
        self.assertEqual(merged['fetch']['timeout_seconds'], 5)
        self.assertEqual(merged['new_section']['key'], 'value')
        # Inputs are left alone
        self.assertEqual(base_config['fetch']['timeout_seconds'], 30)


if __name__ == '__main__':
    unittest.main()
