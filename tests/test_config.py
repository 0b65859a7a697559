"""Tests for configuration loading."""

import pytest

from peg_config import DEFAULTS, load_config


class TestLoadConfig:

    def test_defaults(self):
        config = load_config({})
        assert config['port'] == DEFAULTS['port']
        assert config['debug'] is False
        assert len(config['secret_key']) == 32

    def test_environment_overrides(self):
        config = load_config({
            'PEG_PORT': '8080',
            'PEG_DEBUG': 'yes',
            'PEG_SECRET_KEY': 'abc',
            'PEG_LOG_LEVEL': 'debug',
        })
        assert config['port'] == 8080
        assert config['debug'] is True
        assert config['secret_key'] == 'abc'
        assert config['log_level'] == 'DEBUG'

    def test_bad_port(self):
        with pytest.raises(ValueError, match="PEG_PORT"):
            load_config({'PEG_PORT': 'eighty'})

    def test_import_ignores_bad_environment(self, monkeypatch):
        import importlib

        import peg_config

        monkeypatch.setenv('PEG_PORT', 'eighty')
        importlib.reload(peg_config)
        with pytest.raises(ValueError):
            peg_config.load_config()
