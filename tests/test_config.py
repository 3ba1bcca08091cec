"""Tests for configuration and initialization."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from knit_core import KnitConfig, current_config, get_config, init
from knit_core._config import _detect_json_logs, _detect_log_level, _detect_memo_maxsize
from knit_core._logging import logging_enabled


class TestKnitConfig:
    """Tests for the KnitConfig dataclass."""

    def test_default_values(self) -> None:
        config = KnitConfig()
        assert config.log_level is None
        assert config.json_logs is True
        assert config.memo_maxsize is None

    def test_config_is_frozen(self) -> None:
        config = KnitConfig()
        with pytest.raises(AttributeError):
            config.memo_maxsize = 8  # type: ignore[misc]


class TestDetectFromEnvironment:
    """Tests for the environment readers."""

    def test_log_level_env(self) -> None:
        with patch.dict(os.environ, {'KNIT_LOG_LEVEL': 'debug'}):
            assert _detect_log_level() == 'DEBUG'

    def test_log_level_unset(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_log_level() is None

    def test_log_level_unknown(self) -> None:
        with patch.dict(os.environ, {'KNIT_LOG_LEVEL': 'chatty'}):
            assert _detect_log_level() is None

    def test_log_format_env(self) -> None:
        with patch.dict(os.environ, {'KNIT_LOG_FORMAT': 'console'}):
            assert _detect_json_logs() is False
        with patch.dict(os.environ, {'KNIT_LOG_FORMAT': 'JSON'}):
            assert _detect_json_logs() is True
        with patch.dict(os.environ, {'KNIT_LOG_FORMAT': 'xml'}):
            assert _detect_json_logs() is True

    def test_memo_maxsize_env(self) -> None:
        with patch.dict(os.environ, {'KNIT_MEMO_MAXSIZE': '512'}):
            assert _detect_memo_maxsize() == 512
        with patch.dict(os.environ, {'KNIT_MEMO_MAXSIZE': 'none'}):
            assert _detect_memo_maxsize() is None
        with patch.dict(os.environ, {'KNIT_MEMO_MAXSIZE': 'lots'}):
            assert _detect_memo_maxsize() is None
        with patch.dict(os.environ, {'KNIT_MEMO_MAXSIZE': '0'}):
            assert _detect_memo_maxsize() is None


class TestInit:
    """Tests for init(), get_config(), and current_config()."""

    def test_get_config_before_init_raises(self) -> None:
        with pytest.raises(RuntimeError, match='not initialized'):
            get_config()

    def test_current_config_before_init_is_default(self) -> None:
        assert current_config() == KnitConfig()

    def test_init_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = init()
        assert config == KnitConfig()
        assert get_config() is config
        assert logging_enabled() is False

    def test_init_explicit_values(self) -> None:
        config = init('info', json_logs=False, memo_maxsize=64)
        assert config == KnitConfig(log_level='INFO', json_logs=False, memo_maxsize=64)
        assert current_config() is config
        assert logging_enabled() is True

    def test_explicit_arguments_beat_environment(self) -> None:
        env = {'KNIT_LOG_LEVEL': 'ERROR', 'KNIT_MEMO_MAXSIZE': '10'}
        with patch.dict(os.environ, env):
            config = init('WARNING', memo_maxsize=None)
        assert config.log_level == 'WARNING'
        assert config.memo_maxsize is None

    def test_environment_used_when_not_given(self) -> None:
        env = {'KNIT_LOG_LEVEL': 'ERROR', 'KNIT_LOG_FORMAT': 'console', 'KNIT_MEMO_MAXSIZE': '10'}
        with patch.dict(os.environ, env):
            config = init()
        assert config == KnitConfig(log_level='ERROR', json_logs=False, memo_maxsize=10)

    def test_invalid_maxsize_rejected(self) -> None:
        with pytest.raises(ValueError):
            init(memo_maxsize=0)
