# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for configuration loading."""

import os
import pytest
from awslabs.ambari_mcp_server import config as config_module
from awslabs.ambari_mcp_server.config import (
    BASE_URL_KEY,
    DEFAULT_BASE_URL,
    DEFAULT_PASSWORD,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USERNAME,
    ENV_DEBUG_KEY,
    ENV_PATH_KEY,
    PASSWORD_KEY,
    TIMEOUT_KEY,
    USERNAME_KEY,
    AmbariConfig,
    candidate_env_paths,
    load_config,
    load_env_file,
    parse_timeout,
)
from pydantic import ValidationError
from unittest.mock import patch


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every Ambari setting from the environment."""
    for key in (
        BASE_URL_KEY, USERNAME_KEY, PASSWORD_KEY, TIMEOUT_KEY, ENV_DEBUG_KEY, ENV_PATH_KEY
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


class TestParseTimeout:
    """Test TIMEOUT_MS parsing."""

    def test_missing_uses_default(self):
        """Test that an unset or blank timeout falls back to the default."""
        assert parse_timeout(None) == DEFAULT_TIMEOUT_MS
        assert parse_timeout('  ') == DEFAULT_TIMEOUT_MS

    def test_valid_timeout(self):
        """Test a plain integer timeout."""
        assert parse_timeout('1500') == 1500

    @pytest.mark.parametrize('raw', ['abc', '1.5', '10s'])
    def test_non_integer_rejected(self, raw):
        """Test that a non-integer timeout is a configuration error."""
        with pytest.raises(ValueError, match='must be an integer'):
            parse_timeout(raw)

    @pytest.mark.parametrize('raw', ['0', '-100'])
    def test_non_positive_rejected(self, raw):
        """Test that zero and negative timeouts are rejected."""
        with pytest.raises(ValueError, match='must be positive'):
            parse_timeout(raw)


class TestAmbariConfig:
    """Test the configuration model."""

    def test_timeout_seconds(self):
        """Test millisecond to second conversion."""
        assert AmbariConfig(timeout_ms=2500).timeout_seconds == 2.5

    def test_rejects_non_positive_timeout(self):
        """Test the model-level timeout constraint."""
        with pytest.raises(ValidationError):
            AmbariConfig(timeout_ms=0)

    def test_summary_masks_password(self):
        """Test that the summary never exposes the password."""
        config = AmbariConfig(password='hunter22')  # pragma: allowlist secret
        summary = config.summary()

        assert summary['AMBARI_PASSWORD_MASKED'] == '********'
        assert 'hunter22' not in str(summary)
        assert 'hunter22' not in repr(config)

    def test_config_is_frozen(self):
        """Test that configuration cannot change after startup."""
        config = AmbariConfig()
        with pytest.raises(ValidationError):
            config.base_url = 'http://other'


class TestLoadConfig:
    """Test building configuration from the environment."""

    def test_defaults(self, clean_env):
        """Test that an empty environment yields the development defaults."""
        config = load_config(load_dotenv_file=False)

        assert config.base_url == DEFAULT_BASE_URL
        assert config.username == DEFAULT_USERNAME
        assert config.password == DEFAULT_PASSWORD
        assert config.timeout_ms == DEFAULT_TIMEOUT_MS
        assert config.env_path is None

    def test_environment_values(self, clean_env):
        """Test that environment variables override the defaults."""
        clean_env.setenv(BASE_URL_KEY, 'https://ambari.example.com/api/v1/')
        clean_env.setenv(USERNAME_KEY, 'ops')
        clean_env.setenv(PASSWORD_KEY, 'pw')
        clean_env.setenv(TIMEOUT_KEY, '1000')

        config = load_config(load_dotenv_file=False)

        assert config.base_url == 'https://ambari.example.com/api/v1'
        assert config.username == 'ops'
        assert config.password == 'pw'  # pragma: allowlist secret
        assert config.timeout_ms == 1000

    @patch('awslabs.ambari_mcp_server.config.logger')
    def test_default_fallbacks_warn(self, mock_logger, clean_env):
        """Test that falling back to defaults is reported."""
        load_config(load_dotenv_file=False)

        warnings = ' '.join(str(call.args[0]) for call in mock_logger.warning.call_args_list)
        assert BASE_URL_KEY in warnings
        assert 'default development credentials' in warnings

    @patch('awslabs.ambari_mcp_server.config.logger')
    def test_env_debug_logs_masked_summary(self, mock_logger, clean_env):
        """Test that ENV_DEBUG=1 logs the configuration with the password masked."""
        clean_env.setenv(ENV_DEBUG_KEY, '1')
        clean_env.setenv(PASSWORD_KEY, 'topsecret')
        clean_env.setenv(USERNAME_KEY, 'ops')

        load_config(load_dotenv_file=False)

        messages = ' '.join(str(call.args[0]) for call in mock_logger.info.call_args_list)
        assert 'Configuration summary' in messages
        assert 'topsecret' not in messages

    def test_invalid_timeout_fails(self, clean_env):
        """Test that a bad TIMEOUT_MS stops configuration loading."""
        clean_env.setenv(TIMEOUT_KEY, 'soon')
        with pytest.raises(ValueError):
            load_config(load_dotenv_file=False)


class TestEnvFile:
    """Test .env discovery and loading."""

    def test_candidate_order_with_explicit_path(self, clean_env, tmp_path):
        """Test that AMBARI_ENV_PATH is tried before the default locations."""
        explicit = tmp_path / 'custom.env'
        clean_env.setenv(ENV_PATH_KEY, str(explicit))

        candidates = candidate_env_paths()

        assert candidates[0] == explicit.resolve()
        assert candidates[1:] == [
            config_module.PROJECT_ROOT / '.env',
            config_module.Path.cwd() / '.env',
        ]

    def test_candidate_order_without_explicit_path(self, clean_env):
        """Test the default search order."""
        assert candidate_env_paths() == [
            config_module.PROJECT_ROOT / '.env',
            config_module.Path.cwd() / '.env',
        ]

    def test_loads_explicit_file_without_overriding(self, clean_env, tmp_path):
        """Test loading a .env file where the process environment wins."""
        env_file = tmp_path / 'ambari.env'
        env_file.write_text(
            'AMBARI_TEST_ONLY_MARKER=loaded\nAMBARI_USERNAME=from-file\n', encoding='utf-8'
        )
        clean_env.setenv(ENV_PATH_KEY, str(env_file))
        clean_env.setenv(USERNAME_KEY, 'from-env')

        try:
            loaded = load_env_file()

            assert loaded == str(env_file.resolve())
            assert os.environ['AMBARI_TEST_ONLY_MARKER'] == 'loaded'
            assert os.environ[USERNAME_KEY] == 'from-env'
        finally:
            os.environ.pop('AMBARI_TEST_ONLY_MARKER', None)

    @patch('awslabs.ambari_mcp_server.config.logger')
    def test_missing_file_warns(self, mock_logger, clean_env, tmp_path):
        """Test that a missing .env file is reported and not fatal."""
        clean_env.chdir(tmp_path)
        with patch.object(config_module, 'PROJECT_ROOT', tmp_path / 'missing'):
            assert load_env_file() is None

        mock_logger.warning.assert_called_once()
        assert '.env file not found' in mock_logger.warning.call_args.args[0]

    def test_load_config_records_env_path(self, clean_env, tmp_path):
        """Test that the loaded .env path is kept on the configuration."""
        env_file = tmp_path / 'ambari.env'
        env_file.write_text('', encoding='utf-8')
        clean_env.setenv(ENV_PATH_KEY, str(env_file))

        config = load_config()

        assert config.env_path == str(env_file.resolve())
