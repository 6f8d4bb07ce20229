"""Tests for configuration loading."""

import os
from unittest.mock import patch

import pytest

from hubcrm.config import (
    DEFAULT_CRM_BASE_URL,
    DEFAULT_OAUTH_BASE_URL,
    CRMConfig,
    OAuthConfig,
    get_log_level,
    load_env,
)
from hubcrm.connectors.base import ConfigurationError


class TestCRMConfig:
    """Tests for CRMConfig."""

    def test_defaults(self):
        config = CRMConfig()
        assert config.base_url == DEFAULT_CRM_BASE_URL
        assert config.static_token is None
        assert config.objects_url == "https://api.hubapi.com/crm/v3/objects"
        assert config.owners_url == "https://api.hubapi.com/crm/v3/owners"

    def test_trailing_slash_stripped(self):
        assert CRMConfig(base_url="https://x.test/crm/v3/").objects_url == "https://x.test/crm/v3/objects"

    def test_empty_base_url_rejected(self):
        with pytest.raises(ConfigurationError):
            CRMConfig(base_url="")

    def test_frozen(self):
        config = CRMConfig()
        with pytest.raises(Exception):
            config.account_id = "1"

    def test_from_env(self):
        env = {
            "HUBCRM_ACCOUNT_ID": "42",
            "HUBCRM_BASE_URL": "https://x.test/crm/v3",
            "HUBCRM_STATIC_TOKEN": "static",
            "HUBCRM_TIMEOUT_S": "5",
        }
        with patch.dict(os.environ, env, clear=True):
            config = CRMConfig.from_env()
        assert config.account_id == "42"
        assert config.base_url == "https://x.test/crm/v3"
        assert config.static_token == "static"
        assert config.policy.read_timeout == 5.0

    def test_from_env_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            config = CRMConfig.from_env()
        assert config.account_id == ""
        assert config.static_token is None

    def test_bad_timeout(self):
        with patch.dict(os.environ, {"HUBCRM_TIMEOUT_S": "fast"}, clear=True):
            with pytest.raises(ConfigurationError):
                CRMConfig.from_env()


class TestOAuthConfig:
    """Tests for OAuthConfig."""

    def test_urls(self):
        config = OAuthConfig(client_id="id", client_secret="secret")
        assert config.token_url == f"{DEFAULT_OAUTH_BASE_URL}/token"
        assert config.refresh_token_url("r") == f"{DEFAULT_OAUTH_BASE_URL}/refresh-tokens/r"

    def test_refresh_token_is_one_path_segment(self):
        config = OAuthConfig(client_id="id", client_secret="secret")
        assert config.refresh_token_url("a/b#c") == f"{DEFAULT_OAUTH_BASE_URL}/refresh-tokens/a%2Fb%23c"

    def test_repr_hides_secret(self):
        assert "secret-value" not in repr(OAuthConfig(client_id="id", client_secret="secret-value"))

    def test_from_env(self):
        env = {
            "HUBCRM_OAUTH_CLIENT_ID": "id",
            "HUBCRM_OAUTH_CLIENT_SECRET": "secret",
            "HUBCRM_OAUTH_REDIRECT_URL": "https://app.test/cb",
            "HUBCRM_OAUTH_SETUP_URL": "https://app.test/setup",
        }
        with patch.dict(os.environ, env, clear=True):
            config = OAuthConfig.from_env()
        assert config.client_id == "id"
        assert config.redirect_url == "https://app.test/cb"
        assert config.setup_url == "https://app.test/setup"
        assert config.base_url == DEFAULT_OAUTH_BASE_URL

    def test_from_env_missing_credentials(self):
        with patch.dict(os.environ, {"HUBCRM_OAUTH_CLIENT_ID": "id"}, clear=True):
            with pytest.raises(ConfigurationError):
                OAuthConfig.from_env()


class TestEnvLoading:
    def test_load_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("HUBCRM_ACCOUNT_ID=777\n")
        with patch.dict(os.environ, {}, clear=True):
            load_env(env_file)
            assert CRMConfig.from_env().account_id == "777"

    def test_existing_env_wins(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("HUBCRM_ACCOUNT_ID=777\n")
        with patch.dict(os.environ, {"HUBCRM_ACCOUNT_ID": "1"}, clear=True):
            load_env(env_file)
            assert os.environ["HUBCRM_ACCOUNT_ID"] == "1"

    def test_missing_file_is_ignored(self, tmp_path):
        load_env(tmp_path / "absent.env")

    def test_log_level(self):
        with patch.dict(os.environ, {"HUBCRM_LOG_LEVEL": "debug"}, clear=True):
            assert get_log_level() == "DEBUG"
        with patch.dict(os.environ, {}, clear=True):
            assert get_log_level() == "WARNING"

    def test_invalid_log_level(self):
        with patch.dict(os.environ, {"HUBCRM_LOG_LEVEL": "verbose"}, clear=True):
            with pytest.raises(ConfigurationError):
                get_log_level()
