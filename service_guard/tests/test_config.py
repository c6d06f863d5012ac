"""
Unit tests for configuration loading.
"""

import pytest

from shared.config import GuardConfig, get_config
from shared.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and any .env file."""
    for name in ("CERTS_URL", "AUDIENCE", "HTTP_TIMEOUT", "LOG_LEVEL", "REDIS_URL", "TOKEN_URL"):
        monkeypatch.delenv(f"GUARD_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestGetConfig:
    """Test cases for get_config."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("GUARD_CERTS_URL", "https://issuer.example/certs")
        monkeypatch.setenv("GUARD_AUDIENCE", "jwks-guard")
        monkeypatch.setenv("GUARD_HTTP_TIMEOUT", "2.5")

        config = get_config()

        assert isinstance(config, GuardConfig)
        assert config.certs_url == "https://issuer.example/certs"
        assert config.audience == "jwks-guard"
        assert config.http_timeout == 2.5
        assert config.redis_url is None
        assert config.cache_key_prefix == "jwks:key:"

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text(
            "GUARD_CERTS_URL=http://localhost:8080/certs\nGUARD_AUDIENCE=from-file\n"
        )

        config = get_config()

        assert config.audience == "from-file"

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("GUARD_AUDIENCE", "from-env")

        config = get_config(certs_url="http://localhost/certs", audience="explicit")

        assert config.audience == "explicit"

    def test_missing_required_fields_fail_fast(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_config()

        assert exc_info.value.details["fields"] == ["audience", "certs_url"]

    @pytest.mark.parametrize("url", ["ftp://issuer/certs", "not a url", "http://"])
    def test_rejects_non_http_certs_url(self, url):
        with pytest.raises(ConfigurationError):
            get_config(certs_url=url, audience="jwks-guard")

    def test_rejects_blank_audience(self):
        with pytest.raises(ConfigurationError):
            get_config(certs_url="http://localhost/certs", audience="   ")

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ConfigurationError):
            get_config(certs_url="http://localhost/certs", audience="a", log_level="loud")

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ConfigurationError):
            get_config(certs_url="http://localhost/certs", audience="a", http_timeout=0)
