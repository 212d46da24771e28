"""
Unit Tests for environment configuration
"""
import pytest

from maintenance_portal.config.settings import Settings

RENAMED = [
    ("APP_NAME", "PROJECT_NAME", "Residence Repairs", "Residence Repairs"),
    ("CORS_ORIGINS", "BACKEND_CORS_ORIGINS", "http://a.campus.edu", "http://a.campus.edu"),
    ("MAX_IMAGE_SIZE", "MAX_FILE_SIZE", "1000", 1000),
    ("SMTP_USER", "SMTP_USERNAME", "mailer", "mailer"),
    ("EMAIL_FROM_ADDRESS", "FROM_EMAIL", "desk@campus.edu", "desk@campus.edu"),
]


@pytest.fixture
def clean_env(monkeypatch):
    for name, legacy, _, _ in RENAMED:
        monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv(legacy, raising=False)
    return monkeypatch


class TestSettingsNames:

    @pytest.mark.parametrize("name, legacy, raw, expected", RENAMED)
    def test_reads_documented_name(self, clean_env, name, legacy, raw, expected):
        clean_env.setenv(name, raw)
        assert getattr(Settings(), name) == expected

    @pytest.mark.parametrize("name, legacy, raw, expected", RENAMED)
    def test_reads_legacy_name(self, clean_env, name, legacy, raw, expected):
        clean_env.setenv(legacy, raw)
        assert getattr(Settings(), name) == expected

    def test_documented_name_wins(self, clean_env):
        clean_env.setenv("MAX_IMAGE_SIZE", "1000")
        clean_env.setenv("MAX_FILE_SIZE", "2000")
        assert Settings().MAX_IMAGE_SIZE == 1000

    def test_defaults(self, clean_env):
        config = Settings()
        assert config.MAX_IMAGE_SIZE == 5 * 1024 * 1024
        assert config.get_cors_origins() == ["*"]
        assert config.SMTP_USER is None


class TestSettingsHelpers:

    def test_cors_origins_are_split(self, clean_env):
        clean_env.setenv("CORS_ORIGINS", "http://a.campus.edu, http://b.campus.edu,")
        assert Settings().get_cors_origins() == ["http://a.campus.edu", "http://b.campus.edu"]

    def test_is_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert Settings().is_production()
