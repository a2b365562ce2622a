"""Tests for configuration."""

from pathlib import Path

from carbonmap.core.config import Settings, get_project_root


class TestGetProjectRoot:
    """Tests for the get_project_root function."""

    def test_returns_path_object(self):
        assert isinstance(get_project_root(), Path)

    def test_contains_pyproject(self):
        root = get_project_root()
        assert (root / "pyproject.toml").exists() or (root / ".git").exists()

    def test_returns_same_path_on_multiple_calls(self):
        assert get_project_root() == get_project_root()


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        for var in ["FRONTEND_ORIGIN", "PORT", "DEBUG", "EAGER_GEE_INIT", "GEE_PROJECT_ID"]:
            monkeypatch.delenv(var, raising=False)

        settings = Settings(_env_file=None)

        assert settings.frontend_origin == "*"
        assert settings.port == 4000
        assert settings.debug is False
        assert settings.eager_gee_init is False
        assert settings.gee_project_id is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FRONTEND_ORIGIN", "https://example.org")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("GEE_SERVICE_ACCOUNT_KEY", '{"client_email": "a@b"}')

        settings = Settings(_env_file=None)

        assert settings.frontend_origin == "https://example.org"
        assert settings.port == 8080
        assert settings.debug is True
        assert settings.gee_service_account_key == '{"client_email": "a@b"}'
