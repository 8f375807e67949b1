"""Tests for application settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from infrastructure.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("MONOMER_LIBRARY_PATH", "SEQUENCE_STRICT_MODE", "LOG_DIR"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.monomer_library_path.name == "default_monomers.yaml"
        assert settings.monomer_library_path.exists()
        assert settings.sequence_strict_mode is False
        assert settings.log_dir is None

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("MONOMER_LIBRARY_PATH", str(tmp_path / "lib.yaml"))
        monkeypatch.setenv("SEQUENCE_STRICT_MODE", "true")
        monkeypatch.setenv("APP_ENV", "production")

        settings = Settings(_env_file=None)

        assert settings.monomer_library_path == tmp_path / "lib.yaml"
        assert settings.sequence_strict_mode is True
        assert settings.app_env == "production"
