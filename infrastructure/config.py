from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_ROOT = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # make it absolute so reload/CWD doesn't break it
        env_file=_PACKAGE_ROOT.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="HelmNotation", validation_alias="APP_NAME")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        validation_alias="APP_ENV",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_dir: Path | None = Field(default=None, validation_alias="LOG_DIR")

    # Monomer library
    monomer_library_path: Path = Field(
        default=_PACKAGE_ROOT / "monomer_library" / "default_monomers.yaml",
        validation_alias="MONOMER_LIBRARY_PATH",
    )

    # Sequences
    sequence_strict_mode: bool = Field(default=False, validation_alias="SEQUENCE_STRICT_MODE")

    # API
    api_host: str = Field(default="0.0.0.0", validation_alias="API_HOST")  # noqa: S104
    api_port: int = Field(default=8000, validation_alias="API_PORT")


# Global settings instance
settings = Settings()
