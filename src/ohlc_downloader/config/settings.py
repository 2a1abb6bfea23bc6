"""Configuration management for the OHLC downloader."""
from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

try:  # pragma: no cover - import shim for Python < 3.11
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore[no-redef]

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class BinanceSettings(BaseModel):
    """Public Binance REST endpoints. No credentials are needed for market data."""

    base_url: str | None = Field(None, description="Optional override for the spot REST endpoint")
    futures_url: str | None = Field(None, description="Optional override for the USD-M futures REST endpoint")
    request_timeout: int = Field(20, ge=1, description="Seconds before an HTTP request is abandoned")


class DownloadSettings(BaseModel):
    """Defaults applied to a download when the caller leaves them unset."""

    request_delay_ms: int = Field(200, ge=0, description="Pause between consecutive page requests")
    output_dir: Path = Field(Path("."))
    default_interval: str = Field("1h")
    default_market: Literal["spot", "futures"] = Field("spot")
    default_format: Literal["csv", "json"] = Field("csv")


class AppSettings(BaseSettings):
    """Application-wide configuration composed from individual domains."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_nested_delimiter="__",
        env_file=".env",
    )

    binance: BinanceSettings = BinanceSettings()
    download: DownloadSettings = DownloadSettings()


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """Load settings from a TOML file, falling back to environment variables.

    The fallback only applies to the default location; an explicit path must exist.
    """

    if path is None:
        path = Path("config/settings.toml")
    elif not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    if path.exists():
        raw_data = tomllib.loads(path.read_text())
        return AppSettings.model_validate(raw_data)

    try:
        return AppSettings()
    except ValidationError as exc:
        raise RuntimeError(
            f"Unable to load configuration. Provide {path} or the relevant environment variables."
        ) from exc
