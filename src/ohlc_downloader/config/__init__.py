"""Configuration subpackage."""

from ohlc_downloader.config.settings import AppSettings, BinanceSettings, DownloadSettings, load_settings

__all__ = ["AppSettings", "BinanceSettings", "DownloadSettings", "load_settings"]
