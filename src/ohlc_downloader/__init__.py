"""Download historical Binance OHLC candles to CSV or JSON."""

from ohlc_downloader.service import DownloadRequest, DownloadResult, download_ohlc

__all__ = ["DownloadRequest", "DownloadResult", "download_ohlc"]

__version__ = "0.1.0"
