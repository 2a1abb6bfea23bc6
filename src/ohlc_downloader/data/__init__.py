"""Data access layer."""

from ohlc_downloader.data.binance_client import BinanceRESTClient
from ohlc_downloader.data.candles import Kline
from ohlc_downloader.data.client import KlineClient, MarketType
from ohlc_downloader.data.downloader import INTERVALS, KlineDownloader, page_limit
from ohlc_downloader.data.export import export_klines, output_filename, read_export, write_csv, write_json
from ohlc_downloader.data.progress import PROGRESS_EVENT, LoggingProgress, ProgressCallback

__all__ = [
	"BinanceRESTClient",
	"INTERVALS",
	"Kline",
	"KlineClient",
	"KlineDownloader",
	"LoggingProgress",
	"MarketType",
	"PROGRESS_EVENT",
	"ProgressCallback",
	"export_klines",
	"output_filename",
	"page_limit",
	"read_export",
	"write_csv",
	"write_json",
]
