"""Fetch a symbol's candle history and write it to disk in one call."""
from __future__ import annotations

import time
from contextlib import nullcontext
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator

from ohlc_downloader.config import AppSettings
from ohlc_downloader.data import (
    INTERVALS,
    BinanceRESTClient,
    KlineClient,
    KlineDownloader,
    LoggingProgress,
    ProgressCallback,
    export_klines,
    output_filename,
)
from ohlc_downloader.utils import parse_date


class DownloadRequest(BaseModel):
    """User-facing download parameters."""

    symbol: str = Field(..., min_length=1)
    interval: str = Field("1h")
    market: Literal["spot", "futures"] = Field("spot")
    start: Optional[str] = Field(None, description="YYYY-MM-DD or ISO8601 inclusive start")
    end: Optional[str] = Field(None, description="YYYY-MM-DD or ISO8601 end; defaults to now")
    output_format: Literal["csv", "json"] = Field("csv")
    output_dir: Path = Field(Path("."))

    @field_validator("symbol")
    @classmethod
    def _normalise_symbol(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("interval")
    @classmethod
    def _check_interval(cls, value: str) -> str:
        if value not in INTERVALS:
            raise ValueError(f"Unsupported interval: {value}")
        return value

    @field_validator("start", "end")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()

    def start_datetime(self) -> Optional[datetime]:
        return parse_date(self.start) if self.start else None

    def end_datetime(self) -> Optional[datetime]:
        return parse_date(self.end) if self.end else None

    @property
    def filename(self) -> str:
        return output_filename(self.symbol, self.market, self.interval, self.output_format)


@dataclass(frozen=True)
class DownloadResult:
    path: Path
    records: int

    @property
    def message(self) -> str:
        return f"Saved {self.records} records to {self.path.name}"


def download_ohlc(
    request: DownloadRequest,
    *,
    client: KlineClient | None = None,
    settings: AppSettings | None = None,
    on_progress: ProgressCallback | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> DownloadResult:
    """Download every candle in the requested range and export it.

    Network and file-system errors propagate unchanged; nothing is written
    unless the whole range was fetched.
    """

    settings = settings or AppSettings()
    if on_progress is None:
        on_progress = LoggingProgress(request.filename)
    start = request.start_datetime()
    end = request.end_datetime()
    if start is not None and end is not None and start > end:
        raise ValueError("Start date must not be after end date.")

    if client is not None and client.market != request.market:
        raise ValueError(f"Client serves the {client.market} market, request wants {request.market}")

    context = (
        nullcontext(client)
        if client is not None
        else BinanceRESTClient(
            market=request.market,
            base_url=settings.binance.base_url,
            futures_url=settings.binance.futures_url,
            request_timeout=settings.binance.request_timeout,
        )
    )

    with context as active:
        downloader = KlineDownloader(
            active,
            symbol=request.symbol,
            interval=request.interval,
            request_delay=settings.download.request_delay_ms / 1000,
            sleep=sleep,
            on_progress=on_progress,
        )
        klines = downloader.download(start=start, end=end)

    destination = export_klines(klines, request.output_dir / request.filename, request.output_format)
    on_progress(100)

    result = DownloadResult(path=destination, records=len(klines))
    logger.info(result.message)
    return result
