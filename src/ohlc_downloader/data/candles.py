"""Candle record shared by the spot and futures kline endpoints."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Sequence, Union

from ohlc_downloader.utils import from_millis

# Positional layout of a REST kline row. Column 11 ("ignore") is dropped.
KLINE_COLUMNS = (
    "openTime",
    "open",
    "high",
    "low",
    "close",
    "volume",
    "closeTime",
    "quoteAssetVolume",
    "tradeNum",
    "takerBuyBaseAssetVolume",
    "takerBuyQuoteAssetVolume",
)

RawKline = Union[Sequence[Any], Mapping[str, Any]]


@dataclass(frozen=True)
class Kline:
    """A single OHLC candle. Prices and volumes keep the API's decimal strings."""

    open_time: int
    open: str
    high: str
    low: str
    close: str
    volume: str
    close_time: int
    quote_asset_volume: str
    trade_count: int
    taker_buy_base_asset_volume: str
    taker_buy_quote_asset_volume: str

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "Kline":
        """Build a candle from a positional REST kline row."""

        if len(row) < len(KLINE_COLUMNS):
            raise ValueError(f"Kline row has {len(row)} columns, expected at least {len(KLINE_COLUMNS)}")

        return cls(
            open_time=int(row[0]),
            open=str(row[1]),
            high=str(row[2]),
            low=str(row[3]),
            close=str(row[4]),
            volume=str(row[5]),
            close_time=int(row[6]),
            quote_asset_volume=str(row[7]),
            trade_count=int(row[8]),
            taker_buy_base_asset_volume=str(row[9]),
            taker_buy_quote_asset_volume=str(row[10]),
        )

    @classmethod
    def from_futures(cls, raw: RawKline) -> "Kline":
        """Convert a USD-M futures kline into the common candle shape.

        Futures rows carry the same fields as spot rows. Depending on the client
        they arrive positional or keyed by the export field names.
        """

        if isinstance(raw, Mapping):
            return cls.from_dict(raw)
        return cls.from_row(raw)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Kline":
        """Inverse of :meth:`to_dict`."""

        return cls.from_row([raw[column] for column in KLINE_COLUMNS])

    @property
    def opened_at(self) -> datetime:
        return from_millis(self.open_time)

    @property
    def closed_at(self) -> datetime:
        return from_millis(self.close_time)

    def to_dict(self) -> Dict[str, Any]:
        """Raw candle object as written to JSON exports."""

        return {
            "openTime": self.open_time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "closeTime": self.close_time,
            "quoteAssetVolume": self.quote_asset_volume,
            "tradeNum": self.trade_count,
            "takerBuyBaseAssetVolume": self.taker_buy_base_asset_volume,
            "takerBuyQuoteAssetVolume": self.taker_buy_quote_asset_volume,
        }
