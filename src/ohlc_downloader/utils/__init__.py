"""Utility helpers."""

from ohlc_downloader.utils.datetime import ensure_utc, from_millis, parse_date, parse_iso8601, to_millis

__all__ = ["ensure_utc", "from_millis", "parse_date", "parse_iso8601", "to_millis"]
