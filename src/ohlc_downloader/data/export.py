"""Writers for the CSV and JSON export formats."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, List, Literal, Sequence

import pandas as pd

from ohlc_downloader.data.candles import Kline

OutputFormat = Literal["csv", "json"]

CSV_COLUMNS = ("Date", "Open", "High", "Low", "Close", "Volume")
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def output_filename(symbol: str, market: str, interval: str, fmt: str) -> str:
    return f"{symbol}-{market}-{interval}.{fmt}"


def _frame(klines: Iterable[Kline]) -> pd.DataFrame:
    rows = [
        (kline.opened_at.strftime(DATE_FORMAT), kline.open, kline.high, kline.low, kline.close, kline.volume)
        for kline in klines
    ]
    return pd.DataFrame(rows, columns=list(CSV_COLUMNS))


def write_csv(klines: Sequence[Kline], path: Path) -> Path:
    """Write the Date/Open/High/Low/Close/Volume table."""

    _frame(klines).to_csv(path, index=False)
    return path


def write_json(klines: Sequence[Kline], path: Path) -> Path:
    """Write the candles as a JSON array of raw kline objects."""

    with Path(path).open("w", encoding="utf-8") as handle:
        json.dump([kline.to_dict() for kline in klines], handle)
        handle.write("\n")
    return path


def export_klines(klines: Sequence[Kline], path: Path, fmt: str) -> Path:
    """Persist candles in the requested format, creating the parent directory."""

    if fmt not in ("csv", "json"):
        raise ValueError(f"Unsupported output format: {fmt}")

    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "csv":
        return write_csv(klines, destination)
    return write_json(klines, destination)


def read_export(path: Path) -> pd.DataFrame:
    """Load an export back into the CSV column layout, whichever format it was written in."""

    source = Path(path)
    if source.suffix == ".csv":
        return pd.read_csv(source, dtype=str)
    if source.suffix == ".json":
        with source.open("r", encoding="utf-8") as handle:
            raw: List[dict] = json.load(handle)
        return _frame(Kline.from_dict(entry) for entry in raw)
    raise ValueError(f"Unsupported export file: {source}")
