"""CLI entrypoint for downloading historical candles."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from binance.exceptions import BinanceAPIException, BinanceRequestException
from loguru import logger
from pydantic import ValidationError
from requests import RequestException

from ohlc_downloader.config import load_settings
from ohlc_downloader.service import DownloadRequest, download_ohlc

app = typer.Typer(help="Historical OHLC data operations")


@app.callback()
def main() -> None:
    """Download Binance candle history."""


@app.command()
def download(
    symbol: str = typer.Argument(..., help="Trading pair, e.g. BTCUSDT."),
    interval: Optional[str] = typer.Option(None, help="Kline interval (default from settings)."),
    market: Optional[str] = typer.Option(None, help="spot or futures (default from settings)."),
    start: Optional[str] = typer.Option(None, help="Start date (YYYY-MM-DD or ISO8601)."),
    end: Optional[str] = typer.Option(None, help="End date (YYYY-MM-DD or ISO8601); defaults to now."),
    output_format: Optional[str] = typer.Option(None, "--format", help="csv or json (default from settings)."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory receiving the export file."),
    config: Optional[Path] = typer.Option(None, help="Path to a settings TOML file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every fetched page."),
) -> None:
    """Fetch candles for SYMBOL and save them as <symbol>-<market>-<interval>.<format>."""

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")

    try:
        settings = load_settings(config)
    except (ValidationError, ValueError, RuntimeError, OSError) as exc:
        typer.echo(f"Invalid settings: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    defaults = settings.download

    try:
        request = DownloadRequest(
            symbol=symbol,
            interval=interval or defaults.default_interval,
            market=market or defaults.default_market,
            start=start,
            end=end,
            output_format=output_format or defaults.default_format,
            output_dir=output_dir or defaults.output_dir,
        )
    except ValidationError as exc:
        typer.echo(f"Invalid download request: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    with typer.progressbar(length=100, label=f"{request.symbol} {request.market} {request.interval}") as bar:
        shown = 0

        def advance(percent: int) -> None:
            nonlocal shown
            if percent > shown:
                bar.update(percent - shown)
                shown = percent

        try:
            result = download_ohlc(request, settings=settings, on_progress=advance)
        except (BinanceAPIException, BinanceRequestException, RequestException, OSError, ValueError) as exc:
            typer.echo(f"Download failed: {exc}", err=True)
            raise typer.Exit(code=1) from exc

    typer.echo(result.message)


if __name__ == "__main__":  # pragma: no cover
    app()
