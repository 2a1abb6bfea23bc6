"""Historical kline downloader walking a time range page by page."""
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable, List, Optional

from loguru import logger

from ohlc_downloader.data.candles import Kline
from ohlc_downloader.data.client import KlineClient, MarketType
from ohlc_downloader.data.progress import ProgressCallback
from ohlc_downloader.utils import to_millis

SPOT_PAGE_LIMIT = 1000
FUTURES_PAGE_LIMIT = 1500

INTERVALS = frozenset(
    {
        "1s",
        "1m",
        "3m",
        "5m",
        "15m",
        "30m",
        "1h",
        "2h",
        "4h",
        "6h",
        "8h",
        "12h",
        "1d",
        "3d",
        "1w",
        "1M",
    }
)

# Second candles are only published for spot pairs.
SPOT_ONLY_INTERVALS = frozenset({"1s"})


def page_limit(market: MarketType) -> int:
    """Largest number of candles the market's kline endpoint returns per request."""

    return SPOT_PAGE_LIMIT if market == "spot" else FUTURES_PAGE_LIMIT


class KlineDownloader:
    """Accumulate every candle between two timestamps, one request window at a time."""

    def __init__(
        self,
        client: KlineClient,
        *,
        symbol: str,
        interval: str,
        request_delay: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
        on_progress: Optional[ProgressCallback] = None,
    ) -> None:
        market = client.market
        if interval not in INTERVALS:
            raise ValueError(f"Unsupported interval: {interval}")
        if market != "spot" and interval in SPOT_ONLY_INTERVALS:
            raise ValueError(f"Interval {interval} is only available on the spot market")

        self._client = client
        self._symbol = symbol
        self._interval = interval
        self._market = market
        self._limit = page_limit(market)
        self._request_delay = max(0.0, request_delay)
        self._sleep = sleep
        self._on_progress = on_progress
        self._convert = Kline.from_row if market == "spot" else Kline.from_futures

    @property
    def limit(self) -> int:
        return self._limit

    def _fetch_page(self, cursor: Optional[int], end: int) -> List[Kline]:
        rows = self._client.get_klines(
            symbol=self._symbol,
            interval=self._interval,
            limit=self._limit,
            startTime=cursor,
            endTime=end,
        )
        return [self._convert(row) for row in rows]

    def _report(self, percent: int) -> None:
        if self._on_progress is not None:
            self._on_progress(percent)

    def download(self, *, start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[Kline]:
        """Return the candles opening between ``start`` and ``end`` in time order.

        Without ``start`` the exchange decides where the range begins and no
        intermediate progress is reported. Without ``end`` the range runs up
        to now. Client errors propagate as-is and discard what was fetched.
        """

        start_ms = to_millis(start) if start is not None else None
        end_ms = to_millis(end) if end is not None else to_millis(datetime.now(timezone.utc))
        if start_ms is not None and start_ms > end_ms:
            raise ValueError("Start timestamp must not be after end timestamp.")

        span = end_ms - start_ms if start_ms is not None else 0
        cursor = start_ms
        collected: List[Kline] = []

        while True:
            page = self._fetch_page(cursor, end_ms)
            if not page:
                break

            last_open = collected[-1].open_time if collected else None
            for kline in page:
                if last_open is None or kline.open_time > last_open:
                    collected.append(kline)
                    last_open = kline.open_time
            logger.debug(
                "Fetched {count} candles for {symbol} {market} ({interval}) from {first} to {last}",
                count=len(page),
                symbol=self._symbol,
                market=self._market,
                interval=self._interval,
                first=page[0].opened_at,
                last=page[-1].closed_at,
            )

            next_cursor = page[-1].close_time + 1
            if cursor is not None and next_cursor <= cursor:
                # The exchange returned nothing past the cursor.
                break
            cursor = next_cursor
            if cursor > end_ms:
                break

            if start_ms is not None and span > 0:
                self._report(min(100, int((cursor - start_ms) / span * 100)))

            if self._request_delay:
                self._sleep(self._request_delay)

        logger.info(
            "Downloaded {count} candles for {symbol} {market} ({interval})",
            count=len(collected),
            symbol=self._symbol,
            market=self._market,
            interval=self._interval,
        )
        return collected
