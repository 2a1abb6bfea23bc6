from __future__ import annotations

from typing import List, Optional

MINUTE_MS = 60_000


def make_rows(start_ms: int, count: int, step_ms: int = MINUTE_MS) -> List[list]:
    rows = []
    for index in range(count):
        open_time = start_ms + index * step_ms
        price = f"{100 + index}.00000000"
        rows.append(
            [
                open_time,
                price,
                f"{101 + index}.00000000",
                f"{99 + index}.00000000",
                price,
                "1.50000000",
                open_time + step_ms - 1,
                "150.00000000",
                index + 1,
                "0.75000000",
                "75.00000000",
                "0",
            ]
        )
    return rows


class FakeKlineClient:
    """Serve a fixed candle history the way the kline endpoint pages through it."""

    def __init__(self, rows: List[list], *, market: str = "spot") -> None:
        self.market = market
        self._rows = rows
        self.calls: List[dict] = []

    def __enter__(self) -> "FakeKlineClient":
        return self

    def __exit__(self, *_) -> None:
        self.closed = True

    def get_klines(
        self,
        *,
        symbol: str,
        interval: str,
        limit: int,
        startTime: Optional[int] = None,
        endTime: Optional[int] = None,
    ) -> List[list]:
        self.calls.append(
            {"symbol": symbol, "interval": interval, "limit": limit, "startTime": startTime, "endTime": endTime}
        )
        matching = [
            row
            for row in self._rows
            if (startTime is None or row[0] >= startTime) and (endTime is None or row[0] <= endTime)
        ]
        if startTime is None:
            return matching[-limit:]
        return matching[:limit]


class FailingClient:
    market = "spot"

    def __init__(self, error: Exception, *, after: int = 0, rows: Optional[List[list]] = None) -> None:
        self._error = error
        self._after = after
        self._rows = rows or []
        self.calls = 0

    def __enter__(self) -> "FailingClient":
        return self

    def __exit__(self, *_) -> None:
        return None

    def get_klines(self, **_) -> List[list]:
        self.calls += 1
        if self.calls > self._after:
            raise self._error
        return self._rows
