"""Data source clients."""
from __future__ import annotations

from typing import Any, List, Literal, Optional, Protocol

MarketType = Literal["spot", "futures"]


class KlineClient(Protocol):
    """Abstract client interface for fetching raw kline rows."""

    @property
    def market(self) -> MarketType:
        ...

    def get_klines(
        self,
        *,
        symbol: str,
        interval: str,
        limit: int,
        startTime: Optional[int] = None,
        endTime: Optional[int] = None,
    ) -> List[Any]:
        """Return at most ``limit`` raw rows opening within the given bounds."""
        raise NotImplementedError
