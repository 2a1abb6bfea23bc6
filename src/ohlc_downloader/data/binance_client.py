"""Thin wrapper around the python-binance REST client."""
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from binance import Client

from ohlc_downloader.data.client import MarketType


class BinanceRESTClient:
    """Unauthenticated market data access for the spot or USD-M futures API."""

    def __init__(
        self,
        *,
        market: MarketType = "spot",
        base_url: str | None = None,
        futures_url: str | None = None,
        request_timeout: int = 20,
        requests_params: Optional[Dict[str, Any]] = None,
    ) -> None:
        if market not in ("spot", "futures"):
            raise ValueError(f"Unsupported market type: {market}")

        params = dict(requests_params or {})
        params.setdefault("timeout", request_timeout)

        self._market: MarketType = market
        # ping=False keeps construction offline; the first request surfaces connectivity errors.
        self._client = Client(None, None, requests_params=params, ping=False)

        if market == "spot":
            if base_url:
                self._client.API_URL = base_url
            self._fetch_klines: Callable[..., List[List[Any]]] = self._client.get_klines
        else:
            if futures_url:
                self._client.FUTURES_URL = futures_url
            self._fetch_klines = self._client.futures_klines

    @property
    def market(self) -> MarketType:
        return self._market

    def __enter__(self) -> "BinanceRESTClient":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying HTTP session."""

        if hasattr(self._client, "session") and self._client.session:
            self._client.session.close()

    def get_klines(
        self,
        *,
        symbol: str,
        interval: str,
        limit: int,
        startTime: Optional[int] = None,
        endTime: Optional[int] = None,
    ) -> List[List[Any]]:
        """Delegate to python-binance, leaving out time bounds that are unset."""

        params: Dict[str, Any] = {"symbol": symbol, "interval": interval, "limit": limit}
        if startTime is not None:
            params["startTime"] = startTime
        if endTime is not None:
            params["endTime"] = endTime
        return self._fetch_klines(**params)  # type: ignore[no-any-return]
