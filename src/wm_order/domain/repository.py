# src/wm_order/domain/repository.py
"""OrderbookProtocol: interface contract for the external orderbook service.

Responses are raw OrderJSON dicts; parsing and hash checking happen in the
order factory. Availability and retries belong to the implementation.
"""
from typing import Any, Protocol


class OrderbookProtocol(Protocol):
    async def get_order(self, query: dict[str, Any]) -> dict[str, Any] | None: ...

    async def get_orders(self, query: dict[str, Any]) -> list[dict[str, Any]]: ...
