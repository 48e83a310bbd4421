from collections.abc import Mapping
from typing import Any, Sequence

from .schemas import CogsRow, DisplayRow, StockLevel, StockRow, ValuationRow
from .utils import lookup, try_num


def extract_rows(payload: Any) -> list[Any]:
    """Accepts either a bare list of records or a `{rows: [...]}` envelope."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping) and isinstance(payload.get("rows"), list):
        return payload["rows"]
    return []


def _server_aggregate(payload: Any, key: str) -> float | None:
    if not isinstance(payload, Mapping):
        return None
    return try_num(lookup(payload, key))


def select_grand_total(kind: str, payload: Any, rows: Sequence[DisplayRow]) -> float:
    """
    Picks the grand total for a report.

    Stock is always summed locally. COGS and valuation trust a finite
    `totals.profit` / `totalValue` from the envelope and only sum their rows
    when the server didn't send one.
    """
    if kind == "stock":
        return sum(row.total_value for row in rows if isinstance(row, StockRow))

    if kind == "cogs":
        server_total = _server_aggregate(payload, "totals.profit")
        if server_total is not None:
            return server_total
        return sum(row.gross_profit for row in rows if isinstance(row, CogsRow))

    if kind == "valuation":
        server_total = _server_aggregate(payload, "totalValue")
        if server_total is not None:
            return server_total
        return sum(row.total_value for row in rows if isinstance(row, ValuationRow))

    raise ValueError(f"Unknown report type: {kind}")


def summarize_stock_levels(levels: Sequence[StockLevel]) -> dict[str, float]:
    """KPI figures for the live stock view."""
    return {
        "total_items": len(levels),
        "total_quantity": sum(level.qty for level in levels),
        "low_stock": sum(1 for level in levels if level.is_low),
    }
