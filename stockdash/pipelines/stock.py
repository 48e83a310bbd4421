import logging
from typing import Any

from stockdash.aggregates import summarize_stock_levels
from stockdash.normalizers import normalize_rows, normalize_stock_level
from stockdash.pipeline import ReportPipeline
from stockdash.schemas import DisplayRow, StockLevel

logger = logging.getLogger(__name__)


class StockLevelsPipeline(ReportPipeline):
    """Live stock levels from `GET /stock`; the grand total is units on hand."""

    kind = "levels"
    endpoint = "/stock"
    row_type = StockLevel

    def transform(self, payload: Any) -> list[DisplayRow]:
        # /stock is a plain list endpoint; anything else renders as empty
        records = payload if isinstance(payload, list) else []
        return normalize_rows(records, normalize_stock_level)

    def grand_total(self, payload: Any, rows: list[DisplayRow]) -> float:
        summary = summarize_stock_levels(rows)
        logger.info(
            f"Products in stock: {summary['total_items']}, "
            f"low stock items: {summary['low_stock']}"
        )
        return summary["total_quantity"]
