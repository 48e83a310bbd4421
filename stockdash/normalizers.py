"""
Tolerant row normalizers. Each one maps a loosely-typed backend record onto a
fully-typed display row: candidate keys are tried in priority order, numbers
are coerced with `to_num`, derived values are used only when the backend left
the field out, and an `id` is always produced.
"""
from collections.abc import Mapping
from typing import Any, Callable, Iterable, TypeVar

from .schemas import CogsRow, DisplayRow, StockLevel, StockRow, ValuationRow
from .utils import pick, to_num, to_text, value_or

RawRecord = Mapping[str, Any]
RowT = TypeVar("RowT", bound=DisplayRow)


def _backend_id(raw: RawRecord) -> str | None:
    value = raw.get("id")
    if value is None:
        return None
    return to_text(value)


def _product_fields(raw: RawRecord) -> tuple[str, str]:
    sku = to_text(pick(raw, "sku"))
    product_name = to_text(pick(raw, "productName", "name"))
    return sku, product_name


def norm_stock(raw: RawRecord, index: int) -> StockRow:
    sku, product_name = _product_fields(raw)
    warehouse_code = to_text(pick(raw, "warehouseCode", "warehouse.code"))
    qty = to_num(pick(raw, "qty", "quantity"))
    unit_cost = to_num(pick(raw, "unitCost", "avgCost"))
    total_value = value_or(pick(raw, "totalValue", "value"), lambda: qty * unit_cost)

    row_id = _backend_id(raw)
    if row_id is None:
        row_id = f"{sku}|{warehouse_code}" if sku and warehouse_code else f"stock-{index}"

    return StockRow(
        id=row_id,
        sku=sku,
        product_name=product_name,
        warehouse_code=warehouse_code,
        qty=qty,
        unit_cost=unit_cost,
        total_value=total_value,
    )


def norm_cogs(raw: RawRecord, index: int) -> CogsRow:
    sku, product_name = _product_fields(raw)
    total_sold = to_num(pick(raw, "totalSold", "qty", "quantity"))
    total_cost = to_num(pick(raw, "totalCost"))
    total_revenue = to_num(pick(raw, "totalRevenue"))
    gross_profit = value_or(pick(raw, "grossProfit"), lambda: total_revenue - total_cost)

    row_id = _backend_id(raw)
    if row_id is None:
        row_id = f"cogs-{sku}-{index}" if sku else f"cogs-{index}"

    return CogsRow(
        id=row_id,
        sku=sku,
        product_name=product_name,
        total_sold=total_sold,
        total_cost=total_cost,
        total_revenue=total_revenue,
        gross_profit=gross_profit,
    )


def norm_valuation(raw: RawRecord, index: int) -> ValuationRow:
    sku, product_name = _product_fields(raw)
    total_stock = to_num(pick(raw, "quantity", "qty"))
    avg_cost = to_num(pick(raw, "avgCost", "unitCost"))
    total_value = value_or(pick(raw, "totalValue", "value"), lambda: total_stock * avg_cost)

    row_id = _backend_id(raw)
    if row_id is None:
        row_id = f"val-{sku}-{index}" if sku else f"val-{index}"

    return ValuationRow(
        id=row_id,
        sku=sku,
        product_name=product_name,
        total_stock=total_stock,
        avg_cost=avg_cost,
        total_value=total_value,
    )


def normalize_stock_level(raw: RawRecord, index: int) -> StockLevel:
    """Live stock view row; product and warehouse fields may arrive nested."""
    sku = to_text(pick(raw, "sku", "product.sku"))
    product_name = to_text(pick(raw, "productName", "product.name", "name"))
    warehouse_code = to_text(pick(raw, "warehouseCode", "warehouse.code"))
    warehouse_name = to_text(pick(raw, "warehouseName", "warehouse.name"))
    qty = to_num(pick(raw, "qty", "qtyOnHand", "quantity"))
    reorder_level = to_num(pick(raw, "reorderLevel", "product.reorderLevel"))
    unit = to_text(pick(raw, "unit", "product.unit"))

    row_id = _backend_id(raw)
    if row_id is None:
        row_id = f"{sku}|{warehouse_code}" if sku and warehouse_code else f"row-{index}"

    return StockLevel(
        id=row_id,
        sku=sku,
        product_name=product_name,
        warehouse_code=warehouse_code,
        warehouse_name=warehouse_name,
        qty=qty,
        reorder_level=reorder_level,
        unit=unit,
    )


def normalize_rows(records: Iterable[Any], normalizer: Callable[[RawRecord, int], RowT]) -> list[RowT]:
    """
    Runs `normalizer` over every record with its position. Entries that
    aren't mappings are treated as empty records. An id already taken
    earlier in the same response gets the row's position appended.
    """
    rows: list[RowT] = []
    seen: set[str] = set()
    for index, raw in enumerate(records):
        row = normalizer(raw if isinstance(raw, Mapping) else {}, index)
        if row.id in seen:
            row = row.model_copy(update={"id": f"{row.id}-{index}"})
        seen.add(row.id)
        rows.append(row)
    return rows
