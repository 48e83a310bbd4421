from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class DisplayRow(BaseModel):
    """
    Base for every normalized row. Rows are immutable once built and every
    field is always defined, so page code never has to guard against gaps.
    Aliases mirror the backend's camelCase names and are used on export.
    """

    # populate_by_name lets normalizers pass snake_case field names while
    # model_dump(by_alias=True) still emits the camelCase export headers.
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    sku: str = ""
    product_name: str = Field(default="", alias="productName")


class StockRow(DisplayRow):
    warehouse_code: str = Field(default="", alias="warehouseCode")
    qty: float = 0
    unit_cost: float = Field(default=0, alias="unitCost")
    total_value: float = Field(default=0, alias="totalValue")


class CogsRow(DisplayRow):
    total_sold: float = Field(default=0, alias="totalSold")
    total_cost: float = Field(default=0, alias="totalCost")
    total_revenue: float = Field(default=0, alias="totalRevenue")
    gross_profit: float = Field(default=0, alias="grossProfit")


class ValuationRow(DisplayRow):
    total_stock: float = Field(default=0, alias="totalStock")
    avg_cost: float = Field(default=0, alias="avgCost")
    total_value: float = Field(default=0, alias="totalValue")


class StockLevel(DisplayRow):
    """One product/warehouse line of the live stock view (`GET /stock`)."""

    warehouse_code: str = Field(default="", alias="warehouseCode")
    warehouse_name: str = Field(default="", alias="warehouseName")
    qty: float = 0
    reorder_level: float = Field(default=0, alias="reorderLevel")
    unit: str = ""

    @property
    def is_low(self) -> bool:
        return self.qty <= self.reorder_level


class ReportResult(BaseModel):
    """What a report pipeline hands upward: the rows and one grand total."""

    model_config = ConfigDict(frozen=True)

    kind: str
    rows: list[SerializeAsAny[DisplayRow]]
    grand_total: float = 0


class User(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    email: str
    name: str = ""
