from stockdash.normalizers import norm_cogs, norm_stock, norm_valuation
from stockdash.pipeline import EnvelopeReportPipeline
from stockdash.schemas import CogsRow, StockRow, ValuationRow


class StockReportPipeline(EnvelopeReportPipeline):
    kind = "stock"
    endpoint = "/reports/stock"
    row_type = StockRow
    normalizer = staticmethod(norm_stock)


class CogsReportPipeline(EnvelopeReportPipeline):
    kind = "cogs"
    endpoint = "/reports/cogs"
    row_type = CogsRow
    normalizer = staticmethod(norm_cogs)


class ValuationReportPipeline(EnvelopeReportPipeline):
    kind = "valuation"
    endpoint = "/reports/valuation"
    row_type = ValuationRow
    normalizer = staticmethod(norm_valuation)
