from stockdash.pipelines.reports import CogsReportPipeline, StockReportPipeline, ValuationReportPipeline
from stockdash.pipelines.stock import StockLevelsPipeline

# --- Pipeline Registry ---
# One entry per report the dashboard can show, keyed by report kind.
PIPELINE_REGISTRY = {
    "stock": StockReportPipeline,
    "cogs": CogsReportPipeline,
    "valuation": ValuationReportPipeline,
    "levels": StockLevelsPipeline,
}
