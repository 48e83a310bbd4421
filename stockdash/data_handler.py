import json
import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from . import settings
from . import utils
from .schemas import DisplayRow

logger = logging.getLogger(__name__)


def rows_to_frame(rows: Sequence[DisplayRow], row_type: type[DisplayRow]) -> pd.DataFrame:
    """Builds a DataFrame with camelCase headers in the row model's field order."""
    columns = [info.alias or field for field, info in row_type.model_fields.items()]
    records = [row.model_dump(by_alias=True) for row in rows]
    return pd.DataFrame(records, columns=columns)


def save_outputs(
    rows: Sequence[DisplayRow],
    row_type: type[DisplayRow],
    report_name: str,
    output_dir: Optional[Path] = None,
) -> tuple[Path, Optional[Path]]:
    """Saves report rows to CSV and conditionally to JSON, with dated filenames."""
    output_dir = output_dir or settings.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    date_suffix = utils.get_date_suffix_for_filename()

    csv_path = output_dir / f"{report_name}_{date_suffix}.csv"
    json_path = output_dir / f"{report_name}_{date_suffix}.json"

    rows_to_frame(rows, row_type).to_csv(csv_path, index=False)
    logger.info(f"✅ Report saved to: {csv_path}")

    if not settings.SAVE_JSON_OUTPUT:
        logger.info("INFO: Skipping JSON file save as per configuration.")
        return csv_path, None

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump([row.model_dump(by_alias=True) for row in rows], f, indent=2, default=str)
    logger.info(f"✅ JSON output saved to: {json_path}")
    return csv_path, json_path
