"""
Export Functionality for GeneralStats

Provides export formats for evaluated series:
- CSV (one row per plotted match, oldest first)
- JSON (full series including undefined values)
"""

import json
import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from generalstats.pipeline import StatsResult

logger = logging.getLogger(__name__)


# ============================================================================
# Series Table
# ============================================================================


def series_frame(result: StatsResult) -> pd.DataFrame:
    """
    Tabulate the plottable pairs of *result*.

    Rows are in chronological order (the history arrives newest first) and
    any row with an undefined value on either axis is dropped. Columns are
    named after the statistic descriptors.
    """
    x_col, y_col = result.x_label, result.y_label
    if x_col == y_col:
        x_col, y_col = f"{x_col} (x)", f"{y_col} (y)"

    frame = pd.DataFrame(
        {
            "match_id": [record.id for record in result.records],
            x_col: result.xs,
            y_col: result.ys,
        }
    )
    frame = frame.iloc[::-1].dropna(subset=[x_col, y_col])
    return frame.reset_index(drop=True)


# ============================================================================
# CSV Export
# ============================================================================


def export_series_csv(result: StatsResult, output_path: Path | None = None) -> str:
    """
    Export the plottable pairs as CSV.

    Args:
        result: Evaluated series
        output_path: Optional path to write the file

    Returns:
        CSV text with a header naming both statistics
    """
    frame = series_frame(result).drop(columns=["match_id"])
    csv_text = frame.to_csv(index=False)

    if output_path:
        output_path.write_text(csv_text)
        logger.info(f"Exported CSV to: {output_path}")

    return csv_text


# ============================================================================
# JSON Export
# ============================================================================


def _json_value(value: float) -> float | None:
    # JSON has no NaN
    return None if math.isnan(value) else value


def export_series_json(
    result: StatsResult,
    output_path: Path | None = None,
    indent: int = 2,
    include_metadata: bool = True,
) -> str:
    """
    Export the full evaluated series, undefined values as ``null``.

    Args:
        result: Evaluated series
        output_path: Optional path to write the file
        indent: JSON indentation level
        include_metadata: Whether to include export metadata

    Returns:
        JSON string
    """
    data: dict[str, Any] = result.to_dict()
    data["xs"] = [_json_value(v) for v in result.xs]
    data["ys"] = [_json_value(v) for v in result.ys]
    data["match_ids"] = [record.id for record in result.records]

    if include_metadata:
        data = {
            "_metadata": {
                "exported_at": datetime.now().isoformat(),
                "format": "generalstats_json",
                "version": "1.0",
            },
            **data,
        }

    json_str = json.dumps(data, indent=indent)

    if output_path:
        output_path.write_text(json_str)
        logger.info(f"Exported JSON to: {output_path}")

    return json_str


def export_series(result: StatsResult, output_path: Path, format: str | None = None) -> None:
    """
    Export *result* to *output_path*, detecting the format from the extension.

    Raises:
        ValueError: For an unsupported format
    """
    if format is None:
        format = output_path.suffix.lstrip(".").lower()

    if format == "csv":
        export_series_csv(result, output_path)
    elif format == "json":
        export_series_json(result, output_path)
    else:
        raise ValueError(f"Unsupported export format: {format}")
