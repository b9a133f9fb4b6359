"""
CSV writers for operator-weight traces.
"""
from __future__ import annotations

import csv
from dataclasses import asdict, dataclass, is_dataclass
from pathlib import Path
from typing import Any, Iterable


TRACE_HEADER = [
    "step",
    "op_id",
    "op_name",
    "archive_count",
    "weight",
]


@dataclass(frozen=True)
class WeightsTraceRow:
    step: int
    op_id: str
    op_name: str
    archive_count: int
    weight: float


def _row_to_dict(row: Any) -> dict[str, Any]:
    if is_dataclass(row):
        return asdict(row)
    if isinstance(row, dict):
        return dict(row)
    raise TypeError("Rows must be dataclasses or dictionaries.")


def write_weights_trace(path: str | Path, rows: Iterable[Any]) -> None:
    """
    Write operator-weight trace rows to CSV with a fixed header.
    """
    output_path = Path(path)
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=TRACE_HEADER)
        writer.writeheader()
        for row in rows:
            data = _row_to_dict(row)
            writer.writerow({key: data.get(key) for key in TRACE_HEADER})


__all__ = ["TRACE_HEADER", "WeightsTraceRow", "write_weights_trace"]
