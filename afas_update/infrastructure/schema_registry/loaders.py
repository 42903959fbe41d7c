from __future__ import annotations

import csv
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

TYPE_COLUMN = "Object Type"


def load_type_rows(path: Path) -> dict[str, dict[str, str]]:
    if not path.exists():
        return {}
    rows: dict[str, dict[str, str]] = {}
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            object_type = (row.get(TYPE_COLUMN) or "").strip()
            if not object_type:
                continue
            rows[object_type] = {
                key.strip(): (value or "").strip()
                for key, value in row.items()
                if key is not None
            }
    return rows


def load_rows_by_type(
    path: Path, name_column: str
) -> dict[str, list[dict[str, str]]]:
    if not path.exists():
        return {}
    data: dict[str, list[dict[str, str]]] = {}
    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            object_type = (row.get(TYPE_COLUMN) or "").strip()
            name = (row.get(name_column) or "").strip()
            if not object_type or not name:
                continue
            data.setdefault(object_type, []).append(
                {
                    key.strip(): (value or "").strip()
                    for key, value in row.items()
                    if key is not None
                }
            )
    return data
