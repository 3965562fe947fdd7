"""Load roster-builder rows from a CSV export."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from pydantic import BaseModel


DEFAULT_ROSTER_MAPPING = {
    "name": "name",
    "number": "number",
    "primary_pos": "primary_pos",
}


class DraftPlayer(BaseModel):
    """A roster-builder row. Fields stay raw strings until the roster is rebuilt."""

    name: str = ""
    number: str = ""
    primary_pos: str = ""

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "DraftPlayer":
        def extract(columns: Optional[str | Sequence[str]]) -> str:
            if columns is None:
                return ""
            if isinstance(columns, str):
                value = row.get(columns)
                return value.strip() if value is not None else ""
            parts = [(row.get(col) or "").strip() for col in columns if row.get(col)]
            return " ".join(parts)

        def parse_columns(key: str) -> Optional[str | Sequence[str]]:
            columns = mapping.get(key, DEFAULT_ROSTER_MAPPING.get(key))
            if isinstance(columns, str) and "|" in columns:
                return tuple(part.strip() for part in columns.split("|"))
            return columns

        return cls(
            name=extract(parse_columns("name")),
            number=extract(parse_columns("number")),
            primary_pos=extract(parse_columns("primary_pos")),
        )


def load_draft_csv(path: Path, *, mapping: Mapping[str, str] | None = None) -> List[DraftPlayer]:
    mapping = mapping or DEFAULT_ROSTER_MAPPING
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [DraftPlayer.from_mapping(row, mapping) for row in reader]
    return rows
