"""Load a caret-delimited food database into a FoodCatalog."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from maxcalorie.optimizer.models import (
    CatalogIOError,
    FoodCatalog,
    FoodItem,
    MalformedRecordError,
)

logger = logging.getLogger(__name__)

FIELD_NAMES = ["description", "weight", "calories"]


def split_record(line: str, delimiter: str = "^") -> list[str]:
    """Split a database line into fields.

    A single trailing delimiter does not produce an extra empty field,
    so "apple^2^95^" has three fields.
    """
    if not line:
        return []
    fields = line.split(delimiter)
    if len(fields) > 1 and fields[-1] == "":
        fields.pop()
    return fields


class FoodDatabaseLoader:
    """Reads food records (description, weight in ounces, calories)."""

    def __init__(
        self,
        path: Union[str, Path],
        delimiter: str = "^",
        has_header: bool = True,
    ):
        """Initialize the loader.

        Args:
            path: Path to the database file
            delimiter: Field separator
            has_header: Whether the first line is a header row to skip
        """
        self.path = Path(path)
        self.delimiter = delimiter
        self.has_header = has_header

    def _read_lines(self) -> list[str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CatalogIOError(
                f"Failed to load food database; cannot open file: {self.path} ({e})"
            ) from e
        return text.splitlines()

    def _collect_records(self, lines: list[str]) -> pd.DataFrame:
        """Split lines into a string frame, aborting on a bad field count."""
        rows = []
        line_numbers = []
        for line_number, line in enumerate(lines, start=1):
            if line_number == 1 and self.has_header:
                continue
            if not line.strip():
                continue

            fields = split_record(line, self.delimiter)
            if len(fields) != len(FIELD_NAMES):
                raise MalformedRecordError(
                    f"Failed to load food database: invalid field count at line "
                    f"{line_number}; want {len(FIELD_NAMES)} but got {len(fields)}",
                    line_number=line_number,
                    field_count=len(fields),
                    line=line,
                )
            rows.append(fields)
            line_numbers.append(line_number)

        return pd.DataFrame(rows, columns=FIELD_NAMES, index=line_numbers, dtype=object)

    def load(self) -> FoodCatalog:
        """Load all valid food items.

        Rows whose numbers do not parse, whose description is empty, or
        whose weight is not positive are skipped.

        Returns:
            FoodCatalog in file order

        Raises:
            CatalogIOError: If the file cannot be read
            MalformedRecordError: If any row does not have exactly 3 fields
        """
        df = self._collect_records(self._read_lines())
        if df.empty:
            logger.info("Loaded 0 foods from %s", self.path)
            return FoodCatalog()

        df["description"] = df["description"].astype(str)
        df["weight"] = pd.to_numeric(df["weight"].str.strip(), errors="coerce")
        df["calories"] = pd.to_numeric(df["calories"].str.strip(), errors="coerce")

        valid = (
            df["weight"].notna()
            & df["calories"].notna()
            & (df["weight"] > 0)
            & (df["description"] != "")
        )
        for line_number in valid[~valid].index:
            logger.debug("Skipping invalid food record at line %d", line_number)

        items = [
            FoodItem(
                description=row.description,
                weight=float(row.weight),
                calories=float(row.calories),
            )
            for row in df[valid].itertuples(index=False)
        ]

        logger.info(
            "Loaded %d foods from %s (%d skipped)",
            len(items),
            self.path,
            int((~valid).sum()),
        )
        return FoodCatalog(items)


def load_food_database(
    path: Union[str, Path],
    delimiter: str = "^",
    has_header: bool = True,
) -> FoodCatalog:
    """Convenience function to load a food database.

    Args:
        path: Path to the database file
        delimiter: Field separator (defaults to '^')
        has_header: Whether to skip the first line

    Returns:
        FoodCatalog of all valid rows
    """
    loader = FoodDatabaseLoader(path, delimiter=delimiter, has_header=has_header)
    return loader.load()
