"""
CSV Data Provider - route file to DataFrame adapter.

Reads route records from a CSV file and transforms them into
RouteRecordSchema-compliant DataFrames. Rows that cannot be converted
are reported and skipped; the rest of the file is still loaded.

Expected layout (header row required, columns read by position):

    id,city,to,ticket_average,distance,hours
    0, Braga, 0, 0, 0, 0
    1, Lisbon, 0,40, 50, 5
    2, Porto, 0, 25, 30, 1.5
    2, Porto, 1, 30, 26, 1.5
"""

import logging
from pathlib import Path
from typing import List, Optional, Set, Union

import numpy as np
import pandas as pd

from src.route_planner.ports.record_provider import RouteRecordProvider
from src.route_planner.schemas.route_record import (
    RECORD_COLUMNS,
    RouteRecordDataFrame,
    RouteRecordSchema,
)

logger = logging.getLogger(__name__)

# Header names of the CSV file, in column order
CSV_COLUMNS: List[str] = ["id", "city", "to", "ticket_average", "distance", "hours"]

CSV_EXAMPLE = """id,city,to,ticket_average,distance,hours
0, Braga, 0, 0, 0, 0
1, Lisbon, 0,40, 50, 5
2, Porto, 0, 25, 30, 1.5
2, Porto, 1, 30, 26, 1.5"""

# CSV column -> (record column, human label, must be integral, must be >= 0)
_NUMERIC_FIELDS = (
    ("id", "origin_id", "ID", True, False),
    ("to", "destination_id", "To", True, False),
    ("ticket_average", "ticket_price", "Ticket Average", False, True),
    ("distance", "distance_km", "Distance", False, True),
    ("hours", "duration_hours", "Hours", False, False),
)

# Data rows start after the header on line 2 of the file
_FIRST_DATA_LINE = 2

# Plain integer literal, as accepted for city identifiers
_INTEGER_PATTERN = r"[+-]?\d+"


def parse_numeric_column(raw: pd.Series, integral: bool = False) -> pd.Series:
    """
    Vectorized conversion of a raw text column to numbers.

    Args:
        raw: Series of strings as read from the file.
        integral: If True, only plain integer literals such as "12" or "-3"
            are accepted; "1.0" and "1e0" are rejected.

    Returns:
        Float Series; NaN marks values that failed conversion.

    Examples:
        >>> parse_numeric_column(pd.Series(["1", " 2.5", "x", ""]))
        0    1.0
        1    2.5
        2    NaN
        3    NaN
        dtype: float64
    """
    text = raw.str.strip()
    values = pd.to_numeric(text, errors="coerce").astype(float)
    values[~np.isfinite(values)] = np.nan

    if integral:
        literal = text.str.fullmatch(_INTEGER_PATTERN, na=False).astype(bool)
        values[~literal.to_numpy()] = np.nan

    return values


def _drop_blank_rows(raw: pd.DataFrame) -> pd.DataFrame:
    """Drop rows whose fields are all empty, keeping the original index."""
    blank = pd.Series(True, index=raw.index)
    for column in CSV_COLUMNS:
        blank &= raw[column].fillna("").astype(str).str.strip().eq("")
    return raw.loc[~blank]


class CsvRouteProvider(RouteRecordProvider):
    """
    Data provider for route CSV files.

    Attributes:
        _csv_path: Path to the CSV file.
        _encoding: File encoding.
        skipped_rows: Number of rows dropped by the last load.
    """

    def __init__(self, csv_path: Union[str, Path], encoding: str = "utf-8") -> None:
        """
        Initialize the CSV data provider.

        Args:
            csv_path: Path to the routes CSV file.
            encoding: File encoding.
        """
        self._csv_path = Path(csv_path)
        self._encoding = encoding
        self.skipped_rows = 0

    def _on_bad_line(self, fields: List[str]) -> Optional[List[str]]:
        """
        Report rows with more fields than the layout allows.

        The row is replaced by an empty placeholder so every file line keeps
        its position in the DataFrame index; placeholders are dropped with
        the blank lines.
        """
        self.skipped_rows += 1
        logger.warning(
            "Skipping row with %d fields (expected %d): %s",
            len(fields),
            len(CSV_COLUMNS),
            ",".join(fields),
        )
        return [""] * len(CSV_COLUMNS)

    def get_records_df(self) -> RouteRecordDataFrame:
        """
        Load, convert and validate the CSV file.

        Returns:
            DataFrame validated against RouteRecordSchema.

        Raises:
            FileNotFoundError: If the CSV file does not exist.
        """
        if not self._csv_path.exists():
            raise FileNotFoundError(f"Could not open file {self._csv_path}")

        self.skipped_rows = 0

        try:
            raw = pd.read_csv(
                self._csv_path,
                header=0,
                names=CSV_COLUMNS,
                dtype=str,
                keep_default_na=False,
                skipinitialspace=True,
                skip_blank_lines=False,
                engine="python",
                on_bad_lines=self._on_bad_line,
                encoding=self._encoding,
            )
        except pd.errors.EmptyDataError:
            logger.warning("Route file %s is empty", self._csv_path)
            raw = pd.DataFrame(columns=CSV_COLUMNS, dtype=str)

        # Index i is file line i + _FIRST_DATA_LINE from here on
        raw = _drop_blank_rows(raw)
        logger.debug("Read %d raw rows from %s", len(raw), self._csv_path)

        transformed = self._transform_to_schema(raw)
        validated = RouteRecordSchema.validate(transformed)

        if validated.empty:
            logger.warning("No valid route records in %s", self._csv_path)
        else:
            logger.info(
                "Loaded %d route records from %s (%d rows skipped)",
                len(validated),
                self._csv_path,
                self.skipped_rows,
            )

        return validated

    def _transform_to_schema(self, raw: pd.DataFrame) -> pd.DataFrame:
        """
        Convert raw text columns to RouteRecordSchema format.

        Mapping:
        - id -> origin_id
        - city -> origin_name
        - to -> destination_id
        - ticket_average -> ticket_price
        - distance -> distance_km
        - hours -> duration_hours

        Args:
            raw: DataFrame of strings as read from the file.

        Returns:
            DataFrame with only the rows that converted cleanly.
        """
        result = pd.DataFrame(index=raw.index)
        result["origin_name"] = raw["city"].fillna("").astype(str).str.strip()

        valid = pd.Series(True, index=raw.index)

        for csv_col, record_col, label, integral, non_negative in _NUMERIC_FIELDS:
            values = parse_numeric_column(raw[csv_col].fillna(""), integral=integral)
            unparsed = values.isna()
            negative = non_negative & (values < 0)

            for idx in raw.index[valid & unparsed]:
                logger.warning(
                    "Error parsing %s at line %d: %r",
                    label,
                    idx + _FIRST_DATA_LINE,
                    raw.at[idx, csv_col],
                )
            for idx in raw.index[valid & negative]:
                logger.warning(
                    "Negative %s at line %d: %r",
                    label,
                    idx + _FIRST_DATA_LINE,
                    raw.at[idx, csv_col],
                )

            valid &= ~(unparsed | negative)
            result[record_col] = values

        self.skipped_rows += int((~valid).sum())

        result = result.loc[valid, RECORD_COLUMNS].reset_index(drop=True)
        result["origin_id"] = result["origin_id"].astype(np.int64)
        result["destination_id"] = result["destination_id"].astype(np.int64)
        return result

    def get_city_ids(self) -> Set[int]:
        """
        Get every city identifier mentioned in the file.

        Returns:
            Identifiers from both the origin and destination columns.
        """
        df = self.get_records_df()
        return set(df["origin_id"].astype(int)) | set(df["destination_id"].astype(int))

    @property
    def name(self) -> str:
        """Human-readable provider name."""
        return "CSV file"

    @property
    def is_available(self) -> bool:
        """Check if the CSV file exists."""
        return self._csv_path.exists()

    @property
    def csv_path(self) -> Path:
        """Location of the CSV file."""
        return self._csv_path
