"""Read single-lead ECG recordings from two-column tabular text.

The time and voltage columns are picked from the header: the first column
whose name contains "time" is the time column, and the first whose name
contains "volt", "lead" or "val" is the voltage column. Without a match the
first and second columns are used. Rows where either value is missing or not
numeric are dropped, and so are rows with more fields than the header.
"""

import io
from pathlib import Path
from typing import IO

import pandas as pd

from ._logging import logger
from .signal import Signal

TIME_KEYS = ("time",)
VOLTAGE_KEYS = ("volt", "lead", "val")


def _find_column(columns: list[str], keys: tuple[str, ...], fallback: int) -> str:
    for column in columns:
        if any(key in column.lower() for key in keys):
            return column
    return columns[fallback]


def select_columns(columns: list[str]) -> tuple[str, str]:
    """Pick the time and voltage columns from a header.

    Args:
        columns: Column names in file order

    Returns:
        Tuple of (time_column, voltage_column)

    Raises:
        ValueError: If there are fewer than two columns
    """
    columns = [str(c) for c in columns]
    if len(columns) < 2:
        raise ValueError(f"Expected at least two columns (time, voltage), got {columns}")
    return _find_column(columns, TIME_KEYS, 0), _find_column(columns, VOLTAGE_KEYS, 1)


def from_dataframe(df: pd.DataFrame, n_skipped: int = 0) -> Signal:
    """Build a Signal from a DataFrame with a time and a voltage column.

    Args:
        df: Parsed table
        n_skipped: Number of rows the parser already rejected

    Raises:
        ValueError: If the table has neither parsed nor skipped rows, or fewer
            than two columns
    """
    if df.empty and not n_skipped:
        raise ValueError("No data found in CSV")

    time_col, voltage_col = select_columns(list(df.columns))
    values = pd.DataFrame(
        {
            "time": pd.to_numeric(df[time_col], errors="coerce"),
            "voltage": pd.to_numeric(df[voltage_col], errors="coerce"),
        }
    ).dropna()

    n_dropped = len(df) - len(values) + n_skipped
    if n_dropped:
        logger.debug(f"Dropped {n_dropped} malformed rows out of {len(df) + n_skipped}")
    logger.info(f"Loaded {len(values)} samples (time='{time_col}', voltage='{voltage_col}')")

    return Signal(time=values["time"].to_numpy(), voltage=values["voltage"].to_numpy())


def read_csv(path_or_buffer: str | Path | IO[str]) -> Signal:
    """Read a recording from a CSV file with a header row.

    Args:
        path_or_buffer: Path to the file, or an open text buffer

    Returns:
        Signal without ground-truth segments

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file has no data rows or fewer than two columns,
            or if the time column decreases

    Examples:
        >>> signal = read_csv("recording.csv")
    """
    skipped: list[list[str]] = []

    def skip_bad_line(fields: list[str]) -> None:
        skipped.append(fields)

    df = pd.read_csv(
        path_or_buffer,
        skipinitialspace=True,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=skip_bad_line,
    )
    return from_dataframe(df, n_skipped=len(skipped))


def parse_csv_text(text: str) -> Signal:
    """Parse CSV text already held in memory, e.g. an uploaded file."""
    return read_csv(io.StringIO(text))
