"""Data loading functions for response tables.

Supports CSV files and single Parquet files. Parquet requires PyArrow.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

_PYARROW_AVAILABLE: Optional[bool] = None


class DataFormat(str, Enum):
    """Supported data formats."""

    CSV = "csv"
    PARQUET = "parquet"

    @classmethod
    def from_path(cls, path: Path) -> "DataFormat":
        """
        Infer format from path.

        Raises
        ------
        ValueError
            If format cannot be inferred
        """
        suffix = Path(path).suffix.lower()
        if suffix == ".csv":
            return cls.CSV
        elif suffix == ".parquet":
            return cls.PARQUET
        else:
            raise ValueError(
                f"Cannot infer data format from path: {path}. Expected a .csv or .parquet file."
            )


def validate_parquet_available() -> None:
    """
    Check if PyArrow is available for Parquet operations.

    Raises
    ------
    ImportError
        If PyArrow is not installed with helpful installation message
    """
    global _PYARROW_AVAILABLE

    if _PYARROW_AVAILABLE is None:
        try:
            import pyarrow  # noqa: F401

            _PYARROW_AVAILABLE = True
        except ImportError:
            _PYARROW_AVAILABLE = False

    if not _PYARROW_AVAILABLE:
        raise ImportError(
            "PyArrow is required for Parquet support but is not installed.\n"
            "Install with: pip install surveystats[parquet] or pip install pyarrow"
        )


def load_table(path: Path, columns: Optional[List[str]] = None) -> pd.DataFrame:
    """
    Load a response table from a CSV or Parquet file.

    Parameters
    ----------
    path : Path
        Path to data file
    columns : List[str], optional
        Subset of columns to load

    Returns
    -------
    pd.DataFrame
        Loaded data

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    ValueError
        If the format is not supported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    fmt = DataFormat.from_path(path)
    logger.info(f"Loading table from {path} (format: {fmt.value})")

    if fmt == DataFormat.CSV:
        kwargs = {}
        if columns is not None:
            kwargs["usecols"] = columns
        return pd.read_csv(path, **kwargs)

    validate_parquet_available()
    return pd.read_parquet(path, columns=columns)
