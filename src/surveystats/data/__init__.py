"""Loading response tables from CSV or Parquet files."""

from surveystats.data.loaders import DataFormat, load_table, validate_parquet_available

__all__ = ["DataFormat", "load_table", "validate_parquet_available"]
