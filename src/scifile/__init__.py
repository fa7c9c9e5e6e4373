"""Structured-data file helpers and piecewise-linear interpolation tables."""

from .config import IOConfig
from .file_io import (
    CreateError,
    FileIOError,
    InvalidTypeError,
    OutputFile,
    ParseCsvError,
    ParseJsonError,
    collect_files_from_dir_path,
    create_buffered_file_writer,
    create_directory,
    create_incremented_directory,
    deserialize_csv_column_vectors_from_path,
    deserialize_csv_dataframe_from_path,
    deserialize_csv_rows_from_dir_path,
    deserialize_csv_rows_from_path,
    deserialize_json_from_path,
    open_dir,
    open_file,
    read_csv_header,
    serialize_json_to_path,
)
from .interpolator import (
    EmptyTableError,
    InterpolationError,
    Interpolator,
    InvalidTableError,
    NaNQueryError,
    OutOfBoundsError,
)
from .table_io import interpolator_from_csv, load_interpolator, save_interpolator

__version__ = "0.1.0"

__all__ = [
    "IOConfig",
    "CreateError",
    "FileIOError",
    "InvalidTypeError",
    "OutputFile",
    "ParseCsvError",
    "ParseJsonError",
    "collect_files_from_dir_path",
    "create_buffered_file_writer",
    "create_directory",
    "create_incremented_directory",
    "deserialize_csv_column_vectors_from_path",
    "deserialize_csv_dataframe_from_path",
    "deserialize_csv_rows_from_dir_path",
    "deserialize_csv_rows_from_path",
    "deserialize_json_from_path",
    "open_dir",
    "open_file",
    "read_csv_header",
    "serialize_json_to_path",
    "EmptyTableError",
    "InterpolationError",
    "Interpolator",
    "InvalidTableError",
    "NaNQueryError",
    "OutOfBoundsError",
    "interpolator_from_csv",
    "load_interpolator",
    "save_interpolator",
]
