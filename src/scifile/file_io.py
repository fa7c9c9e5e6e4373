"""Helpers for reading and writing structured data on the filesystem.

Typical use::

    data = deserialize_json_from_path("/path/to/config.json")
    serialize_json_to_path(data, "/path/to/output.json")

    out_dir = create_incremented_directory("/path/to/output")   # .../run_<n>
    with OutputFile(out_dir / "samples.jsonl") as out:
        out.write_json_line({"x": 1.0, "y": 2.0})

    columns = deserialize_csv_column_vectors_from_path("/path/to/data.csv")
    rows = deserialize_csv_rows_from_path("/path/to/data.csv")

CSV files carry a header row, may contain ``#`` comment lines, and must have
the same number of fields on every row.  Numeric readers return ``numpy``
arrays; mixed-type tables are read into a ``pandas.DataFrame``.

The numeric readers split on the delimiter without quote handling, so a
quoted field that contains the delimiter (in the header or in a data row) is
counted as several fields.  Use ``deserialize_csv_dataframe_from_path`` for
such files.
"""

from __future__ import annotations

import itertools
import json
import logging
from pathlib import Path
from typing import IO, Any, Callable, Optional, TypeVar

import numpy as np

from .config import DEFAULT_CONFIG, IOConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileIOError(OSError):
    """Filesystem or parsing failure tied to ``path``."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(f"file: `{path}`: {message}")
        self.path = Path(path)


class InvalidTypeError(FileIOError):
    """A file was found where a directory was expected, or the reverse."""


class CreateError(FileIOError):
    pass


class ParseCsvError(FileIOError, ValueError):
    pass


class ParseJsonError(FileIOError, ValueError):
    pass


def _json_default(obj: Any) -> Any:
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def create_buffered_file_writer(path: str | Path, config: IOConfig | None = None) -> IO[str]:
    """Create ``path`` for buffered text writing; the file must not exist yet."""
    cfg = config or DEFAULT_CONFIG
    try:
        return open(path, "x", encoding=cfg.encoding, newline="")
    except OSError as exc:
        raise CreateError(f"unable to create file: {exc.strerror or exc}", path) from exc


class OutputFile:
    """Buffered writer on a newly created file, with JSON and JSONL output."""

    def __init__(self, path: str | Path, config: IOConfig | None = None) -> None:
        self.path = Path(path)
        self.config = config or DEFAULT_CONFIG
        self._writer = create_buffered_file_writer(self.path, self.config)
        logger.debug("created output file %s", self.path)

    def __enter__(self) -> "OutputFile":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._writer.closed

    def _write(self, text: str) -> None:
        try:
            self._writer.write(text)
        except OSError as exc:
            raise FileIOError(f"write failed: {exc.strerror or exc}", self.path) from exc

    def write_json_line(self, data: Any) -> None:
        """Append one compact JSON document followed by a newline."""
        self._write(json.dumps(data, default=_json_default, separators=(",", ":")) + "\n")

    def write_json(self, data: Any) -> None:
        """Append ``data`` as indented JSON."""
        self._write(json.dumps(data, default=_json_default, indent=self.config.json_indent) + "\n")

    def flush(self) -> None:
        try:
            self._writer.flush()
        except OSError as exc:
            raise FileIOError(f"flush failed: {exc.strerror or exc}", self.path) from exc

    def close(self) -> None:
        if not self._writer.closed:
            self.flush()
            self._writer.close()


def _stat(path: Path):
    try:
        return path.stat()
    except OSError as exc:
        raise FileIOError(exc.strerror or str(exc), path) from exc


def create_directory(path: str | Path) -> None:
    """Create ``path`` and any missing parents; an existing directory is accepted."""
    path = Path(path)
    if path.exists():
        if not path.is_dir():
            raise InvalidTypeError("attempt to open file as a directory", path)
        return
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CreateError(f"unable to create directory: {exc.strerror or exc}", path) from exc
    logger.debug("created directory %s", path)


def create_incremented_directory(path: str | Path, config: IOConfig | None = None) -> Path:
    """Create ``path/<prefix><n>`` for the lowest unused ``n`` and return it.

    ``path`` itself and its parents are created as needed.
    """
    cfg = config or DEFAULT_CONFIG
    base = Path(path)
    create_directory(base)
    for i in itertools.count():
        output_path = base / f"{cfg.run_prefix}{i}"
        try:
            output_path.mkdir()
        except FileExistsError:
            continue
        except OSError as exc:
            raise CreateError(f"unable to create directory: {exc.strerror or exc}", output_path) from exc
        logger.debug("created run directory %s", output_path)
        return output_path


def serialize_json_to_path(data: Any, path: str | Path, config: IOConfig | None = None) -> None:
    """Write ``data`` as JSON to a new file at ``path``."""
    with OutputFile(path, config) as out:
        out.write_json(data)


def open_file(path: str | Path, config: IOConfig | None = None) -> IO[str]:
    """Open a regular file for reading text."""
    cfg = config or DEFAULT_CONFIG
    path = Path(path)
    _stat(path)
    if not path.is_file():
        raise InvalidTypeError("attempt to open directory as a file", path)
    try:
        return open(path, "r", encoding=cfg.encoding, newline="")
    except OSError as exc:
        raise FileIOError(exc.strerror or str(exc), path) from exc


def open_dir(path: str | Path) -> Path:
    """Return ``path`` after checking that it is an accessible directory."""
    path = Path(path)
    _stat(path)
    if not path.is_dir():
        raise InvalidTypeError("attempt to open file as a directory", path)
    return path


def deserialize_json_from_path(
    path: str | Path,
    factory: Optional[Callable[[Any], T]] = None,
    config: IOConfig | None = None,
) -> Any:
    """Read JSON from ``path``; ``factory`` converts the decoded document."""
    with open_file(path, config) as fh:
        try:
            data = json.load(fh)
        except ValueError as exc:
            raise ParseJsonError(f"parsing error with JSON file: {exc}", path) from exc
    if factory is None:
        return data
    return factory(data)


def _read_csv_lines(path: str | Path, cfg: IOConfig) -> list[str]:
    with open_file(path, cfg) as fh:
        try:
            return [line for line in fh if line.strip() and not line.startswith(cfg.csv_comment)]
        except UnicodeDecodeError as exc:
            raise ParseCsvError(f"parsing error with CSV file: {exc}", path) from exc


def read_csv_header(path: str | Path, config: IOConfig | None = None) -> list[str]:
    """Field names from the header row of a CSV file."""
    cfg = config or DEFAULT_CONFIG
    lines = _read_csv_lines(path, cfg)
    if not cfg.csv_has_headers or not lines:
        return []
    return [name.strip() for name in lines[0].rstrip("\r\n").split(cfg.csv_delimiter)]


def deserialize_csv_rows_from_path(
    path: str | Path,
    dtype: Any = float,
    config: IOConfig | None = None,
) -> np.ndarray:
    """Read a CSV file into a 2-D array with one row per record.

    All fields are parsed as ``dtype``.
    """
    cfg = config or DEFAULT_CONFIG
    lines = _read_csv_lines(path, cfg)
    width: Optional[int] = None
    if cfg.csv_has_headers and lines:
        width = len(lines[0].split(cfg.csv_delimiter))
        lines = lines[1:]
    if not lines:
        return np.empty((0, width or 0), dtype=dtype)

    try:
        rows = np.loadtxt(lines, delimiter=cfg.csv_delimiter, dtype=dtype, comments=None, ndmin=2)
    except ValueError as exc:
        raise ParseCsvError(f"parsing error with CSV file: {exc}", path) from exc
    if width is not None and rows.shape[1] != width:
        raise ParseCsvError(f"expected {width} fields per row, found {rows.shape[1]}", path)
    return rows


def _transpose(matrix: np.ndarray) -> np.ndarray:
    if matrix.size == 0:
        return np.empty((matrix.shape[1] if matrix.ndim == 2 else 0, 0), dtype=matrix.dtype)
    return np.ascontiguousarray(matrix.T)


def deserialize_csv_column_vectors_from_path(
    path: str | Path,
    dtype: Any = float,
    config: IOConfig | None = None,
) -> np.ndarray:
    """Read a CSV file into column vectors, ``result[j]`` being column ``j``."""
    return _transpose(deserialize_csv_rows_from_path(path, dtype=dtype, config=config))


def deserialize_csv_dataframe_from_path(path: str | Path, config: IOConfig | None = None):
    """Read a mixed-type CSV file into a ``pandas.DataFrame``, one record per row."""
    try:
        import pandas as pd
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("Reading CSV records requires pandas installed") from exc

    cfg = config or DEFAULT_CONFIG
    with open_file(path, cfg) as fh:
        try:
            return pd.read_csv(
                fh,
                sep=cfg.csv_delimiter,
                comment=cfg.csv_comment,
                header=0 if cfg.csv_has_headers else None,
                skip_blank_lines=True,
                skipinitialspace=True,
            )
        except ValueError as exc:
            raise ParseCsvError(f"parsing error with CSV file: {exc}", path) from exc


def collect_files_from_dir_path(path: str | Path) -> list[Path]:
    """Regular files directly inside ``path``, sorted by name."""
    directory = open_dir(path)
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise FileIOError(exc.strerror or str(exc), directory) from exc
    return sorted(entry for entry in entries if entry.is_file())


def deserialize_csv_rows_from_dir_path(
    path: str | Path,
    dtype: Any = float,
    config: IOConfig | None = None,
) -> list[np.ndarray]:
    """Column vectors of every ``.csv`` file in ``path``, in file name order."""
    return [
        deserialize_csv_column_vectors_from_path(file, dtype=dtype, config=config)
        for file in collect_files_from_dir_path(path)
        if file.suffix == ".csv"
    ]
