"""Load and store interpolation tables.

Tables are persisted as a JSON object with the two parallel arrays
``x_vals`` and ``y_vals``.  CSV tables hold the breakpoints in one column and
the sample values in the others.  Every loaded table is validated before it is
returned.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from .config import IOConfig
from .file_io import (
    ParseCsvError,
    deserialize_csv_column_vectors_from_path,
    deserialize_json_from_path,
    serialize_json_to_path,
)
from .interpolator import Interpolator

logger = logging.getLogger(__name__)


def save_interpolator(interp: Interpolator, path: str | Path, config: IOConfig | None = None) -> None:
    serialize_json_to_path(interp.to_dict(), path, config)
    logger.debug("saved %d-sample table to %s", len(interp), path)


def load_interpolator(path: str | Path, config: IOConfig | None = None) -> Interpolator:
    interp = deserialize_json_from_path(path, Interpolator.from_dict, config)
    interp.validate()
    logger.debug("loaded %d-sample table from %s", len(interp), path)
    return interp


def interpolator_from_csv(
    path: str | Path,
    x_column: int = 0,
    y_columns: Optional[Sequence[int]] = None,
    config: IOConfig | None = None,
) -> Interpolator:
    """Build a table from CSV columns.

    ``x_column`` holds the breakpoints.  ``y_columns`` defaults to every other
    column; a single y column yields a scalar table, several yield a vector
    table with one component per column.
    """
    columns = deserialize_csv_column_vectors_from_path(path, config=config)
    ncols = columns.shape[0]
    if not -ncols <= x_column < ncols:
        raise ParseCsvError(f"x_column {x_column} out of range for {ncols} column(s)", path)
    x_index = x_column % ncols
    if y_columns is None:
        y_columns = [j for j in range(ncols) if j != x_index]
    if len(y_columns) == 0:
        raise ParseCsvError("no y columns selected", path)
    for j in y_columns:
        if not -ncols <= j < ncols:
            raise ParseCsvError(f"y column {j} out of range for {ncols} column(s)", path)

    if len(y_columns) == 1:
        y_vals = columns[y_columns[0]]
    else:
        y_vals = columns[list(y_columns)].T

    interp = Interpolator.new()
    interp.init(columns[x_index], y_vals)
    interp.validate()
    logger.debug("built %d-sample table with dim %d from %s", len(interp), interp.dim, path)
    return interp
