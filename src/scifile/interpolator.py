"""Piecewise-linear interpolation over scalar and vector-valued samples.

A table pairs ascending ``x`` breakpoints with one ``y`` value per breakpoint.
Scalar tables hold a 1-D ``y`` array, vector tables a 2-D ``(n, k)`` array
whose rows are interpolated with a shared fraction.  Queries are answered by
a binary search under the IEEE-754 total order, so ``-0.0`` sorts below
``0.0`` and an exact match is a bitwise match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Tuple, Union

import numpy as np

Value = Union[float, np.ndarray]

_MAGNITUDE_MASK = np.int64(0x7FFFFFFFFFFFFFFF)


class InterpolationError(ValueError):
    """Base class for failed interpolation queries and malformed tables."""


class NaNQueryError(InterpolationError):
    def __init__(self) -> None:
        super().__init__("attempted to interpolate NaN")


class OutOfBoundsError(InterpolationError):
    """Query outside the closed interval spanned by the table."""

    def __init__(self, x: float, x_min: float, x_max: float) -> None:
        self.x = x
        self.x_min = x_min
        self.x_max = x_max
        super().__init__(f"unable to interpolate value: {x} expected within range {x_min} and {x_max}")


class EmptyTableError(InterpolationError):
    def __init__(self) -> None:
        super().__init__("attempted to interpolate on an empty table")


class InvalidTableError(InterpolationError):
    """Structural problem with the table contents."""


def _total_order_keys(values: np.ndarray) -> np.ndarray:
    """Map float64 values onto int64 keys that sort in IEEE-754 total order."""
    bits = np.ascontiguousarray(values, dtype=np.float64).view(np.int64)
    return bits ^ ((bits >> 63) & _MAGNITUDE_MASK)


def _as_float_array(values: Any, name: str) -> np.ndarray:
    try:
        return np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidTableError(f"{name} must hold numbers, with equal-length rows for vectors: {exc}") from exc


@dataclass(eq=False)
class Interpolator:
    """Linear interpolator over an ascending table of breakpoints."""

    x_vals: np.ndarray = field(default_factory=lambda: np.empty(0))
    y_vals: np.ndarray = field(default_factory=lambda: np.empty(0))
    _keys: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.init(self.x_vals, self.y_vals)

    @classmethod
    def new(cls) -> "Interpolator":
        return cls()

    def init(self, x_vals: Any, y_vals: Any) -> None:
        """Replace the table with copies of ``x_vals`` and ``y_vals``.

        Sortedness and matching lengths are not checked here; see
        :meth:`validate`.
        """
        x = _as_float_array(x_vals, "x_vals")
        y = _as_float_array(y_vals, "y_vals")
        self.x_vals = x
        self.y_vals = y
        self._keys = _total_order_keys(x.reshape(-1))

    def validate(self) -> None:
        x = self.x_vals
        y = self.y_vals
        if x.ndim != 1:
            raise InvalidTableError(f"x_vals must be one-dimensional, got shape {x.shape}")
        if y.ndim not in (1, 2):
            raise InvalidTableError(f"y_vals must hold scalars or vectors, got shape {y.shape}")
        if len(y) != len(x):
            raise InvalidTableError(f"x_vals and y_vals must have the same length ({len(x)} != {len(y)})")
        if not np.all(np.isfinite(x)):
            raise InvalidTableError("x_vals must be finite")
        if np.any(self._keys[1:] < self._keys[:-1]):
            raise InvalidTableError("x_vals must be sorted ascending")

    def __len__(self) -> int:
        return len(self.x_vals)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interpolator):
            return NotImplemented
        return bool(np.array_equal(self.x_vals, other.x_vals) and np.array_equal(self.y_vals, other.y_vals))

    @property
    def x_min(self) -> float:
        if len(self.x_vals) == 0:
            raise EmptyTableError()
        return float(self.x_vals[0])

    @property
    def x_max(self) -> float:
        if len(self.x_vals) == 0:
            raise EmptyTableError()
        return float(self.x_vals[-1])

    @property
    def dim(self) -> int:
        """Number of components per sample; 1 for scalar tables."""
        return 1 if self.y_vals.ndim <= 1 else int(self.y_vals.shape[1])

    def _sample(self, i: int) -> Tuple[float, Value]:
        y = self.y_vals[i]
        if self.y_vals.ndim == 1:
            return float(self.x_vals[i]), float(y)
        return float(self.x_vals[i]), np.array(y, copy=True)

    def interpolate(self, x: float) -> Tuple[float, Value]:
        """Return ``(x_matched, y)`` for the query ``x``.

        ``x_matched`` is the breakpoint that was hit, or the upper bracketing
        breakpoint when the value was interpolated.

        Raises ``NaNQueryError``, ``EmptyTableError``, ``InvalidTableError``
        when the two arrays do not pair up, or ``OutOfBoundsError``.
        """
        x = float(x)
        if math.isnan(x):
            raise NaNQueryError()
        if self.x_vals.ndim != 1:
            raise InvalidTableError(f"x_vals must be one-dimensional, got shape {self.x_vals.shape}")
        n = len(self.x_vals)
        if n == 0:
            raise EmptyTableError()
        if self.y_vals.ndim not in (1, 2) or len(self.y_vals) != n:
            raise InvalidTableError(f"y_vals must hold one scalar or vector per breakpoint, got shape {self.y_vals.shape}")
        x_min = float(self.x_vals[0])
        x_max = float(self.x_vals[-1])
        if x < x_min or x > x_max:
            raise OutOfBoundsError(x, x_min, x_max)

        key = _total_order_keys(np.array([x]))[0]
        i = int(np.searchsorted(self._keys, key, side="left"))
        if i < n and self._keys[i] == key:
            return self._sample(i)
        # Only a signed zero at an endpoint can land outside the brackets.
        if i == 0:
            return self._sample(0)
        if i == n:
            return self._sample(n - 1)

        prev_x = float(self.x_vals[i - 1])
        next_x = float(self.x_vals[i])
        delta = (x - prev_x) / (next_x - prev_x)
        y = (1.0 - delta) * self.y_vals[i - 1] + delta * self.y_vals[i]
        if self.y_vals.ndim == 1:
            return next_x, float(y)
        return next_x, y

    def to_dict(self) -> dict[str, list]:
        return {"x_vals": self.x_vals.tolist(), "y_vals": self.y_vals.tolist()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Interpolator":
        if not isinstance(data, dict):
            raise InvalidTableError(f"table must be a JSON object, got {type(data).__name__}")
        missing = {"x_vals", "y_vals"} - set(data)
        if missing:
            raise InvalidTableError(f"table is missing field(s): {', '.join(sorted(missing))}")
        return cls(x_vals=data["x_vals"], y_vals=data["y_vals"])
