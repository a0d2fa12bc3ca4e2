"""
Linear interpolation primitives used by the time-domain pipeline.

Both functions are fixed to linear interpolation with an explicit fill value
for queries outside the sampled domain. Complex data is interpolated by
treating the real and imaginary parts independently.
"""
import numpy as np
from typing import Sequence
from scipy.interpolate import RegularGridInterpolator, interp1d


def _interpolate_real_nd(axes, values, query, fill_value):
    # Singleton axes cannot be handled by the linear interpolator: match exactly
    for dim in reversed(range(len(axes))):
        if len(axes[dim]) != 1:
            continue
        if query[dim] != axes[dim][0]:
            return np.full(values.shape[len(axes):], fill_value, dtype=float)
        values = np.take(values, 0, axis=dim)
        axes = axes[:dim] + axes[dim + 1:]
        query = query[:dim] + query[dim + 1:]

    if not axes:
        return np.array(values, dtype=float)

    # The interpolator requires ascending axes
    for dim, axis in enumerate(axes):
        if axis[0] > axis[-1]:
            axes = axes[:dim] + (axis[::-1],) + axes[dim + 1:]
            values = np.flip(values, axis=dim)

    interpolator = RegularGridInterpolator(
        axes, values, method='linear', bounds_error=False, fill_value=fill_value
    )
    return interpolator(np.asarray(query, dtype=float)[np.newaxis, :])[0]


def interpolate_nd(axes: Sequence[np.ndarray], values: np.ndarray,
                   query: Sequence[float], fill_value: float = 0.0) -> np.ndarray:
    """
    Linearly interpolate gridded data at a single point.

    Interpolation runs over the leading len(axes) dimensions of values; any
    trailing dimensions (e.g. frequency) are carried through unchanged.

    Args:
        axes: Sample coordinates for each interpolated dimension, strictly monotonic
        values: Real or complex samples, shape (len(axes[0]), ..., *trailing)
        query: Coordinate of the query point, one value per axis
        fill_value: Value returned for queries outside the sampled domain

    Returns:
        np.ndarray: Interpolated values with the trailing shape of values

    Raises:
        ValueError: If query and axes disagree in length or values does not match the axes
    """
    axes = tuple(np.asarray(axis, dtype=float) for axis in axes)
    query = tuple(float(q) for q in query)
    values = np.asarray(values)

    if len(query) != len(axes):
        raise ValueError(f"Query has {len(query)} coordinates but {len(axes)} axes were given")
    expected = tuple(len(axis) for axis in axes)
    if values.shape[:len(axes)] != expected:
        raise ValueError(f"values shape {values.shape} does not match axes lengths {expected}")

    if np.iscomplexobj(values):
        real = _interpolate_real_nd(axes, values.real, query, fill_value)
        imag = _interpolate_real_nd(axes, values.imag, query, 0.0)
        return real + 1j * imag

    return _interpolate_real_nd(axes, values.astype(float), query, fill_value)


def interpolate_1d(x: np.ndarray, y: np.ndarray, x_query: np.ndarray,
                   fill_value: float = 0.0) -> np.ndarray:
    """
    Linearly interpolate a sampled 1-D function at new abscissas.

    Args:
        x: Strictly ascending sample positions
        y: Real or complex samples at x
        x_query: Query positions
        fill_value: Value returned outside [min(x), max(x)]

    Returns:
        np.ndarray: Interpolated values at x_query
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y)
    x_query = np.asarray(x_query, dtype=float)

    if x.size != y.size:
        raise ValueError(f"x and y lengths differ: {x.size} vs {y.size}")

    if x.size == 1:
        result = np.where(x_query == x[0], y[0], fill_value)
        return result.astype(y.dtype if np.iscomplexobj(y) else float)

    def _linear(samples, fill):
        f = interp1d(x, samples, kind='linear', bounds_error=False,
                     fill_value=fill, assume_sorted=True)
        return f(x_query)

    if np.iscomplexobj(y):
        return _linear(y.real, fill_value) + 1j * _linear(y.imag, 0.0)

    return _linear(y.astype(float), fill_value)
