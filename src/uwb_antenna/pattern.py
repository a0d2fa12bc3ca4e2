"""
Core class for frequency-domain antenna far-field records.
"""
import numpy as np
import xarray as xr
from typing import Optional, Dict, Any, List
import logging

from .exceptions import ValidationError

# Configure logging
logger = logging.getLogger(__name__)

DIMS = ('azimuth', 'zenith', 'frequency')
COMPLEX_FIELDS = ('ep', 'et', 'aeff_p', 'aeff_t')
OPTIONAL_FIELDS = ('aeff_p', 'aeff_t', 'dir_abs')


def _read_only(array: np.ndarray) -> np.ndarray:
    array = np.array(array, copy=True)
    array.flags.writeable = False
    return array


class AntennaPattern:
    """
    A class to represent antenna far field characterizations over frequency.

    The pattern is immutable: arrays are copied on construction and marked
    read-only, and every operation returns a new object.

    Attributes:
        data (xarray.Dataset): The core dataset with dimensions
            (azimuth, zenith, frequency) and data variables:
            - ep: Complex phi polarization field component
            - et: Complex theta polarization field component
            - aeff_p, aeff_t: Complex effective apertures (optional)
            - dir_abs: Absolute directivity, linear (optional)
            Scalars fixed_delay (s) and loss (dB) are stored in data.attrs.
        metadata (Dict[str, Any]): Optional metadata for the pattern
    """

    def __init__(self,
                 azimuth: np.ndarray,
                 zenith: np.ndarray,
                 frequency: np.ndarray,
                 ep: np.ndarray,
                 et: np.ndarray,
                 aeff_p: Optional[np.ndarray] = None,
                 aeff_t: Optional[np.ndarray] = None,
                 dir_abs: Optional[np.ndarray] = None,
                 fixed_delay: float = 0.0,
                 loss: float = 0.0,
                 metadata: Optional[Dict[str, Any]] = None):
        """
        Initialize an AntennaPattern with the given parameters.

        Args:
            azimuth: Array of azimuth angles in degrees
            zenith: Array of zenith angles in degrees
            frequency: Array of frequencies in Hz
            ep: Complex array of phi field values [azimuth, zenith, frequency]
            et: Complex array of theta field values [azimuth, zenith, frequency]
            aeff_p: Optional complex phi effective aperture, same shape
            aeff_t: Optional complex theta effective aperture, same shape
            dir_abs: Optional absolute directivity, same shape
            fixed_delay: System-level constant delay in seconds
            loss: Loss in dB applied by the time-domain pipeline
            metadata: Optional metadata dictionary

        Raises:
            ValueError: If arrays have incompatible dimensions
        """
        azimuth = np.atleast_1d(np.asarray(azimuth, dtype=float))
        zenith = np.atleast_1d(np.asarray(zenith, dtype=float))
        frequency = np.atleast_1d(np.asarray(frequency, dtype=float))

        expected_shape = (len(azimuth), len(zenith), len(frequency))
        fields = {
            'ep': np.asarray(ep, dtype=np.complex128),
            'et': np.asarray(et, dtype=np.complex128),
        }
        if aeff_p is not None:
            fields['aeff_p'] = np.asarray(aeff_p, dtype=np.complex128)
        if aeff_t is not None:
            fields['aeff_t'] = np.asarray(aeff_t, dtype=np.complex128)
        if dir_abs is not None:
            dir_abs = np.asarray(dir_abs)
            if np.iscomplexobj(dir_abs):
                raise ValueError("dir_abs must be real valued")
            fields['dir_abs'] = dir_abs.astype(float)

        # Validate array dimensions
        for name, values in fields.items():
            if values.shape != expected_shape:
                raise ValueError(f"{name} shape mismatch: expected {expected_shape}, got {values.shape}")

        self.data = xr.Dataset(
            data_vars={name: (DIMS, _read_only(values)) for name, values in fields.items()},
            coords={
                'azimuth': _read_only(azimuth),
                'zenith': _read_only(zenith),
                'frequency': _read_only(frequency),
            },
            attrs={
                'fixed_delay': float(fixed_delay),
                'loss': float(loss),
            }
        )

        self.metadata = metadata.copy() if metadata is not None else {}

    @property
    def frequencies(self) -> np.ndarray:
        """Get frequencies in Hz."""
        return self.data.frequency.values

    @property
    def azimuth_angles(self) -> np.ndarray:
        """Get azimuth angles in degrees."""
        return self.data.azimuth.values

    @property
    def zenith_angles(self) -> np.ndarray:
        """Get zenith angles in degrees."""
        return self.data.zenith.values

    @property
    def fixed_delay(self) -> float:
        return self.data.attrs['fixed_delay']

    @property
    def loss(self) -> float:
        return self.data.attrs['loss']

    @property
    def has_aperture(self) -> bool:
        """True if both effective aperture components are present."""
        return 'aeff_p' in self.data and 'aeff_t' in self.data

    def field(self, name: str) -> np.ndarray:
        """
        Get the raw array of a data variable.

        Raises:
            KeyError: If the variable is not part of the pattern
        """
        if name not in self.data:
            raise KeyError(f"Field {name} not found in pattern data. "
                           f"Available: {list(self.data.data_vars.keys())}")
        return self.data[name].values

    def with_fields(self, **fields: np.ndarray) -> 'AntennaPattern':
        """
        Create a new pattern with additional or replaced data variables.

        Args:
            **fields: Arrays keyed by variable name (ep, et, aeff_p, aeff_t, dir_abs)

        Returns:
            AntennaPattern: New pattern; this one is unchanged
        """
        unknown = set(fields) - set(('ep', 'et') + OPTIONAL_FIELDS)
        if unknown:
            raise ValueError(f"Unknown pattern fields: {sorted(unknown)}")

        arrays = {name: self.data[name].values for name in self.data.data_vars}
        arrays.update(fields)

        return AntennaPattern(
            azimuth=self.azimuth_angles,
            zenith=self.zenith_angles,
            frequency=self.frequencies,
            fixed_delay=self.fixed_delay,
            loss=self.loss,
            metadata=self.metadata,
            **arrays
        )

    def copy(self) -> 'AntennaPattern':
        """
        Create a copy of the antenna pattern.

        Returns:
            AntennaPattern: A new AntennaPattern instance with copied data
        """
        return self.with_fields()

    def __repr__(self) -> str:
        return (f"AntennaPattern(azimuth={len(self.azimuth_angles)}, "
                f"zenith={len(self.zenith_angles)}, frequency={len(self.frequencies)}, "
                f"fields={list(self.data.data_vars.keys())})")


def _check_axis(name: str, axis: np.ndarray, diagnostics: List[str]) -> None:
    if axis.ndim != 1 or axis.size == 0:
        diagnostics.append(f"{name} axis must be a non-empty 1-D array")
        return
    if not np.all(np.isfinite(axis)):
        diagnostics.append(f"{name} axis contains NaN or infinite values")
        return
    if axis.size > 1:
        steps = np.diff(axis)
        if not (np.all(steps > 0) or np.all(steps < 0)):
            diagnostics.append(f"{name} axis must be strictly monotonic")


def validate_pattern(pattern: AntennaPattern) -> List[str]:
    """
    Check that an antenna pattern is well formed.

    Args:
        pattern: AntennaPattern to check

    Returns:
        List[str]: Diagnostics, empty if the pattern is valid
    """
    diagnostics: List[str] = []

    if not isinstance(pattern, AntennaPattern):
        return [f"expected an AntennaPattern, got {type(pattern).__name__}"]

    for name in ('ep', 'et'):
        if name not in pattern.data:
            diagnostics.append(f"missing required field {name}")

    _check_axis('azimuth', pattern.azimuth_angles, diagnostics)
    _check_axis('zenith', pattern.zenith_angles, diagnostics)

    frequency = pattern.frequencies
    if frequency.ndim != 1 or frequency.size == 0:
        diagnostics.append("frequency axis must be a non-empty 1-D array")
    elif not np.all(np.isfinite(frequency)):
        diagnostics.append("frequency axis contains NaN or infinite values")
    else:
        if np.any(frequency < 0):
            diagnostics.append("frequency axis contains negative values")
        if frequency.size > 1 and not np.all(np.diff(frequency) > 0):
            diagnostics.append("frequency axis must be strictly ascending without duplicates")

    expected_shape = (pattern.azimuth_angles.size, pattern.zenith_angles.size, frequency.size)
    for name in pattern.data.data_vars:
        values = pattern.data[name]
        if values.dims != DIMS or values.shape != expected_shape:
            diagnostics.append(f"{name} has dims {values.dims} and shape {values.shape}, "
                               f"expected {DIMS} and {expected_shape}")
        elif not np.all(np.isfinite(values.values)):
            diagnostics.append(f"{name} contains NaN or infinite values")

    for name in ('fixed_delay', 'loss'):
        value = pattern.data.attrs.get(name)
        if value is None or not np.isfinite(value):
            diagnostics.append(f"{name} must be a finite scalar")

    return diagnostics


def require_valid(pattern: AntennaPattern) -> None:
    """
    Raise if the pattern fails validation.

    Raises:
        ValidationError: With every diagnostic returned by validate_pattern
    """
    diagnostics = validate_pattern(pattern)
    if diagnostics:
        logger.error(f"Antenna pattern rejected: {'; '.join(diagnostics)}")
        raise ValidationError(diagnostics)
