"""
Group delay of an antenna along the phi and theta polarizations.
"""
import numpy as np
import xarray as xr
import logging
from typing import Optional

from .exceptions import InsufficientDataError
from .pattern import AntennaPattern, require_valid
from .utilities import DEFAULT_CONSTANTS, PhysicalConstants, wrap_phase

# Configure logging
logger = logging.getLogger(__name__)

GD_DIMS = ('azimuth', 'zenith', 'interval')


class GroupDelayField:
    """
    Group delay per direction and per native frequency interval.

    Attributes:
        data (xarray.Dataset): Dataset with real gd_p and gd_t (seconds) over
            dimensions (azimuth, zenith, interval). The interval dimension
            carries frequency_low and frequency_high coordinates.
    """

    def __init__(self, azimuth: np.ndarray, zenith: np.ndarray, frequency: np.ndarray,
                 gd_p: np.ndarray, gd_t: np.ndarray):
        frequency = np.asarray(frequency, dtype=float)
        self.data = xr.Dataset(
            data_vars={
                'gd_p': (GD_DIMS, np.asarray(gd_p, dtype=float)),
                'gd_t': (GD_DIMS, np.asarray(gd_t, dtype=float)),
            },
            coords={
                'azimuth': np.asarray(azimuth, dtype=float),
                'zenith': np.asarray(zenith, dtype=float),
                'frequency_low': ('interval', frequency[:-1]),
                'frequency_high': ('interval', frequency[1:]),
            }
        )

    @property
    def gd_p(self) -> np.ndarray:
        return self.data.gd_p.values

    @property
    def gd_t(self) -> np.ndarray:
        return self.data.gd_t.values

    @property
    def interval_centers(self) -> np.ndarray:
        """Mid-point frequency of each interval in Hz."""
        return 0.5 * (self.data.frequency_low.values + self.data.frequency_high.values)

    def __repr__(self) -> str:
        return f"GroupDelayField(shape={self.gd_p.shape})"


def relative_phase_delay(x0: np.ndarray, x1: np.ndarray, d_omega: np.ndarray,
                         reference_delay: float) -> np.ndarray:
    """
    Phase slope between two adjacent frequency samples, in seconds.

    The reference delay is removed before taking the phase so that the
    remaining rotation stays within (-pi, pi].

    Args:
        x0: Complex samples at the lower frequency
        x1: Complex samples at the upper frequency
        d_omega: Angular frequency step, broadcastable against the samples
        reference_delay: Reference delay in seconds

    Returns:
        np.ndarray: wrap(arg(exp(i*d_omega*reference_delay) * x1 * conj(x0))) / d_omega
    """
    reference = np.exp(1j * d_omega * reference_delay)
    phase = wrap_phase(np.angle(reference * x1 * np.conj(x0)))
    return phase / d_omega


def antenna_group_delay(pattern: AntennaPattern,
                        constants: Optional[PhysicalConstants] = None) -> GroupDelayField:
    """
    Calculate the group delay of an antenna along the phi and theta components.

    For every pair of adjacent native frequencies the result is
    fixed_delay + reference_delay + relative_phase / d_omega.

    Args:
        pattern: AntennaPattern object
        constants: Physical constants (default: DEFAULT_CONSTANTS)

    Returns:
        GroupDelayField: gd_p and gd_t with one value per frequency interval

    Raises:
        ValidationError: If the pattern is malformed
        InsufficientDataError: If the pattern has fewer than two frequencies
    """
    constants = constants or DEFAULT_CONSTANTS
    require_valid(pattern)

    frequency = pattern.frequencies
    if len(frequency) < 2:
        raise InsufficientDataError(
            f"Group delay needs at least two frequency points, got {len(frequency)}"
        )

    delay = constants.reference_delay
    d_omega = (2.0 * np.pi * np.diff(frequency))[np.newaxis, np.newaxis, :]

    group_delay = {}
    for name in ('ep', 'et'):
        field = pattern.field(name)
        group_delay[name] = (pattern.fixed_delay + delay
                             + relative_phase_delay(field[..., :-1], field[..., 1:], d_omega, delay))

    logger.info(f"Computed group delay over {len(frequency) - 1} interval(s) for "
                f"{len(pattern.azimuth_angles)}x{len(pattern.zenith_angles)} direction(s)")

    return GroupDelayField(
        pattern.azimuth_angles, pattern.zenith_angles, frequency,
        gd_p=group_delay['ep'], gd_t=group_delay['et']
    )
