"""
Common utility functions and constants for antenna time-domain analysis.
"""
import numpy as np
from dataclasses import dataclass
from typing import Union

# Physical constants
lightspeed = 299792458  # Speed of light in vacuum (m/s)
reference_distance = 1.0  # Distance at which far fields are referenced (m)

# Largest step used when padding the frequency axis outside the antenna band (Hz)
frequency_skip = 1e9


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Physical parameters shared by the time-domain and group-delay pipelines.

    Attributes:
        reference_distance: Far-field reference distance in meters
        lightspeed: Propagation speed in m/s
    """
    reference_distance: float = reference_distance
    lightspeed: float = lightspeed

    def __post_init__(self):
        if not np.isfinite(self.reference_distance) or self.reference_distance < 0:
            raise ValueError("reference_distance must be finite and non-negative")
        if not np.isfinite(self.lightspeed) or self.lightspeed <= 0:
            raise ValueError("lightspeed must be finite and positive")

    @property
    def reference_delay(self) -> float:
        """Propagation delay over the reference distance in seconds."""
        return self.reference_distance / self.lightspeed


DEFAULT_CONSTANTS = PhysicalConstants()


def frequency_to_wavelength(frequency: Union[float, np.ndarray], lightspeed: float = lightspeed) -> np.ndarray:
    """
    Convert frequency to wavelength.

    Zero frequency maps to an infinite wavelength.

    Args:
        frequency: Frequency in Hz
        lightspeed: Propagation speed in m/s

    Returns:
        Wavelength in meters

    Raises:
        ValueError: If frequency is negative
    """
    frequency = np.asarray(frequency, dtype=float)

    if np.any(frequency < 0):
        raise ValueError("Frequency must be non-negative")

    with np.errstate(divide='ignore'):
        return lightspeed / frequency


def db_to_amplitude(db_value: Union[float, np.ndarray]) -> np.ndarray:
    """
    Convert a dB value to a linear voltage (field amplitude) factor.

    Args:
        db_value: Value in dB

    Returns:
        10^(db_value/20)
    """
    if not isinstance(db_value, np.ndarray):
        db_value = np.asarray(db_value)

    return 10 ** (db_value / 20.0)


def linear_to_db(linear_value: Union[float, np.ndarray]) -> np.ndarray:
    """
    Convert a linear power value to dB scale.

    Args:
        linear_value: Value in linear scale

    Returns:
        Value in dB

    Raises:
        ValueError: If linear value is negative
    """
    if not isinstance(linear_value, np.ndarray):
        linear_value = np.asarray(linear_value)

    if np.any(linear_value < 0):
        raise ValueError("Linear values must be non-negative for dB conversion")

    # Set values close to zero to a small positive number to avoid log(0)
    linear_value = np.maximum(linear_value, 1e-15)

    return 10.0 * np.log10(linear_value)


def wrap_phase(phase: Union[float, np.ndarray]) -> np.ndarray:
    """
    Map phase values into the half-open interval (-pi, pi].

    Each value is shifted by an integer multiple of 2*pi independently; this
    is not a running unwrap along any axis.

    Args:
        phase: Phase value(s) in radians

    Returns:
        Wrapped phase with the same shape as the input
    """
    phase = np.asarray(phase, dtype=float)
    two_pi = 2.0 * np.pi

    wrapped = phase - two_pi * np.ceil((phase - np.pi) / two_pi)

    # Rounding can land exactly on the excluded endpoint or just above pi
    wrapped = np.where(wrapped <= -np.pi, wrapped + two_pi, wrapped)
    wrapped = np.where(wrapped > np.pi, wrapped - two_pi, wrapped)
    return wrapped
