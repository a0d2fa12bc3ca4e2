"""
Analysis functions for antenna far-field records.
"""
import numpy as np
import logging
from typing import Optional

from .pattern import AntennaPattern
from .utilities import DEFAULT_CONSTANTS, PhysicalConstants, frequency_to_wavelength, linear_to_db

# Configure logging
logger = logging.getLogger(__name__)


def radiated_power(pattern: AntennaPattern) -> np.ndarray:
    """
    Integrate the radiation intensity over the sampled sphere.

    Radiation intensity is |ep|^2 + |et|^2. Integration uses the trapezoid
    rule over zenith (area element sin|zenith|) and azimuth.

    Args:
        pattern: AntennaPattern object

    Returns:
        np.ndarray: Total radiated power per frequency, shape (n_frequency,)
    """
    azimuth_rad = np.deg2rad(pattern.azimuth_angles)
    zenith_rad = np.deg2rad(pattern.zenith_angles)

    intensity = np.abs(pattern.field('ep'))**2 + np.abs(pattern.field('et'))**2

    # Area element for zenith measured from boresight (may be negative)
    integrand = intensity * np.sin(np.abs(zenith_rad))[np.newaxis, :, np.newaxis]

    if len(azimuth_rad) == 1 or len(zenith_rad) == 1:
        logger.warning("Pattern has only one azimuth or zenith point - directivity calculation may be inaccurate")
        d_azimuth = azimuth_rad[1] - azimuth_rad[0] if len(azimuth_rad) > 1 else 0
        d_zenith = zenith_rad[1] - zenith_rad[0] if len(zenith_rad) > 1 else 0
        return np.abs(np.sum(integrand, axis=(0, 1)) * d_azimuth * d_zenith)

    power = np.trapezoid(np.trapezoid(integrand, zenith_rad, axis=1), azimuth_rad, axis=0)
    return np.abs(power)


def complete_directivity(pattern: AntennaPattern,
                         constants: Optional[PhysicalConstants] = None) -> AntennaPattern:
    """
    Derive directivity and complex effective apertures from the far fields.

    Directivity is D = 4*pi*U/P_total. The partial directivity of each
    polarization D_x = 4*pi*|E_x|^2/P_total gives the effective aperture
    magnitude sqrt(lambda^2 * D_x / (4*pi)); the phase is taken from the field.

    Args:
        pattern: AntennaPattern with ep and et
        constants: Physical constants (default: DEFAULT_CONSTANTS)

    Returns:
        AntennaPattern: New pattern with dir_abs, aeff_p and aeff_t set
    """
    constants = constants or DEFAULT_CONSTANTS

    ep = pattern.field('ep')
    et = pattern.field('et')
    frequency = pattern.frequencies

    # Coverage check, informational only
    azimuth_span = np.ptp(pattern.azimuth_angles)
    zenith_span = np.ptp(np.abs(pattern.zenith_angles))
    if azimuth_span < 360.0 - np.max(np.abs(np.diff(pattern.azimuth_angles)), initial=0) or zenith_span < 180.0:
        logger.warning(f"Partial sphere coverage (azimuth span {azimuth_span:.1f} deg, "
                       f"zenith span {zenith_span:.1f} deg) - directivity is relative to the sampled region")

    total_power = radiated_power(pattern)
    if np.any(total_power <= 0):
        logger.warning("Total radiated power is zero at some frequencies - check pattern data")
        total_power = np.maximum(total_power, 1e-15)
    total_power = total_power[np.newaxis, np.newaxis, :]

    dir_p = 4 * np.pi * np.abs(ep)**2 / total_power
    dir_t = 4 * np.pi * np.abs(et)**2 / total_power

    wavelength = frequency_to_wavelength(frequency, constants.lightspeed)
    aperture_scale = np.where(np.isfinite(wavelength), wavelength**2 / (4 * np.pi), 0.0)
    aperture_scale = aperture_scale[np.newaxis, np.newaxis, :]

    aeff_p = np.sqrt(aperture_scale * dir_p) * np.exp(1j * np.angle(ep))
    aeff_t = np.sqrt(aperture_scale * dir_t) * np.exp(1j * np.angle(et))

    logger.info(f"Completed directivity for {len(frequency)} frequency(ies), "
                f"peak directivity {float(linear_to_db(np.max(dir_p + dir_t))):.2f} dBi")

    return pattern.with_fields(dir_abs=dir_p + dir_t, aeff_p=aeff_p, aeff_t=aeff_t)
