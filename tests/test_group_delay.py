"""
Tests for the group delay estimator and single-value phase wrapping.
"""
import os
import sys

# Add the src directory to the path if not already installed
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

import numpy as np
import pytest
from uwb_antenna import (
    AntennaPattern,
    DEFAULT_CONSTANTS,
    InsufficientDataError,
    PhysicalConstants,
    ValidationError,
    antenna_group_delay,
    wrap_phase,
)


def _pattern(frequency, ep_phase_slope, et_phase_slope=None, fixed_delay=0.0):
    """2x3 direction pattern with phase exp(i*2*pi*f*slope) on each component."""
    azimuth = np.array([0.0, 90.0])
    zenith = np.array([0.0, 45.0, 90.0])
    frequency = np.asarray(frequency, dtype=float)
    if et_phase_slope is None:
        et_phase_slope = ep_phase_slope
    shape = (len(azimuth), len(zenith), len(frequency))
    ep = np.broadcast_to(np.exp(1j * 2 * np.pi * frequency * ep_phase_slope), shape)
    et = np.broadcast_to(0.3 * np.exp(1j * 2 * np.pi * frequency * et_phase_slope), shape)
    return AntennaPattern(azimuth=azimuth, zenith=zenith, frequency=frequency,
                          ep=ep, et=et, fixed_delay=fixed_delay)


def test_wrap_phase_interval():
    """Wrapped phase lies in (-pi, pi] and differs by a multiple of 2*pi."""
    rng = np.random.default_rng(0)
    theta = np.concatenate([rng.uniform(-60, 60, 500),
                            [0.0, np.pi, -np.pi, 3 * np.pi, -3 * np.pi, 2 * np.pi, 1e-12]])

    wrapped = wrap_phase(theta)

    assert np.all(wrapped > -np.pi)
    assert np.all(wrapped <= np.pi)
    turns = (theta - wrapped) / (2 * np.pi)
    np.testing.assert_allclose(turns, np.round(turns), atol=1e-9)


def test_wrap_phase_known_values():
    """Principal values for simple inputs."""
    np.testing.assert_allclose(wrap_phase(np.pi), np.pi)
    np.testing.assert_allclose(wrap_phase(-np.pi), np.pi)
    np.testing.assert_allclose(wrap_phase(0.5), 0.5)
    np.testing.assert_allclose(wrap_phase(2 * np.pi + 0.5), 0.5)
    np.testing.assert_allclose(wrap_phase(-2 * np.pi - 0.5), -0.5)


def test_group_delay_two_samples():
    """Two samples at 1 and 1.1 GHz with a 1 ns lag on the upper sample."""
    tau = 1e-9
    delay_ref = DEFAULT_CONSTANTS.reference_delay
    frequency = np.array([1e9, 1.1e9])
    ep = np.zeros((1, 1, 2), dtype=complex)
    ep[0, 0, 0] = 1.0
    ep[0, 0, 1] = np.exp(-1j * 2 * np.pi * 1.1e9 * tau)
    pattern = AntennaPattern(azimuth=[0.0], zenith=[0.0], frequency=frequency,
                             ep=ep, et=ep, fixed_delay=0.0)

    result = antenna_group_delay(pattern)

    d_omega = 2 * np.pi * 1e8
    expected = delay_ref + wrap_phase(d_omega * delay_ref - 2 * np.pi * 1.1e9 * tau) / d_omega
    assert result.gd_p.shape == (1, 1, 1)
    np.testing.assert_allclose(result.gd_p[0, 0, 0], expected, rtol=1e-12)
    # A phase lag reads as a negative slope on top of twice the reference delay
    np.testing.assert_allclose(result.gd_p[0, 0, 0], 2 * delay_ref - tau, rtol=1e-6)


def test_linear_phase_without_reference():
    """With no reference distance a phase slope of 2*pi*f*tau reads as tau."""
    tau = 1e-9
    constants = PhysicalConstants(reference_distance=0.0)
    frequency = np.linspace(1e9, 2e9, 11)

    result = antenna_group_delay(_pattern(frequency, tau), constants=constants)

    assert result.gd_p.shape == (2, 3, 10)
    np.testing.assert_allclose(result.gd_p, tau, rtol=1e-9)
    np.testing.assert_allclose(result.gd_t, tau, rtol=1e-9)


def test_reference_delay_removed_from_field():
    """Fields referenced to Rref report Rref/c0 plus their own delay."""
    tau = 1e-9
    delay_ref = DEFAULT_CONSTANTS.reference_delay
    frequency = np.linspace(1e9, 2e9, 11)

    result = antenna_group_delay(_pattern(frequency, tau - delay_ref))

    np.testing.assert_allclose(result.gd_p, delay_ref + tau, rtol=1e-9)


def test_fixed_delay_and_polarizations():
    """The fixed delay is added and each polarization is handled separately."""
    constants = PhysicalConstants(reference_distance=0.0)
    frequency = np.array([1e9, 1.05e9, 1.2e9, 1.3e9])

    result = antenna_group_delay(_pattern(frequency, 1e-9, 2e-9, fixed_delay=0.5e-9),
                                 constants=constants)

    np.testing.assert_allclose(result.gd_p, 1.5e-9, rtol=1e-9)
    np.testing.assert_allclose(result.gd_t, 2.5e-9, rtol=1e-9)
    np.testing.assert_allclose(result.data.frequency_low.values, frequency[:-1])
    np.testing.assert_allclose(result.data.frequency_high.values, frequency[1:])
    np.testing.assert_allclose(result.interval_centers, 0.5 * (frequency[:-1] + frequency[1:]))


def test_source_pattern_unchanged():
    """Group delay leaves the pattern as it was."""
    pattern = _pattern(np.linspace(1e9, 2e9, 5), 1e-9)
    before = pattern.field('ep').copy()

    antenna_group_delay(pattern)

    np.testing.assert_array_equal(pattern.field('ep'), before)
    assert 'gd_p' not in pattern.data


def test_single_frequency_rejected():
    """One frequency sample cannot give a derivative."""
    pattern = _pattern([1e9], 1e-9)

    with pytest.raises(InsufficientDataError):
        antenna_group_delay(pattern)


def test_invalid_pattern_rejected():
    """Malformed records fail validation before any computation."""
    with pytest.raises(ValidationError):
        antenna_group_delay(_pattern([2e9, 1e9], 1e-9))


def test_relative_phase_delay_removes_reference():
    """The reference rotation is taken out before wrapping."""
    from uwb_antenna.group_delay import relative_phase_delay

    d_omega = 2 * np.pi * 1e8
    reference_delay = 3e-9
    x0 = np.array([1.0 + 0j, 2.0 + 0j])
    x1 = x0 * np.exp(-1j * d_omega * reference_delay) * np.exp(1j * 0.25)

    result = relative_phase_delay(x0, x1, d_omega, reference_delay)

    np.testing.assert_allclose(result, 0.25 / d_omega, rtol=1e-9)
