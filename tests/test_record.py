"""
Tests for AntennaRecord composition and NPZ persistence.
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
    AntennaRecord,
    load_pattern_npz,
    load_record_npz,
    save_pattern_npz,
    save_record_npz,
)

TD_KEYS = {'td_freqs', 'td_ep', 'td_et', 'td_aeffp', 'td_aefft', 'td_dir_abs', 'td_az', 'td_zen',
           'td_tmax', 'td_ts', 'n_ffts', 'td_delay', 'td_loss'}


def _pattern(with_aperture=True):
    azimuth = np.array([0.0, 90.0])
    zenith = np.array([0.0, 90.0])
    frequency = np.array([3e9, 4e9, 5e9])
    shape = (2, 2, 3)
    ep = np.full(shape, 1 + 1j)
    extra = {}
    if with_aperture:
        extra = dict(aeff_p=0.1 * ep, aeff_t=0.2 * ep, dir_abs=np.full(shape, 1.5))
    return AntennaPattern(azimuth=azimuth, zenith=zenith, frequency=frequency,
                          ep=ep, et=0.5 * ep, fixed_delay=1e-10, loss=-1.0,
                          metadata={'source': 'unit test'}, **extra)


def test_record_adds_outputs_without_touching_original():
    """Each stage returns a new record and keeps the source pattern."""
    record = AntennaRecord(_pattern())

    with_td = record.with_time_domain(1e-8, 5e-11, 45.0, 45.0)
    with_both = with_td.with_group_delay()

    assert record.time_domain is None and record.group_delay is None
    assert with_td.group_delay is None
    assert with_both.time_domain is with_td.time_domain
    assert with_both.pattern is record.pattern
    assert with_both.group_delay.gd_p.shape == (2, 2, 2)


def test_record_to_dict_names():
    """Flattened outputs use the toolbox field names."""
    record = AntennaRecord(_pattern())
    assert record.to_dict() == {}

    td_only = record.with_time_domain(1e-8, 5e-11, 45.0, 30.0, fixed_delay=2e-10)
    outputs = td_only.to_dict()
    assert set(outputs) == TD_KEYS
    assert outputs['td_az'] == 45.0
    assert outputs['td_zen'] == 30.0
    assert outputs['td_delay'] == 2e-10
    assert outputs['td_loss'] == -1.0
    assert outputs['n_ffts'] == int(np.floor(1e-8 / 5e-11))

    both = td_only.with_group_delay().to_dict()
    assert set(both) == TD_KEYS | {'gd_p', 'gd_t'}


def test_record_is_frozen():
    """Records cannot be reassigned in place."""
    record = AntennaRecord(_pattern())
    with pytest.raises(AttributeError):
        record.time_domain = None


def test_pattern_npz_round_trip(tmp_path):
    """Saving and loading keeps fields, scalars and metadata."""
    pattern = _pattern()
    save_pattern_npz(pattern, tmp_path / 'antenna')

    loaded, metadata = load_pattern_npz(tmp_path / 'antenna.npz')

    for name in ('ep', 'et', 'aeff_p', 'aeff_t', 'dir_abs'):
        np.testing.assert_array_equal(loaded.field(name), pattern.field(name))
    np.testing.assert_array_equal(loaded.frequencies, pattern.frequencies)
    assert loaded.fixed_delay == pattern.fixed_delay
    assert loaded.loss == pattern.loss
    assert loaded.metadata['source'] == 'unit test'
    assert metadata['format'] == 'uwb_antenna Pattern NPZ'


def test_pattern_npz_without_aperture(tmp_path):
    """Optional fields stay absent after a round trip."""
    save_pattern_npz(_pattern(with_aperture=False), tmp_path / 'bare.npz')
    loaded, _ = load_pattern_npz(tmp_path / 'bare.npz')
    assert not loaded.has_aperture


def test_record_npz(tmp_path):
    """Derived outputs are written under their toolbox names."""
    record = AntennaRecord(_pattern()).with_time_domain(1e-8, 5e-11, 45.0, 45.0).with_group_delay()
    save_record_npz(record, tmp_path / 'outputs.npz')

    loaded = load_record_npz(tmp_path / 'outputs.npz')

    assert set(loaded) == TD_KEYS | {'gd_p', 'gd_t'}
    np.testing.assert_allclose(loaded['td_ep'], record.time_domain['ep'])
    np.testing.assert_allclose(loaded['gd_t'], record.group_delay.gd_t)
    assert loaded['td_ts'] == 5e-11


def test_record_npz_errors(tmp_path):
    """Empty records and missing files are reported."""
    with pytest.raises(ValueError):
        save_record_npz(AntennaRecord(_pattern()), tmp_path / 'empty.npz')
    with pytest.raises(FileNotFoundError):
        load_record_npz(tmp_path / 'missing.npz')
    with pytest.raises(FileNotFoundError):
        load_pattern_npz(tmp_path / 'missing.npz')
