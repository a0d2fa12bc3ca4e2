"""
uwb_antenna package - Time-domain preparation and group delay of antenna far fields.

This package provides the AntennaPattern record and the pipelines that
resample an antenna along one direction for time-domain synthesis and
estimate its group delay over the native frequency grid.
"""

__version__ = '0.1.0'

# Import key classes and functions to make them available at the package level
from .pattern import AntennaPattern, validate_pattern
from .exceptions import UWBAntennaError, ValidationError, InsufficientDataError
from .utilities import (
    PhysicalConstants,
    DEFAULT_CONSTANTS,
    lightspeed,
    reference_distance,
    db_to_amplitude,
    linear_to_db,
    frequency_to_wavelength,
    wrap_phase
)
from .interpolation import interpolate_nd, interpolate_1d
from .analysis import complete_directivity, radiated_power
from .time_domain import (
    TimeDomainSlice,
    build_time_domain_angle,
    select_angle,
    pad_frequency_axis,
    compensate_delay_loss,
    target_frequencies,
    phase_ramp
)
from .group_delay import GroupDelayField, antenna_group_delay
from .record import AntennaRecord
from .ant_io import (
    save_pattern_npz,
    load_pattern_npz,
    save_record_npz,
    load_record_npz
)

# Define what gets imported with "from uwb_antenna import *"
__all__ = [
    'AntennaPattern',
    'validate_pattern',
    'UWBAntennaError',
    'ValidationError',
    'InsufficientDataError',
    'PhysicalConstants',
    'DEFAULT_CONSTANTS',
    'lightspeed',
    'reference_distance',
    'db_to_amplitude',
    'linear_to_db',
    'frequency_to_wavelength',
    'wrap_phase',
    'interpolate_nd',
    'interpolate_1d',
    'complete_directivity',
    'radiated_power',
    'TimeDomainSlice',
    'build_time_domain_angle',
    'select_angle',
    'pad_frequency_axis',
    'compensate_delay_loss',
    'target_frequencies',
    'phase_ramp',
    'GroupDelayField',
    'antenna_group_delay',
    'AntennaRecord',
    'save_pattern_npz',
    'load_pattern_npz',
    'save_record_npz',
    'load_record_npz'
]
