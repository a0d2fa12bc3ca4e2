"""
Rebuild an antenna along one direction for time-domain synthesis.

The native frequency samples at the requested direction are padded with
zero-valued boundary points, compensated for the reference-distance delay
and loss, resampled onto the one-sided FFT grid of a real signal of
floor(tmax/ts) samples, and finally realigned to the time origin with a
rotating phasor.
"""
import numpy as np
import xarray as xr
import logging
from typing import Dict, NamedTuple, Optional, Tuple

from .analysis import complete_directivity
from .exceptions import ValidationError
from .interpolation import interpolate_1d, interpolate_nd
from .pattern import AntennaPattern, COMPLEX_FIELDS, OPTIONAL_FIELDS, require_valid
from .utilities import DEFAULT_CONSTANTS, PhysicalConstants, db_to_amplitude, frequency_skip

# Configure logging
logger = logging.getLogger(__name__)

SLICE_FIELDS = COMPLEX_FIELDS + ('dir_abs',)


class PaddedAxis(NamedTuple):
    """Frequency axis with zero-valued boundary samples around the native band."""
    frequency: np.ndarray
    native: slice
    extra_low: int
    extra_high: int


class TimeDomainSlice:
    """
    One-sided spectrum of an antenna along a single direction.

    Attributes:
        data (xarray.Dataset): Dataset over the 'frequency' dimension with
            complex ep, et, aeff_p, aeff_t and real dir_abs. Provenance
            scalars (tmax, ts, n_samples, azimuth, zenith, fixed_delay,
            loss) are stored in data.attrs.
    """

    def __init__(self, frequency: np.ndarray, fields: Dict[str, np.ndarray], **attrs):
        self.data = xr.Dataset(
            data_vars={name: ('frequency', np.asarray(fields[name])) for name in SLICE_FIELDS},
            coords={'frequency': np.asarray(frequency, dtype=float)},
            attrs=attrs,
        )

    @property
    def frequencies(self) -> np.ndarray:
        return self.data.frequency.values

    @property
    def df(self) -> float:
        """Bin spacing in Hz."""
        return 1.0 / (self.n_samples * self.ts)

    @property
    def tmax(self) -> float:
        return self.data.attrs['tmax']

    @property
    def ts(self) -> float:
        return self.data.attrs['ts']

    @property
    def n_samples(self) -> int:
        return self.data.attrs['n_samples']

    @property
    def azimuth(self) -> float:
        return self.data.attrs['azimuth']

    @property
    def zenith(self) -> float:
        return self.data.attrs['zenith']

    @property
    def fixed_delay(self) -> float:
        return self.data.attrs['fixed_delay']

    @property
    def loss(self) -> float:
        return self.data.attrs['loss']

    def __getitem__(self, name: str) -> np.ndarray:
        return self.data[name].values

    def __repr__(self) -> str:
        return (f"TimeDomainSlice(bins={len(self.frequencies)}, n_samples={self.n_samples}, "
                f"azimuth={self.azimuth}, zenith={self.zenith})")


def select_angle(pattern: AntennaPattern, azimuth: float, zenith: float,
                 constants: Optional[PhysicalConstants] = None) -> Dict[str, np.ndarray]:
    """
    Interpolate every pattern quantity at one direction across the native frequencies.

    Directions outside the sampled angular domain resolve to zero. Any of
    aeff_p, aeff_t and dir_abs missing from the pattern is derived from the
    fields first; quantities already present are kept as supplied.

    Args:
        pattern: AntennaPattern object
        azimuth: Azimuth angle in degrees
        zenith: Zenith angle in degrees
        constants: Physical constants used for directivity completion

    Returns:
        Dict[str, np.ndarray]: ep, et, aeff_p, aeff_t, dir_abs, each of length n_frequency
    """
    missing = [name for name in OPTIONAL_FIELDS if name not in pattern.data]
    if missing:
        logger.info(f"Pattern lacks {missing}, computing them from the fields")
        completed = complete_directivity(pattern, constants)
        pattern = pattern.with_fields(**{name: completed.field(name) for name in missing})

    axes = (pattern.azimuth_angles, pattern.zenith_angles)
    return {
        name: interpolate_nd(axes, pattern.field(name), (azimuth, zenith), fill_value=0.0)
        for name in SLICE_FIELDS
    }


def target_frequencies(tmax: float, ts: float) -> Tuple[np.ndarray, float, int]:
    """
    Build the one-sided FFT grid of a real signal lasting tmax sampled at ts.

    Args:
        tmax: Observation window in seconds
        ts: Time sampling in seconds

    Returns:
        Tuple of (bin frequencies f_k = k*df for k = 0..n//2, df, n)

    Raises:
        ValidationError: If the window holds no complete sample
    """
    n_samples = int(np.floor(tmax / ts))
    if n_samples < 1:
        raise ValidationError(f"tmax ({tmax}) must be at least one time sample ts ({ts})")

    df = 1.0 / (n_samples * ts)
    # (n-1)/2 for odd n, n/2 for even n
    half = n_samples // 2
    return np.arange(half + 1) * df, df, n_samples


def pad_frequency_axis(frequency: np.ndarray, df: float, ts: float,
                       upper_pad_frequency: Optional[float] = None) -> PaddedAxis:
    """
    Extend the native axis with zero-valued points below and above the band.

    Two points are added at the low end (0 Hz and a point between 0 and the
    lowest frequency) unless the band already starts below df, and two at the
    high end (a point between the highest frequency and Nyquist, then the
    upper placeholder) unless the band already extends past Nyquist. In that
    case no high pad is added and upper_pad_frequency is not used.

    Args:
        frequency: Native frequency axis, strictly ascending
        df: Target bin spacing in Hz
        ts: Time sampling in seconds
        upper_pad_frequency: Outermost high pad frequency (default: 1/ts)

    Returns:
        PaddedAxis: Padded axis and the slice holding the native samples

    Raises:
        ValidationError: If upper_pad_frequency does not exceed the inner high pad point
    """
    frequency = np.asarray(frequency, dtype=float)
    f_min = frequency[0]
    f_max = frequency[-1]
    f_nyquist = 1.0 / (2.0 * ts)

    extra_low = 0 if f_min < df else 2
    extra_high = 0 if f_max > f_nyquist else 2

    low = []
    if extra_low == 2:
        low = [0.0, max(f_min - frequency_skip, f_min / 2.0)]

    high = []
    if extra_high == 2:
        outer = 2.0 * f_nyquist if upper_pad_frequency is None else float(upper_pad_frequency)
        inner = min(f_max + frequency_skip, (f_max + f_nyquist) / 2.0)
        if inner <= f_max:
            # Band ends exactly at Nyquist
            inner = (f_max + outer) / 2.0
        if not (np.isfinite(outer) and outer > inner > f_max):
            raise ValidationError(f"upper_pad_frequency ({outer}) must exceed {max(inner, f_max)} Hz")
        high = [inner, outer]
    elif upper_pad_frequency is not None:
        logger.debug(f"Band ends above Nyquist ({f_nyquist} Hz), ignoring upper_pad_frequency "
                     f"({upper_pad_frequency} Hz)")

    logger.info(f"Padding frequency axis with {extra_low} low and {extra_high} high point(s)")

    padded = np.concatenate([low, frequency, high])
    return PaddedAxis(padded, slice(extra_low, extra_low + len(frequency)), extra_low, extra_high)


def compensate_delay_loss(frequency: np.ndarray, values: np.ndarray,
                          delay: float, loss: float) -> np.ndarray:
    """
    Apply the reference delay and loss to native-grid samples.

    Args:
        frequency: Native frequencies in Hz
        values: Complex samples at those frequencies
        delay: Delay in seconds, applied as exp(+i*2*pi*f*delay)
        loss: Loss in dB, applied as a voltage factor 10^(loss/20)

    Returns:
        np.ndarray: Compensated samples
    """
    factor = db_to_amplitude(loss) * np.exp(1j * 2.0 * np.pi * np.asarray(frequency) * delay)
    return np.asarray(values) * factor


def phase_ramp(n_bins: int, df: float, delay: float) -> np.ndarray:
    """
    Rotating phasor r_0 = 1, r_{k+1} = r_k * exp(-i*2*pi*df*delay).

    Args:
        n_bins: Number of bins
        df: Bin spacing in Hz
        delay: Delay in seconds

    Returns:
        np.ndarray: Complex phasors, length n_bins
    """
    step = np.exp(-1j * 2.0 * np.pi * df * delay)
    factors = np.full(n_bins, step, dtype=np.complex128)
    if n_bins > 0:
        factors[0] = 1.0
    return np.cumprod(factors)


def _check_parameters(tmax, ts, azimuth, zenith, fixed_delay, loss) -> None:
    diagnostics = []
    for name, value in (('tmax', tmax), ('ts', ts)):
        if value is None or not np.isfinite(value) or value <= 0:
            diagnostics.append(f"{name} must be finite and positive, got {value}")
    for name, value in (('azimuth', azimuth), ('zenith', zenith),
                        ('fixed_delay', fixed_delay), ('loss', loss)):
        if value is None or not np.isfinite(value):
            diagnostics.append(f"{name} must be finite, got {value}")
    if not diagnostics and np.floor(tmax / ts) < 1:
        diagnostics.append(f"tmax ({tmax}) must be at least one time sample ts ({ts})")
    if diagnostics:
        raise ValidationError(diagnostics)


def build_time_domain_angle(pattern: AntennaPattern, tmax: float, ts: float,
                            azimuth: float, zenith: float,
                            fixed_delay: Optional[float] = None,
                            loss: Optional[float] = None,
                            constants: Optional[PhysicalConstants] = None,
                            upper_pad_frequency: Optional[float] = None) -> TimeDomainSlice:
    """
    Resample an antenna along one direction for time-domain synthesis.

    Args:
        pattern: AntennaPattern object
        tmax: Maximum time of the time-domain signal in seconds
        ts: Time sampling of the time-domain signal in seconds
        azimuth: Azimuth angle of interest in degrees
        zenith: Zenith angle of interest in degrees
        fixed_delay: Fixed delay to compensate in seconds (default: pattern.fixed_delay)
        loss: Loss in dB (default: pattern.loss)
        constants: Physical constants (default: DEFAULT_CONSTANTS)
        upper_pad_frequency: Outermost high pad frequency in Hz (default: 1/ts)

    Returns:
        TimeDomainSlice: Spectrum on the bins k/(n*ts), k = 0..n//2

    Raises:
        ValidationError: If the pattern or any parameter is invalid
    """
    constants = constants or DEFAULT_CONSTANTS
    require_valid(pattern)

    fixed_delay = pattern.fixed_delay if fixed_delay is None else fixed_delay
    loss = pattern.loss if loss is None else loss
    _check_parameters(tmax, ts, azimuth, zenith, fixed_delay, loss)

    bins, df, n_samples = target_frequencies(tmax, ts)
    native_frequency = pattern.frequencies
    padded = pad_frequency_axis(native_frequency, df, ts, upper_pad_frequency)

    logger.info(f"Building time-domain slice at az={azimuth}, zen={zenith}: "
                f"{n_samples} samples, {len(bins)} bins, df={df:.6g} Hz")

    selected = select_angle(pattern, azimuth, zenith, constants)

    # Positive here, the sign is compensated by the phase ramp below
    delay = constants.reference_delay - fixed_delay
    ramp = phase_ramp(len(bins), df, delay)

    fields = {}
    for name in SLICE_FIELDS:
        dtype = np.complex128 if name in COMPLEX_FIELDS else float
        samples = np.zeros(len(padded.frequency), dtype=dtype)
        if name in COMPLEX_FIELDS:
            samples[padded.native] = compensate_delay_loss(native_frequency, selected[name], delay, loss)
        else:
            samples[padded.native] = selected[name]

        resampled = interpolate_1d(padded.frequency, samples, bins, fill_value=0.0)
        fields[name] = resampled * ramp if name in COMPLEX_FIELDS else resampled

    return TimeDomainSlice(
        bins, fields,
        tmax=float(tmax),
        ts=float(ts),
        n_samples=n_samples,
        azimuth=float(azimuth),
        zenith=float(zenith),
        fixed_delay=float(fixed_delay),
        loss=float(loss),
    )
