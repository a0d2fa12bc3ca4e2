"""
Antenna record combining a source pattern with its derived outputs.
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .group_delay import GroupDelayField, antenna_group_delay
from .pattern import AntennaPattern
from .time_domain import TimeDomainSlice, build_time_domain_angle
from .utilities import PhysicalConstants


@dataclass(frozen=True)
class AntennaRecord:
    """
    Source pattern plus the outputs derived from it.

    Derived outputs are added by returning new records, so the source pattern
    is never overwritten.
    """
    pattern: AntennaPattern
    time_domain: Optional[TimeDomainSlice] = None
    group_delay: Optional[GroupDelayField] = None

    def with_time_domain(self, tmax: float, ts: float, azimuth: float, zenith: float,
                         fixed_delay: Optional[float] = None, loss: Optional[float] = None,
                         constants: Optional[PhysicalConstants] = None,
                         upper_pad_frequency: Optional[float] = None) -> 'AntennaRecord':
        """Return a copy of the record with the time-domain slice at (azimuth, zenith)."""
        time_domain = build_time_domain_angle(
            self.pattern, tmax, ts, azimuth, zenith,
            fixed_delay=fixed_delay, loss=loss, constants=constants,
            upper_pad_frequency=upper_pad_frequency
        )
        return replace(self, time_domain=time_domain)

    def with_group_delay(self, constants: Optional[PhysicalConstants] = None) -> 'AntennaRecord':
        """Return a copy of the record with the group delay of the source pattern."""
        return replace(self, group_delay=antenna_group_delay(self.pattern, constants))

    def to_dict(self) -> Dict[str, Any]:
        """
        Flatten the derived outputs under their toolbox names.

        Returns:
            Dict[str, Any]: td_* entries if the time-domain slice is present,
            gd_p/gd_t if the group delay is present
        """
        out: Dict[str, Any] = {}
        td = self.time_domain
        if td is not None:
            out.update({
                'td_freqs': td.frequencies,
                'td_ep': td['ep'],
                'td_et': td['et'],
                'td_aeffp': td['aeff_p'],
                'td_aefft': td['aeff_t'],
                'td_dir_abs': td['dir_abs'],
                'td_az': td.azimuth,
                'td_zen': td.zenith,
                'td_tmax': td.tmax,
                'td_ts': td.ts,
                'n_ffts': td.n_samples,
                'td_delay': td.fixed_delay,
                'td_loss': td.loss,
            })
        if self.group_delay is not None:
            out['gd_p'] = self.group_delay.gd_p
            out['gd_t'] = self.group_delay.gd_t
        return out
