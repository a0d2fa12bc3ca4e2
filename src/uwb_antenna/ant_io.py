"""
File input/output functions for antenna records.
"""

import logging
import numpy as np
import json
from pathlib import Path
from typing import Dict, Optional, Union, Any, Tuple

from .pattern import AntennaPattern, OPTIONAL_FIELDS

# Configure logging
logger = logging.getLogger(__name__)

FORMAT_VERSION = '1.0'


def _npz_path(file_path: Union[str, Path]) -> Path:
    file_path = Path(file_path)

    # Ensure .npz extension
    if file_path.suffix.lower() != '.npz':
        file_path = file_path.with_suffix('.npz')
    return file_path


def save_pattern_npz(pattern: AntennaPattern, file_path: Union[str, Path],
                     metadata: Optional[Dict[str, Any]] = None) -> None:
    """
    Save an antenna pattern to NPZ format for efficient loading.

    Args:
        pattern: AntennaPattern object to save
        file_path: Path to save the file to
        metadata: Optional metadata to include

    Raises:
        OSError: If file cannot be written
    """
    file_path = _npz_path(file_path)

    meta_dict = {
        'fixed_delay': pattern.fixed_delay,
        'loss': pattern.loss,
        'version': FORMAT_VERSION,
        'format': 'uwb_antenna Pattern NPZ'
    }
    meta_dict.update(pattern.metadata)
    if metadata:
        meta_dict.update(metadata)

    save_dict = {
        'azimuth': pattern.azimuth_angles,
        'zenith': pattern.zenith_angles,
        'frequency': pattern.frequencies,
        'ep': pattern.field('ep'),
        'et': pattern.field('et'),
        'metadata': json.dumps(meta_dict)
    }
    for name in OPTIONAL_FIELDS:
        if name in pattern.data:
            save_dict[name] = pattern.field(name)

    np.savez_compressed(file_path, **save_dict)
    logger.info(f"Pattern saved to {file_path}")


def load_pattern_npz(file_path: Union[str, Path]) -> Tuple[AntennaPattern, Dict[str, Any]]:
    """
    Load an antenna pattern from NPZ format.

    Args:
        file_path: Path to the NPZ file

    Returns:
        Tuple containing (pattern, metadata)

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If file format is invalid
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Pattern file not found: {file_path}")

    with np.load(file_path, allow_pickle=False) as data:
        missing = [key for key in ('azimuth', 'zenith', 'frequency', 'ep', 'et', 'metadata')
                   if key not in data]
        if missing:
            raise ValueError(f"Invalid pattern file {file_path}: missing {missing}")

        metadata = json.loads(str(data['metadata']))
        optional = {name: data[name] for name in OPTIONAL_FIELDS if name in data}

        pattern = AntennaPattern(
            azimuth=data['azimuth'],
            zenith=data['zenith'],
            frequency=data['frequency'],
            ep=data['ep'],
            et=data['et'],
            fixed_delay=metadata.pop('fixed_delay', 0.0),
            loss=metadata.pop('loss', 0.0),
            metadata={k: v for k, v in metadata.items() if k not in ('version', 'format')},
            **optional
        )

    logger.info(f"Pattern loaded from {file_path}")
    return pattern, metadata


def save_record_npz(record, file_path: Union[str, Path]) -> None:
    """
    Save the derived outputs of an AntennaRecord (td_* and gd_* entries).

    Args:
        record: AntennaRecord with at least one derived output
        file_path: Path to save the file to

    Raises:
        ValueError: If the record has no derived outputs
    """
    outputs = record.to_dict()
    if not outputs:
        raise ValueError("Record has no time-domain or group-delay outputs to save")

    file_path = _npz_path(file_path)
    np.savez_compressed(file_path, **{name: np.asarray(value) for name, value in outputs.items()})
    logger.info(f"Saved {len(outputs)} output(s) to {file_path}")


def load_record_npz(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load outputs written by save_record_npz.

    Scalar entries are returned as Python scalars, arrays as numpy arrays.

    Raises:
        FileNotFoundError: If file does not exist
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Record file not found: {file_path}")

    with np.load(file_path, allow_pickle=False) as data:
        return {name: data[name].item() if data[name].ndim == 0 else data[name] for name in data.files}
