"""Terragen ``.ter`` terrain files.

Layout (little-endian)::

    "TERRAGENTERRAIN "
    "SIZE" int16 min(width, height), 2 pad bytes
    "XPTS" int16 width,  2 pad bytes
    "YPTS" int16 height, 2 pad bytes
    "SCAL" 3 × float32 metres per point
    "ALTW" int16 height scale floor(32768 / mpp), int16 base height 0
    width × height int16 samples floor(value · 2), row-major
    "EOF "

Samples outside the int16 range are clipped.
"""

from __future__ import annotations

import logging
import math
import struct
from pathlib import Path
from typing import Union

import numpy as np

from .errors import InvalidParameterError, NoiseError
from .noisemap import NoiseMap

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_METERS_PER_POINT = 30.0
TER_MAGIC = b"TERRAGENTERRAIN "
TER_EOF = b"EOF "


def write_ter(
    noise_map: NoiseMap,
    path: PathLike,
    meters_per_point: float = DEFAULT_METERS_PER_POINT,
) -> Path:
    """Write *noise_map* as a Terragen terrain file at *path*."""
    if meters_per_point <= 0.0:
        raise InvalidParameterError(
            f"meters_per_point must be positive, got {meters_per_point}"
        )
    width = noise_map.width
    height = noise_map.height
    height_scale = math.floor(32768.0 / meters_per_point)

    header = b"".join([
        TER_MAGIC,
        b"SIZE", struct.pack("<hxx", min(width, height)),
        b"XPTS", struct.pack("<hxx", width),
        b"YPTS", struct.pack("<hxx", height),
        b"SCAL", struct.pack("<fff", meters_per_point, meters_per_point, meters_per_point),
        b"ALTW", struct.pack("<hh", min(height_scale, 32767), 0),
    ])
    samples = np.floor(noise_map.as_array() * 2.0)
    samples = np.clip(samples, -32768, 32767).astype("<i2")

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("wb") as f:
        f.write(header)
        f.write(samples.tobytes(order="C"))
        f.write(TER_EOF)
    logger.info("wrote %dx%d terrain to %s", width, height, out)
    return out


def read_ter(path: PathLike) -> NoiseMap:
    """Read a terrain file written by :func:`write_ter`.

    Each cell of the returned map holds ``sample / 2``; the ``ALTW``
    height scale is not applied.
    """
    data = Path(path).read_bytes()
    if not data.startswith(TER_MAGIC):
        raise NoiseError(f"{path}: not a Terragen terrain file")

    size = width = height = None
    offset = len(TER_MAGIC)
    while True:
        marker = data[offset:offset + 4]
        offset += 4
        if marker == b"SIZE":
            (size,) = struct.unpack_from("<hxx", data, offset)
            offset += 4
        elif marker == b"XPTS":
            (width,) = struct.unpack_from("<hxx", data, offset)
            offset += 4
        elif marker == b"YPTS":
            (height,) = struct.unpack_from("<hxx", data, offset)
            offset += 4
        elif marker == b"SCAL":
            offset += 12
        elif marker == b"CRAD":
            offset += 4
        elif marker == b"CRVM":
            offset += 4
        elif marker == b"ALTW":
            offset += 4
            break
        else:
            raise NoiseError(f"{path}: unexpected chunk {marker!r}")

    if size is None:
        raise NoiseError(f"{path}: missing SIZE chunk")
    width = size if width is None else width
    height = size if height is None else height

    count = width * height
    end = offset + count * 2
    if end > len(data):
        raise NoiseError(f"{path}: truncated terrain body")
    samples = np.frombuffer(data, dtype="<i2", count=count, offset=offset)
    noise_map = NoiseMap.from_array(samples.reshape((height, width)) / 2.0)
    logger.debug("read %dx%d terrain from %s", width, height, path)
    return noise_map
