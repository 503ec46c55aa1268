"""Sample encoder – one JSON object per line.

A record looks like ``{"CPU": 23.4, "MEM": 812345.0}`` followed by a single
``\\n``. Keys keep the sample's iteration order and values are written as
bare JSON numbers, rounded to single precision first.
"""

from __future__ import annotations

import json
import math
import struct

from ..sample import Sample

RECORD_DELIMITER = b"\n"

_F32 = struct.Struct("<f")


def _pack_f32(value: float) -> bytes | None:
    try:
        return _F32.pack(value)
    except OverflowError:
        return None


def to_f32(value: float) -> float:
    """Round *value* to the shortest decimal naming the same 32-bit float.

    ``to_f32(23.4)`` stays ``23.4`` instead of the widened
    ``23.399999618530273``. Values beyond the single-precision range become
    signed infinity; NaN and infinities pass through unchanged.
    """
    value = float(value)
    if not math.isfinite(value):
        return value
    packed = _pack_f32(value)
    if packed is None:
        return math.copysign(math.inf, value)
    single = _F32.unpack(packed)[0]
    for digits in range(1, 10):
        candidate = float(f"{single:.{digits}g}")
        if _pack_f32(candidate) == packed:
            return candidate
    return single


def encode_sample(sample: Sample, buffer: bytearray | None = None) -> bytes | bytearray:
    """Serialize *sample* into one newline-terminated record.

    When *buffer* is given its previous content is discarded, the record is
    written into it and the same buffer is returned. Otherwise a new
    ``bytes`` object is returned. Never raises for any float value.
    """
    body = json.dumps({name: to_f32(value) for name, value in sample.items()})
    if buffer is None:
        return body.encode("utf-8") + RECORD_DELIMITER
    buffer.clear()
    buffer += body.encode("utf-8")
    buffer += RECORD_DELIMITER
    return buffer


class SampleEncoder:
    """Encoder that reuses one output buffer across calls.

    The returned buffer is overwritten by the next :meth:`encode` call, so
    callers must finish sending it first.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def encode(self, sample: Sample) -> bytearray:
        return encode_sample(sample, self._buffer)
