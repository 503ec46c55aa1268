"""Sample decoder – parse one record line into a metric mapping."""

from __future__ import annotations

import json
import math
from typing import Any

from ..errors import DecodeError
from ..sample import Sample


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-finite value {name} is not allowed")


def decode_sample(line: str) -> Sample:
    """Parse *line* as a flat JSON object of metric name to number.

    Integers are widened to float. Raises :class:`DecodeError` for invalid
    JSON, a top level that is not an object, or any value that is not a
    finite number (booleans count as non-numeric).
    """
    try:
        data = json.loads(line, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"invalid JSON: {exc}", line) from exc

    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}", line)

    sample: Sample = {}
    for name, value in data.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodeError(f"metric {name!r} has non-numeric value {value!r}", line)
        try:
            number = float(value)
        except OverflowError as exc:
            raise DecodeError(f"metric {name!r} is out of range", line) from exc
        if not math.isfinite(number):
            raise DecodeError(f"metric {name!r} is not finite", line)
        sample[name] = number
    return sample
