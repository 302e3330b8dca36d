# -------------------------------------------------------------------------------
# MIT License
#
# Copyright (c) 2026 Advanced Micro Devices, Inc. All Rights Reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# -------------------------------------------------------------------------------

"""Stats document decoding

Controllers report numeric counters either as JSON strings ("1073741824")
or as native JSON numbers, and some fields arrive as null or as empty
objects. Each field is coerced independently so that one unusable field
only zeroes itself. A body that is not a JSON object at all (plain text
error pages, truncated JSON, bare scalars) is rejected with DecodeError.
"""

import json
import math
from dataclasses import dataclass, fields
from typing import Any, Dict

from volstat.errors import DecodeError


@dataclass(frozen=True)
class VolumeStats:
    name: str = ""
    readIOPS: int = 0
    writeIOPS: int = 0
    replicaCounter: int = 0
    revisionCounter: int = 0
    sectorSizeBytes: int = 0
    sizeBytes: int = 0
    totalReadBlockCount: int = 0
    totalWriteBlockCount: int = 0
    totalReadTimeMillis: float = 0.0
    totalWriteTimeMillis: float = 0.0
    upTimeSeconds: float = 0.0
    usedBlocks: int = 0
    usedLogicalBlocks: int = 0


def toInt(value: Any) -> int:
    """Coerce a JSON value to an integer, truncating fractions; unusable values become 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        return int(number) if math.isfinite(number) else 0
    return 0


def toFloat(value: Any) -> float:
    """Coerce a JSON value to a float; unusable values become 0.0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def toStr(value: Any) -> str:
    return value if isinstance(value, str) else ""


def parseJSONInt(text: str):
    # int() refuses literals past the interpreter digit limit; zero just that value
    try:
        return int(text)
    except ValueError:
        return 0


def parseDocument(body: bytes) -> Dict[str, Any]:
    """Parse a response body into a JSON object.

    Raises:
        DecodeError: body is not valid JSON, or is valid JSON but not an object.
    """
    try:
        document = json.loads(body, parse_int=parseJSONInt)
    except ValueError as e:
        raise DecodeError(f"Error in unmarshalling the json response: {e}") from e

    if not isinstance(document, dict):
        raise DecodeError(f"Expected a JSON object in stats response, found {type(document).__name__}")
    return document


class StatsDecoder:
    """Map a stats document onto VolumeStats.

    The field map lists, for each VolumeStats attribute, the document keys
    to look up (first present key wins) and the coercion to apply.
    """

    def __init__(self, field_map: Dict[str, tuple]):
        known = {f.name for f in fields(VolumeStats)}
        unknown = set(field_map) - known
        if unknown:
            raise ValueError(f"Unknown VolumeStats field(s) in decoder map: {sorted(unknown)}")
        self.__field_map = field_map

    def decode(self, body: bytes) -> VolumeStats:
        document = parseDocument(body)

        values = {}
        for attribute, (keys, coerce) in self.__field_map.items():
            for key in keys:
                if key in document:
                    values[attribute] = coerce(document[key])
                    break
        return VolumeStats(**values)
