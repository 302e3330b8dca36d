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

"""Normalization of raw volume stats into exported metric values

Capacity figures are reported in GiB (2^30 bytes) with integer truncation;
block counts are scaled by the sector size before dividing so no precision
is lost. Timing fields are truncated to whole milliseconds. All values are
clamped at zero.
"""

import math
from dataclasses import dataclass, fields

from volstat.stats_decoder import VolumeStats

GIB = 1 << 30


@dataclass(frozen=True)
class MetricsSnapshot:
    actualUsedGiB: int = 0
    logicalSizeGiB: int = 0
    sectorSizeBytes: int = 0
    reads: int = 0
    readTimeMillis: int = 0
    readBlockCount: int = 0
    writes: int = 0
    writeTimeMillis: int = 0
    writeBlockCount: int = 0
    volumeSizeGiB: int = 0

    @classmethod
    def zero(cls):
        return cls()

    def asDict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _nonNegative(value) -> int:
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    value = int(value)
    return value if value > 0 else 0


def blocksToGiB(blocks: int, sector_size: int) -> int:
    return _nonNegative(blocks * sector_size) // GIB


def normalize(stats: VolumeStats) -> MetricsSnapshot:
    """Convert a VolumeStats record into a MetricsSnapshot. Never raises for a VolumeStats input."""
    sector_size = _nonNegative(stats.sectorSizeBytes)
    return MetricsSnapshot(
        actualUsedGiB=blocksToGiB(_nonNegative(stats.usedBlocks), sector_size),
        logicalSizeGiB=blocksToGiB(_nonNegative(stats.usedLogicalBlocks), sector_size),
        sectorSizeBytes=sector_size,
        reads=_nonNegative(stats.readIOPS),
        readTimeMillis=_nonNegative(stats.totalReadTimeMillis),
        readBlockCount=_nonNegative(stats.totalReadBlockCount),
        writes=_nonNegative(stats.writeIOPS),
        writeTimeMillis=_nonNegative(stats.totalWriteTimeMillis),
        writeBlockCount=_nonNegative(stats.totalWriteBlockCount),
        volumeSizeGiB=_nonNegative(stats.sizeBytes) // GIB,
    )
