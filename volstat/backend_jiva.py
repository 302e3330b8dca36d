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

"""Jiva volume controller backend

Jiva controllers serve volume stats as JSON at <controller>/v1/stats.
Example response:

{"Name":"vol1","ReadIOPS":"5","ReplicaCounter":2,"RevisionCounter":10,
 "SCSIIOCount":{},"SectorSize":"4096","Size":"1073741824",
 "TotalReadBlockCount":"25","TotalReadTime":"45","TotalWriteTime":"30",
 "TotatWriteBlockCount":"6","UpTime":158.667823193,"UsedBlocks":"5",
 "UsedLogicalBlocks":"23","WriteIOPS":"11","type":"stats"}

Note the controller spells the write block counter "TotatWriteBlockCount".
"""

import configparser
import logging

from volstat.collector_base import Backend
from volstat.stats_client import DEFAULT_TIMEOUT_SECS, StatsClient
from volstat.stats_decoder import StatsDecoder, VolumeStats, toFloat, toInt, toStr

# fmt: off
JIVA_FIELDS = {
    "name":                 (("Name",),                                         toStr),
    "readIOPS":             (("ReadIOPS",),                                     toInt),
    "writeIOPS":            (("WriteIOPS",),                                    toInt),
    "replicaCounter":       (("ReplicaCounter",),                               toInt),
    "revisionCounter":      (("RevisionCounter",),                              toInt),
    "sectorSizeBytes":      (("SectorSize",),                                   toInt),
    "sizeBytes":            (("Size",),                                         toInt),
    "totalReadBlockCount":  (("TotalReadBlockCount",),                          toInt),
    "totalWriteBlockCount": (("TotatWriteBlockCount", "TotalWriteBlockCount"),  toInt),
    "totalReadTimeMillis":  (("TotalReadTime",),                                toFloat),
    "totalWriteTimeMillis": (("TotalWriteTime",),                               toFloat),
    "upTimeSeconds":        (("UpTime",),                                       toFloat),
    "usedBlocks":           (("UsedBlocks",),                                   toInt),
    "usedLogicalBlocks":    (("UsedLogicalBlocks",),                            toInt),
}
# fmt: on


class Jiva(Backend):
    def __init__(self, config: configparser.ConfigParser):
        timeout = DEFAULT_TIMEOUT_SECS
        if config.has_section("volstat.collectors"):
            timeout = config["volstat.collectors"].getfloat("timeout_secs", DEFAULT_TIMEOUT_SECS)

        logging.debug(f"Initializing jiva backend (timeout = {timeout}s)")
        self.__client = StatsClient(timeout=timeout)
        self.__decoder = StatsDecoder(JIVA_FIELDS)

    def fetch(self, controller_url: str) -> bytes:
        return self.__client.fetch(controller_url)

    def decode(self, body: bytes) -> VolumeStats:
        return self.__decoder.decode(body)
