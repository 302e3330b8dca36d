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

"""Volume stats collector

Implements a prometheus custom collector that pulls stats from one volume
controller on every scrape and exposes them as gauges. Example metrics for
a 1 GiB jiva volume:

openebs_actual_used 4.0
openebs_logical_size 4.0
openebs_sector_size 4096.0
openebs_reads 1.0
openebs_read_time 10.0
openebs_read_block_count 10.0
openebs_writes 15.0
openebs_write_time 15.0
openebs_write_block_count 10.0
openebs_size_of_volume 1.0

Every scrape runs its own fetch/decode/normalize sequence on local state.
Any failure exposes an all-zero snapshot; the failure is logged and counted
on the collector but never reflected in the exposition itself.
"""

import configparser
import logging
import math
import threading
from typing import Optional

from prometheus_client.core import GaugeMetricFamily

from volstat.backend_definitions import loadBackend
from volstat.collector_base import Backend
from volstat.errors import DecodeError, FetchError
from volstat.normalizer import MetricsSnapshot, normalize

DEFAULT_NAMESPACE = "openebs"

# fmt: off
VOLUME_METRICS = [
    {"field": "actualUsedGiB",   "metricName": "actual_used",       "description": "Actual volume size used in GiB"},
    {"field": "logicalSizeGiB",  "metricName": "logical_size",      "description": "Logical size of volume in GiB"},
    {"field": "sectorSizeBytes", "metricName": "sector_size",       "description": "Sector size of volume in bytes"},
    {"field": "reads",           "metricName": "reads",             "description": "Read input/outputs on volume"},
    {"field": "readTimeMillis",  "metricName": "read_time",         "description": "Read time on volume in milliseconds"},
    {"field": "readBlockCount",  "metricName": "read_block_count",  "description": "Read block count of volume"},
    {"field": "writes",          "metricName": "writes",            "description": "Write input/outputs on volume"},
    {"field": "writeTimeMillis", "metricName": "write_time",        "description": "Write time on volume in milliseconds"},
    {"field": "writeBlockCount", "metricName": "write_block_count", "description": "Write block count of volume"},
    {"field": "volumeSizeGiB",   "metricName": "size_of_volume",    "description": "Size of the volume requested in GiB"},
]
# fmt: on


def gaugeValue(value: int) -> float:
    """Exposition value for a snapshot field; counts beyond float range saturate at +Inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf


class VolumeCollector:
    def __init__(
        self,
        controller_url: str,
        cas_type: str = "jiva",
        config: Optional[configparser.ConfigParser] = None,
        namespace: str = DEFAULT_NAMESPACE,
        backend: Optional[Backend] = None,
    ):
        """Initialize the volume stats collector.

        Args:
            controller_url (str): Address of the volume controller (host:port or URL).
            cas_type (str): Storage-engine dialect spoken by the controller.
            config (configparser.ConfigParser): Cached copy of runtime configuration.
            namespace (str): Prefix for exported metric names.
            backend (Backend): Pre-built backend; loaded from cas_type when omitted.
        """
        logging.debug(f"Initializing {cas_type} volume collector for {controller_url}")

        self.controller_url = controller_url
        self.cas_type = cas_type
        self.namespace = namespace

        if backend is None:
            backend = loadBackend(cas_type, config if config is not None else configparser.ConfigParser())
        self.__backend = backend

        self.__lock = threading.Lock()
        self.__errors = {"fetch": 0, "decode": 0, "unexpected": 0}
        self.__last_error = None
        self.__healthy = False

    def metricNames(self):
        return [f"{self.namespace}_{item['metricName']}" for item in VOLUME_METRICS]

    # --------------------------------------------------------------------------------------
    # prometheus_client collector protocol

    def describe(self):
        """Yield the fixed set of metric descriptors, independent of scrape state."""
        for item in VOLUME_METRICS:
            yield GaugeMetricFamily(f"{self.namespace}_{item['metricName']}", item["description"])

    def collect(self):
        """Scrape the controller once and yield one gauge per snapshot field."""
        snapshot = self.scrape()
        for item in VOLUME_METRICS:
            yield GaugeMetricFamily(
                f"{self.namespace}_{item['metricName']}",
                item["description"],
                value=gaugeValue(getattr(snapshot, item["field"])),
            )

    # --------------------------------------------------------------------------------------
    # Additional custom methods unique to this collector

    def scrape(self) -> MetricsSnapshot:
        """Run fetch -> decode -> normalize, degrading to the zero snapshot on any failure."""
        try:
            body = self.__backend.fetch(self.controller_url)
            stats = self.__backend.decode(body)
            snapshot = normalize(stats)
        except FetchError as e:
            self.__recordError("fetch", e)
            return MetricsSnapshot.zero()
        except DecodeError as e:
            self.__recordError("decode", e)
            return MetricsSnapshot.zero()
        except Exception as e:
            self.__recordError("unexpected", e)
            return MetricsSnapshot.zero()

        with self.__lock:
            self.__healthy = True
        logging.debug(f"Collected volume stats from {self.controller_url}: {snapshot}")
        return snapshot

    def __recordError(self, kind, error):
        logging.error(f"Error in collecting metrics from {self.controller_url} ({kind}): {error}")
        with self.__lock:
            self.__errors[kind] += 1
            self.__last_error = error
            self.__healthy = False

    @property
    def errors(self):
        """Per-kind counts of failed scrapes (fetch, decode, unexpected)."""
        with self.__lock:
            return dict(self.__errors)

    @property
    def last_error(self):
        with self.__lock:
            return self.__last_error

    @property
    def healthy(self):
        """True when the most recently completed scrape succeeded."""
        with self.__lock:
            return self.__healthy
