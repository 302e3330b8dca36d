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

# Prometheus exporter for storage volume controllers.
#
# Supporting monitor class to assemble the volume collector from runtime
# configuration, register it against a dedicated registry, and produce the
# exposition text for each scrape.
# --

import logging
import os
import platform
import sys
import time

from prometheus_client import CollectorRegistry, Gauge, generate_latest

from volstat import utils
from volstat.backend_definitions import supportedCASTypes
from volstat.collector_volume import DEFAULT_NAMESPACE, VolumeCollector
from volstat.errors import RegistrationError
from volstat.registry import register, unregister
from volstat.stats_client import DEFAULT_TIMEOUT_SECS


class Monitor:
    def __init__(self, config, logFile=None):

        self.config = config  # cache runtime configuration

        logLevel = os.environ.get("VOLSTAT_LOG_LEVEL", "INFO").upper()
        if logFile:
            hostname = platform.node().split(".", 1)[0]
            logging.basicConfig(
                format=f"[{hostname}: %(asctime)s] %(message)s",
                level=logLevel,
                filename=logFile,
                datefmt="%H:%M:%S",
            )
        else:
            logging.basicConfig(format="%(message)s", level=logLevel, stream=sys.stdout)

        if not self.config.has_section("volstat.collectors"):
            self.config.add_section("volstat.collectors")
        collectors = self.config["volstat.collectors"]

        self.__cas_type = collectors.get("cas_type", "jiva")
        self.__namespace = collectors.get("namespace", DEFAULT_NAMESPACE)
        self.__controller_url = utils.removeQuotes(collectors.get("controller_url", ""))
        self.__timeout = collectors.getfloat("timeout_secs", DEFAULT_TIMEOUT_SECS)

        self.enforce_global_runtime_constraints()

        logging.info("Volume controller = %s (cas type = %s)" % (self.__controller_url, self.__cas_type))

        self.__registry = CollectorRegistry()
        self.__collectors = []
        self.__perfMetric = None

        logging.debug("Completed monitor initialization")

    def enforce_global_runtime_constraints(self):
        if not self.__controller_url:
            utils.error('A volume controller address is required ("controller_url" in runtime config)')

        if self.__cas_type not in supportedCASTypes():
            utils.error(
                'Unsupported cas_type "%s" in runtime config (supported: %s)'
                % (self.__cas_type, ", ".join(supportedCASTypes()))
            )

        if self.__timeout <= 0:
            utils.error("timeout_secs must be positive (found %s)" % self.__timeout)

    @property
    def registry(self):
        return self.__registry

    @property
    def collectors(self):
        return list(self.__collectors)

    def initMetrics(self):

        collector = VolumeCollector(
            self.__controller_url,
            cas_type=self.__cas_type,
            config=self.config,
            namespace=self.__namespace,
        )

        logging.info("\nRegistering metrics for collector: %s" % collector.__class__.__name__)
        register(collector, self.__registry)
        self.__collectors.append(collector)

        logging.info("\nRegistering performance metrics for exposition timing")
        self.__perfMetric = Gauge(
            "volstat_perf_runtime_seconds",
            "Time to complete one data collection sample in seconds",
            registry=self.__registry,
        )

    def updateAllMetrics(self):
        start_time = time.perf_counter()

        latest = generate_latest(self.__registry)

        if self.__perfMetric is not None:
            self.__perfMetric.set(time.perf_counter() - start_time)
        return latest

    def shutdown(self):
        """Unregister all collectors from the monitor registry.

        Every collector is attempted; the first RegistrationError is re-raised
        once the registry has been drained.
        """
        failure = None
        for collector in self.__collectors:
            try:
                unregister(collector, self.__registry)
            except RegistrationError as e:
                logging.error(f"Unable to unregister collector for {collector.controller_url}: {e}")
                if failure is None:
                    failure = e
        self.__collectors = []

        if self.__perfMetric is not None:
            self.__registry.unregister(self.__perfMetric)
            self.__perfMetric = None

        if failure is not None:
            raise failure
