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

# Registration of collectors against an explicit prometheus registry.
#
# The registry handle is always passed in by the caller: it is created at
# process start (see Monitor) and drained at shutdown by unregistering
# every collector that was registered.

import logging

from prometheus_client import CollectorRegistry

from volstat.errors import RegistrationError


def register(collector, registry: CollectorRegistry):
    """Register a collector, raising RegistrationError if it (or its metric names) is already registered."""
    try:
        registry.register(collector)
    except ValueError as e:
        raise RegistrationError(f"Collector registration failed: {e}") from e

    for name in collector.metricNames():
        logging.info("--> [registered] %s (gauge)" % name)


def unregister(collector, registry: CollectorRegistry):
    """Unregister a collector, raising RegistrationError if it is not registered."""
    try:
        registry.unregister(collector)
    except KeyError as e:
        raise RegistrationError(f"Collector {collector!r} is not registered") from e

    logging.info(f"--> [unregistered] {collector.__class__.__name__} for {collector.controller_url}")
