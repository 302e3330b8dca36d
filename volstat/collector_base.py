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

# Base class for CAS-type backends. Each storage-engine dialect provides
# its own way to fetch raw stats from a volume controller and to decode
# them into a VolumeStats record; VolumeCollector only drives the two.

import configparser
from abc import ABC, abstractmethod

from volstat.stats_decoder import VolumeStats


class Backend(ABC):
    # Required child methods
    @abstractmethod
    def __init__(self, config: configparser.ConfigParser):
        """Initialize the backend from runtime configuration.

        Args:
            config (configparser.ConfigParser): Cached copy of runtime configuration.
        """
        pass

    @abstractmethod
    def fetch(self, controller_url: str) -> bytes:
        """Return raw stats from the controller, raising FetchError on failure."""
        pass

    @abstractmethod
    def decode(self, body: bytes) -> VolumeStats:
        """Decode raw stats, raising DecodeError when they are not structured data."""
        pass
