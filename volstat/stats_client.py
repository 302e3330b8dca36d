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

"""HTTP client for controller stats endpoints

Issues a single GET per call against <controller>/v1/stats. No retries are
attempted here; the scrape interval of the metrics server is the retry
cadence.
"""

import logging

import requests

from volstat.errors import FetchError
from volstat.utils import normalizeControllerURL

STATS_PATH = "/v1/stats"
DEFAULT_TIMEOUT_SECS = 5.0


class StatsClient:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECS, path: str = STATS_PATH):
        """Initialize the stats client.

        Args:
            timeout (float): Seconds to wait for connect and read before abandoning the request.
            path (str): Stats path appended to the controller address.
        """
        self.timeout = timeout
        self.path = path

    def statsURL(self, controller_url: str) -> str:
        return normalizeControllerURL(controller_url) + self.path

    def fetch(self, controller_url: str) -> bytes:
        """Return the raw stats body from a controller.

        Raises:
            FetchError: connection failure, timeout, or non-2xx response status.
        """
        url = self.statsURL(controller_url)
        logging.debug(f"Fetching volume stats from {url}")

        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise FetchError(f"Timed out after {self.timeout}s fetching {url}: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Unable to reach controller at {url}: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(
                f"Unexpected status {response.status_code} from {url}",
                url=url,
                status_code=response.status_code,
            )

        return response.content
