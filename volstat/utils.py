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

import logging
import sys
from importlib.metadata import PackageNotFoundError, version


def removeQuotes(string: str) -> str:
    if not string:
        return string
    if string[0] == '"' or string[0] == "'":
        string = string[1:]
    if string and (string[-1] == '"' or string[-1] == "'"):
        string = string[:-1]
    return string


def normalizeControllerURL(url: str) -> str:
    """Return controller address with an explicit scheme and no trailing slash.

    Controllers are commonly configured as bare host:port pairs (e.g.
    localhost:9501); plain http is assumed in that case.
    """
    url = url.strip()
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def getVersion() -> str:
    """Return the installed volstat version, or "unknown" when running from source."""
    try:
        return version("volstat")
    except PackageNotFoundError:
        return "unknown"


def error(message: str):
    """Log an error message and exit."""
    logging.error("")
    logging.error("ERROR: " + message)
    logging.error("")
    sys.exit(1)
