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

# Volstat backend definitions (metadata to support dynamic loading)

import importlib

from volstat.errors import UnknownCASTypeError

BACKENDS = [
    {
        "cas_type": "jiva",
        "file": "volstat.backend_jiva",
        "className": "Jiva",
    },
]


def supportedCASTypes():
    return [backend["cas_type"] for backend in BACKENDS]


def loadBackend(cas_type, config):
    """Instantiate the backend registered for a CAS type.

    Raises:
        UnknownCASTypeError: no backend is defined for cas_type.
    """
    for backend in BACKENDS:
        if backend["cas_type"] == cas_type:
            module = importlib.import_module(backend["file"])
            cls = getattr(module, backend["className"])
            return cls(config=config)

    raise UnknownCASTypeError(f"Unsupported CAS type '{cas_type}' (supported: {', '.join(supportedCASTypes())})")
