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

import socket
import threading
import time

import pytest
from flask import Flask
from werkzeug.serving import make_server

from test.controller_responses import FAKE_RESPONSE


class FakeController:
    """Stand-in volume controller serving canned responses at /v1/stats.

    Responses are (status, body) pairs served round-robin, so a list of
    alternating good and bad responses gives a flaky controller.
    """

    def __init__(self):
        self.responses = [(200, FAKE_RESPONSE)]
        self.delay = 0.0
        self.requests = 0
        self.__lock = threading.Lock()

        app = Flask("fake_controller")
        app.route("/v1/stats")(self.stats)

        self.__server = make_server("127.0.0.1", 0, app, threaded=True)
        self.url = f"http://127.0.0.1:{self.__server.server_port}"
        self.__thread = threading.Thread(target=self.__server.serve_forever, daemon=True)
        self.__thread.start()

    def respond(self, *responses):
        self.responses = list(responses)

    def stats(self):
        with self.__lock:
            index = self.requests
            self.requests += 1
        if self.delay:
            time.sleep(self.delay)
        status, body = self.responses[index % len(self.responses)]
        return body, status, {"Content-Type": "application/json"}

    def stop(self):
        self.__server.shutdown()
        self.__thread.join(timeout=5)


@pytest.fixture
def controller():
    controller = FakeController()
    yield controller
    controller.stop()


def reserve_port():
    # Bind a free port and release it so nothing is listening there
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def free_port():
    return reserve_port()


@pytest.fixture
def unreachable_url():
    return f"http://127.0.0.1:{reserve_port()}"
