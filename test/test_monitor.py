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

import configparser
import multiprocessing
import time

import pytest
import requests
from prometheus_client.parser import text_string_to_metric_families

from test.controller_responses import FAKE_RESPONSE_METRICS, INVALID_CONTROLLER_RESPONSE
from volstat.errors import RegistrationError
from volstat.monitor import Monitor
from volstat.node_monitoring import CONTENT_TYPE, applyOverrides, createApp, main, parseArgs, readConfig
from volstat.registry import unregister

CONFIG_TEMPLATE = """
[volstat.collectors]
namespace = openebs
cas_type = jiva
controller_url = {url}
timeout_secs = 2.0
"""


def build_monitor(url, template=CONFIG_TEMPLATE):
    config = configparser.ConfigParser()
    config.read_string(template.format(url=url))
    return Monitor(config)


def metric_values(payload):
    values = {}
    for family in text_string_to_metric_families(payload.decode("utf-8")):
        for sample in family.samples:
            values[sample.name] = sample.value
    return values


class TestMonitor:
    def test_update_all_metrics(self, controller):
        monitor = build_monitor(controller.url)
        monitor.initMetrics()

        values = metric_values(monitor.updateAllMetrics())
        for name, expected in FAKE_RESPONSE_METRICS.items():
            assert values[name] == expected, name
        assert "volstat_perf_runtime_seconds" in values

        monitor.shutdown()

    def test_every_gauge_present_when_controller_fails(self, controller):
        controller.respond((200, INVALID_CONTROLLER_RESPONSE))
        monitor = build_monitor(controller.url)
        monitor.initMetrics()

        values = metric_values(monitor.updateAllMetrics())
        for name in FAKE_RESPONSE_METRICS:
            assert values[name] == 0, name

        monitor.shutdown()

    def test_init_twice_is_registration_error(self, controller):
        monitor = build_monitor(controller.url)
        monitor.initMetrics()

        with pytest.raises(RegistrationError):
            monitor.initMetrics()

        monitor.shutdown()

    def test_shutdown_completes_drain_when_unregister_fails(self, controller):
        monitor = build_monitor(controller.url)
        monitor.initMetrics()
        unregister(monitor.collectors[0], monitor.registry)

        with pytest.raises(RegistrationError):
            monitor.shutdown()

        assert monitor.collectors == []
        assert monitor.registry.get_sample_value("volstat_perf_runtime_seconds") is None

        # drained monitor can be initialized again
        monitor.initMetrics()
        assert monitor.registry.get_sample_value("openebs_reads") == 1
        monitor.shutdown()

    def test_shutdown_drains_registry(self, controller):
        monitor = build_monitor(controller.url)
        monitor.initMetrics()
        monitor.shutdown()

        assert monitor.collectors == []
        assert monitor.registry.get_sample_value("openebs_reads") is None

        # registry can be populated again after a drain
        monitor.initMetrics()
        assert monitor.registry.get_sample_value("openebs_reads") == 1
        monitor.shutdown()

    def test_quoted_controller_url(self, controller):
        monitor = build_monitor(controller.url, CONFIG_TEMPLATE.replace("{url}", '"{url}"'))
        monitor.initMetrics()

        assert monitor.collectors[0].controller_url == controller.url
        assert monitor.registry.get_sample_value("openebs_reads") == 1
        monitor.shutdown()

    def test_missing_controller_url_exits(self):
        config = configparser.ConfigParser()
        config.read_string("[volstat.collectors]\ncas_type = jiva\n")
        with pytest.raises(SystemExit):
            Monitor(config)

    def test_unknown_cas_type_exits(self, controller):
        with pytest.raises(SystemExit):
            build_monitor(controller.url, CONFIG_TEMPLATE.replace("cas_type = jiva", "cas_type = unknown"))

    def test_non_positive_timeout_exits(self, controller):
        with pytest.raises(SystemExit):
            build_monitor(controller.url, CONFIG_TEMPLATE.replace("timeout_secs = 2.0", "timeout_secs = 0"))


class TestEndpoint:
    @pytest.fixture
    def client(self, controller):
        monitor = build_monitor(controller.url)
        monitor.initMetrics()
        app = createApp(monitor, "/metrics")
        yield app.test_client()
        monitor.shutdown()

    def test_metrics_route(self, client):
        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["Content-Type"] == CONTENT_TYPE
        values = metric_values(response.data)
        assert values["openebs_size_of_volume"] == 1
        assert values["openebs_write_time"] == 15

    def test_index_links_metrics(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert b'href="/metrics"' in response.data

    def test_custom_metrics_path(self, controller):
        monitor = build_monitor(controller.url)
        monitor.initMetrics()
        client = createApp(monitor, "/stats/metrics").test_client()

        assert client.get("/stats/metrics").status_code == 200
        assert client.get("/metrics").status_code == 404
        monitor.shutdown()


class TestRuntimeConfig:
    def test_default_config(self):
        section = readConfig()["volstat.collectors"]

        assert section["cas_type"] == "jiva"
        assert section["namespace"] == "openebs"
        assert section.getint("port") == 9500
        assert section["metrics_path"] == "/metrics"

    def test_command_line_overrides(self):
        args = parseArgs(["-c", "10.42.0.1:9501", "-t", "jiva", "-p", "9600", "--timeout", "1.5"])
        section = applyOverrides(readConfig(), args)["volstat.collectors"]

        assert section["controller_url"] == "10.42.0.1:9501"
        assert section.getint("port") == 9600
        assert section.getfloat("timeout_secs") == 1.5
        assert section["namespace"] == "openebs"

    def test_config_file(self, tmp_path):
        path = tmp_path / "volstat.config"
        path.write_text(CONFIG_TEMPLATE.format(url="localhost:9700"))

        config = applyOverrides(readConfig(str(path)), parseArgs(["--namespace", "vol"]))

        assert config["volstat.collectors"]["controller_url"] == "localhost:9700"
        assert config["volstat.collectors"]["namespace"] == "vol"

    def test_missing_config_file_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            readConfig(str(tmp_path / "missing.config"))

    def test_unsupported_cas_type_flag(self):
        with pytest.raises(SystemExit):
            parseArgs(["-t", "unknown"])


class TestServer:
    """Runs the exporter entry point under gunicorn and scrapes it over HTTP."""

    timeout = 15.0

    @pytest.fixture
    def server(self, controller, free_port):
        self.url = f"http://127.0.0.1:{free_port}/metrics"
        argv = ["-c", controller.url, "-p", str(free_port), "--timeout", "2.0"]

        process = multiprocessing.Process(target=main, args=(argv,))
        process.start()

        running = self.wait_for_server()
        if not running:
            process.terminate()
        assert running is True, "Failed to start volume exporter"

        yield process

        process.terminate()
        process.join(timeout=30)

    def wait_for_server(self):
        # Wait until endpoint is up and running, or timeout.
        start_time = time.time()
        while time.time() - start_time < self.timeout:
            try:
                response = requests.get(self.url, timeout=2.0)
                if response.status_code == 200:
                    return True
            except requests.RequestException:
                pass
            time.sleep(0.5)
        return False

    def test_metrics_served_by_gunicorn(self, server, controller):
        response = requests.get(self.url, timeout=5.0)

        assert response.status_code == 200
        assert response.headers["Content-Type"] == CONTENT_TYPE
        values = metric_values(response.content)
        for name, expected in FAKE_RESPONSE_METRICS.items():
            assert values[name] == expected, name
        assert "volstat_perf_runtime_seconds" in values
        assert controller.requests >= 2

    def test_controller_failure_served_as_zero(self, server, controller):
        controller.respond((500, INVALID_CONTROLLER_RESPONSE))
        response = requests.get(self.url, timeout=5.0)

        assert response.status_code == 200
        values = metric_values(response.content)
        for name in FAKE_RESPONSE_METRICS:
            assert values[name] == 0, name

    def test_server_stops_on_terminate(self, server):
        server.terminate()
        server.join(timeout=30)

        assert not server.is_alive()
        with pytest.raises(requests.RequestException):
            requests.get(self.url, timeout=2.0)
