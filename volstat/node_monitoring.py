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
# Entry point: parses runtime configuration and command-line overrides,
# then serves the /metrics endpoint through gunicorn. Metric collection is
# set up after the worker forks so that HTTP clients are created in the
# process that uses them.
# --

import argparse
import configparser
import importlib.resources
import logging
import sys

from flask import Flask
from gunicorn.app.base import BaseApplication

from volstat import utils
from volstat.backend_definitions import supportedCASTypes
from volstat.monitor import Monitor

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


class VolstatServer(BaseApplication):
    def __init__(self, app, options=None):
        self.options = options or {}
        self.application = app
        super().__init__()

    def load_config(self):
        config = {key: value for key, value in self.options.items() if key in self.cfg.settings and value is not None}
        for key, value in config.items():
            self.cfg.set(key.lower(), value)

    def load(self):
        return self.application


def createApp(monitor, metrics_path="/metrics"):
    """Build the Flask application exposing monitor metrics at metrics_path."""
    app = Flask("volstat")

    @app.route(metrics_path)
    def metrics():
        return monitor.updateAllMetrics(), {"Content-Type": CONTENT_TYPE}

    @app.route("/")
    def index():
        return (
            "<html><head><title>Volume Exporter</title></head><body>"
            "<h1>Volume Exporter</h1>"
            f'<p><a href="{metrics_path}">Metrics</a></p>'
            "</body></html>"
        )

    return app


def readConfig(configFile=None):
    config = configparser.ConfigParser()
    if configFile:
        found = config.read(configFile)
        if not found:
            utils.error(f"Unable to read runtime config file: {configFile}")
    else:
        default = importlib.resources.files("volstat").joinpath("config/volstat.default")
        config.read_string(default.read_text())
    return config


def applyOverrides(config, args):
    """Apply command-line overrides on top of the runtime config file."""
    if not config.has_section("volstat.collectors"):
        config.add_section("volstat.collectors")
    section = config["volstat.collectors"]

    overrides = {
        "controller_url": args.controller_url,
        "cas_type": args.cas_type,
        "namespace": args.namespace,
        "timeout_secs": args.timeout,
        "port": args.port,
        "metrics_path": args.metrics_path,
    }
    for key, value in overrides.items():
        if value is not None:
            section[key] = str(value)
    return config


def parseArgs(argv=None):
    parser = argparse.ArgumentParser(description="Prometheus exporter for storage volume controller stats")
    parser.add_argument("--configfile", type=str, help="runtime config file", default=None)
    parser.add_argument("-c", "--controller-url", type=str, help="volume controller address (host:port or URL)")
    parser.add_argument("-t", "--cas-type", type=str, choices=supportedCASTypes(), help="storage engine type")
    parser.add_argument("-p", "--port", type=int, help="port to expose metrics on")
    parser.add_argument("--metrics-path", type=str, help="HTTP path for metrics")
    parser.add_argument("--timeout", type=float, help="controller request timeout in seconds")
    parser.add_argument("--namespace", type=str, help="prefix for exported metric names")
    parser.add_argument("--logfile", type=str, help="log to file instead of stdout", default=None)
    parser.add_argument("--version", action="version", version=utils.getVersion())
    return parser.parse_args(argv)


def main(argv=None):
    args = parseArgs(argv)
    config = applyOverrides(readConfig(args.configfile), args)

    monitor = Monitor(config, logFile=args.logfile)
    section = config["volstat.collectors"]
    port = section.getint("port", 9500)
    metrics_path = section.get("metrics_path", "/metrics")

    app = createApp(monitor, metrics_path)

    def post_fork(server, worker):
        monitor.initMetrics()

    def worker_exit(server, worker):
        monitor.shutdown()

    options = {
        "bind": f"0.0.0.0:{port}",
        "workers": 1,
        "post_fork": post_fork,
        "worker_exit": worker_exit,
    }

    logging.info(f"Starting volume exporter on port {port} (path {metrics_path})")
    VolstatServer(app, options).run()


if __name__ == "__main__":
    sys.exit(main())
