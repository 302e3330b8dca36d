# Packaging for the volstat volume controller exporter. The default runtime
# config is shipped as package data and loaded via importlib.resources.

from setuptools import find_packages, setup

setup(
    name="volstat",
    version="1.0.0",
    description="Prometheus exporter for storage volume controller stats",
    packages=find_packages(include=["volstat", "volstat.*"]),
    package_data={"volstat": ["config/volstat.default"]},
    python_requires=">=3.9",
    install_requires=[
        "flask",
        "gunicorn",
        "prometheus_client",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "volstat-exporter=volstat.node_monitoring:main",
        ],
    },
)
