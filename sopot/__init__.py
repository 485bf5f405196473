"""Support library for the RF2 Community Patch: core config file, network protocol, HTTP, watch-dog timer and utilities."""

__version__ = "0.1.0"