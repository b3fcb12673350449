"""Prometheus exporter for an Elgato Key Light."""
