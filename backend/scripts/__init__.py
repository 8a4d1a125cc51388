"""Operational scripts run against the configured database."""
