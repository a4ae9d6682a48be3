"""Reporting aggregation engine."""
