"""Logging records, filters, text and binary layouts, and stream, syslog and time-rolling file appenders."""

__version__ = "0.1.0"