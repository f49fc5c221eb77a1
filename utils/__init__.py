"""Utility helpers for the CNIS toolkit."""

from .logging_context import configure_logging, log_context

__all__ = ["configure_logging", "log_context"]
