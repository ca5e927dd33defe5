"""Exceptions raised by the configuration and output layers."""

from __future__ import annotations


class ConfigError(ValueError):
    """A request file, word list or setting could not be understood."""
