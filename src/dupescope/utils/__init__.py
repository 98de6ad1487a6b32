"""Formatting and parsing helpers shared by the CLI and the services."""

from .convert_utils import ConvertUtils

__all__ = ["ConvertUtils"]
