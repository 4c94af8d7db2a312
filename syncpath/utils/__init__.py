"""Utilities (logging, size formatting)"""
from .logging import log, vlog, warn, error, set_verbose, is_verbose
from .file_utils import format_size, parse_bytes, format_duration

__all__ = [
    "log", "vlog", "warn", "error", "set_verbose", "is_verbose",
    "format_size", "parse_bytes", "format_duration",
]
