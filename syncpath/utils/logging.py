"""
Console output for syncpath

Step logs go to stdout with a [HH:MM:SS] stamp; warnings and errors go to
stderr so they never mix with dry-run trees or the transfer summary.
"""
import sys
from datetime import datetime

_verbose = False


def set_verbose(verbose: bool):
    global _verbose
    _verbose = bool(verbose)


def is_verbose() -> bool:
    return _verbose


def _emit(stream, text: str):
    print(text, file=stream, flush=True)


def _stamped(msg: str) -> str:
    return f"[{datetime.now():%H:%M:%S}] {msg}"


def log(msg: str):
    """Timestamped message on stdout"""
    _emit(sys.stdout, _stamped(msg))


def vlog(msg: str):
    """log() only under -v/--verbose"""
    if _verbose:
        log(msg)


def warn(msg: str):
    _emit(sys.stderr, _stamped(f"⚠  {msg}"))


def error(msg: str):
    """Fatal error line for the CLI: 'error: <msg>' on stderr, no timestamp."""
    _emit(sys.stderr, f"error: {msg}")
