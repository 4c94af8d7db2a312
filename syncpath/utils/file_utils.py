"""
Size and duration formatting helpers
"""
from typing import Optional

KB = 1024
MB = KB * 1024
GB = MB * 1024

# Thousands separators rsync may print depending on locale.
_SEPARATORS = (",", ".", "'")


def format_size(n: int) -> str:
    """Human-readable byte count, 1024-based."""
    if n >= GB:
        return f"{n / GB:.2f} GB"
    if n >= MB:
        return f"{n / MB:.2f} MB"
    if n >= KB:
        return f"{n / KB:.2f} KB"
    return f"{n} B"


def parse_bytes(s: str) -> Optional[int]:
    """Parse an rsync byte count such as '2,327'; None if it is not a number."""
    s = s.strip()
    for sep in _SEPARATORS:
        s = s.replace(sep, "")
    if not (s.isascii() and s.isdigit()):
        return None
    return int(s)


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"
