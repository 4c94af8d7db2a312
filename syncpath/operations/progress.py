"""
Live progress for a running rsync and the end-of-run summary

rsync's two output streams are read by one thread each:
  stdout  the --out-format=%n line of each item → "current file" display
  stderr  percentages → overall bar; 'sent …' / 'total size is …' → stats
"""
import threading
from dataclasses import dataclass
from typing import Iterable, Optional

from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from ..utils.file_utils import format_duration, format_size, parse_bytes

STATS_PREFIXES = ("sent ", "total size is ")


# ── display ──────────────────────────────────────────────────────────────────

class ProgressDisplay:
    """An overall percentage bar plus a spinner showing the current item."""

    def __init__(self, console=None):
        self.progress = Progress(
            SpinnerColumn(finished_text="✓"),
            TextColumn("{task.description}", markup=False),
            BarColumn(bar_width=None),
            TaskProgressColumn(),
            console=console,
        )
        self.overall = self.progress.add_task("Overall", total=100)
        self.current = self.progress.add_task("Waiting for files...", total=None)

    def start(self):
        self.progress.start()

    def set_position(self, percent: int):
        self.progress.update(self.overall, completed=percent)

    def set_current(self, text: str):
        self.progress.update(self.current, description=text)

    def finish(self):
        self.progress.update(self.current, description="Done", total=1, completed=1)
        self.progress.stop()


# ── stream readers ───────────────────────────────────────────────────────────

def parse_progress_percent(line: str) -> Optional[int]:
    """First whitespace-delimited 'N%' token with 0 <= N <= 100, else None."""
    if "%" not in line:
        return None
    for token in line.split():
        if not token.endswith("%"):
            continue
        num = token[:-1]
        # str.isdigit() also accepts '²' and friends, which int() rejects
        if not (num.isascii() and num.isdigit()):
            continue
        if int(num) <= 100:
            return int(num)
    return None


class TransferMonitor:
    """
    Feeds a display from a running process's stdout/stderr and collects the
    stats lines rsync prints at the end of a run.
    """

    def __init__(self, display):
        self.display = display
        self._stats: list[str] = []
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []

    def read_progress(self, stream: Iterable[str]):
        for line in stream:
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            self.display.set_current(line)

    def read_diagnostics(self, stream: Iterable[str]):
        for line in stream:
            line = line.rstrip("\r\n")
            percent = parse_progress_percent(line)
            if percent is not None:
                self.display.set_position(percent)
            if line.startswith(STATS_PREFIXES):
                with self._lock:
                    self._stats.append(line)

    def start(self, proc):
        """Start one reader thread per output stream of *proc*."""
        self._threads = [
            threading.Thread(target=self.read_progress, args=(proc.stdout,), daemon=True),
            threading.Thread(target=self.read_diagnostics, args=(proc.stderr,), daemon=True),
        ]
        for t in self._threads:
            t.start()

    def join(self):
        for t in self._threads:
            t.join()

    def stats_lines(self) -> list[str]:
        with self._lock:
            return list(self._stats)


# ── summary ──────────────────────────────────────────────────────────────────

@dataclass
class RunStats:
    sent_bytes: Optional[int] = None
    total_bytes: Optional[int] = None
    duration: Optional[float] = None


def parse_stats(lines: Iterable[str], duration: Optional[float] = None) -> RunStats:
    """
    Pull the byte counts out of rsync's closing lines:
      sent 2,327 bytes  received 274 bytes  1,234.00 bytes/sec
      total size is 706,617,380  speedup is 1.00
    """
    stats = RunStats(duration=duration)
    for line in lines:
        line = line.strip()
        if line.startswith("sent "):
            rest = line[len("sent "):]
            end = rest.find(" bytes")
            if end != -1:
                stats.sent_bytes = parse_bytes(rest[:end])
        elif line.startswith("total size is "):
            rest = line[len("total size is "):]
            end = rest.find("  ")
            stats.total_bytes = parse_bytes(rest[:end] if end != -1 else rest)
    return stats


def format_summary(stats: RunStats) -> list[str]:
    lines = ["Summary:"]
    if stats.sent_bytes is not None:
        lines.append(f"  sent: {format_size(stats.sent_bytes)}")
    if stats.total_bytes is not None:
        lines.append(f"  total size: {format_size(stats.total_bytes)}")
    if stats.duration is not None:
        lines.append(f"  duration: {format_duration(stats.duration)}")
    return lines


def print_summary(stats_lines: Iterable[str], duration: float) -> RunStats:
    stats = parse_stats(stats_lines, duration)
    for line in format_summary(stats):
        print(line)
    return stats
