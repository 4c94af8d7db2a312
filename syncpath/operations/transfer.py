"""
rsync invocations: argument policy, endpoints, dry run and real transfer
"""
import shlex
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .. import config as _cfg
from ..core.runner import CommandRunner
from ..core.ssh_manager import ssh_args
from ..utils.logging import vlog
from .progress import ProgressDisplay, RunStats, TransferMonitor, print_summary
from .tree import render_tree

TRANSFERRED_SIZE_PREFIX = "Total transferred file size:"


@dataclass
class SyncOptions:
    pull: bool = False
    dry_run: bool = False
    no_perms: bool = False


@dataclass
class DryRunSummary:
    tree: str
    transferred_line: Optional[str] = None


def sync_endpoints(host: str, local_path, remote_path: str,
                   is_file: bool, pulling: bool) -> tuple[str, str]:
    """
    Return (source, destination). Directories get a trailing '/' on both sides
    so rsync copies their contents rather than nesting them.
    """
    if is_file:
        local, remote = str(local_path), remote_path
    else:
        local, remote = f"{local_path}/", f"{remote_path}/"

    remote = f"{host}:{remote}"
    if pulling:
        return remote, local
    return local, remote


def build_rsync_args(options: SyncOptions, dry_run: bool) -> list[str]:
    """rsync options for one run; the caller appends source and destination."""
    args = ["-avz"]
    if not dry_run:
        args += ["-P", "--partial", "--inplace", "--info=progress2"]
    args += ["-e", "ssh " + " ".join(ssh_args())]
    args.append("--stats")
    if not dry_run:
        args.append("--out-format=%n")
    for pattern in [*_cfg.DEFAULT_EXCLUDES, *_cfg.EXTRA_EXCLUDES]:
        args.append(f"--exclude={pattern}")
    if options.no_perms:
        args.append("--no-perms")
    if dry_run:
        args += ["--dry-run", "--itemize-changes", "--out-format=%i|%n|%l"]
    return args


def _find_transferred_line(text: str) -> Optional[str]:
    for line in text.splitlines():
        if line.startswith(TRANSFERRED_SIZE_PREFIX):
            return line.strip()
    return None


def run_dry_run(runner: CommandRunner, host: str, local_path: Path,
                remote_path: str, is_file: bool, options: SyncOptions) -> DryRunSummary:
    """Run rsync --dry-run to completion and render what it would change."""
    src, dst = sync_endpoints(host, local_path, remote_path, is_file, options.pull)
    args = build_rsync_args(options, dry_run=True) + [src, dst]
    vlog(f"[rsync] {shlex.join(['rsync', *args])}")

    try:
        result = runner.output("rsync", args)
    except RuntimeError as exc:
        raise RuntimeError(f"failed to run rsync --dry-run: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(f"rsync dry run failed (exit code {result.returncode})")

    stdout = result.stdout.decode("utf-8", errors="replace")
    stderr = result.stderr.decode("utf-8", errors="replace")
    # --stats lands on stdout with most rsync builds
    transferred = _find_transferred_line(stderr) or _find_transferred_line(stdout)
    return DryRunSummary(tree=render_tree(stdout), transferred_line=transferred)


def run_transfer(runner: CommandRunner, host: str, local_path: Path,
                 remote_path: str, is_file: bool, options: SyncOptions,
                 display=None) -> RunStats:
    """Run the real rsync with live progress, then print the summary."""
    src, dst = sync_endpoints(host, local_path, remote_path, is_file, options.pull)
    args = build_rsync_args(options, dry_run=False) + [src, dst]
    vlog(f"[rsync] {shlex.join(['rsync', *args])}")

    proc = runner.spawn("rsync", args)
    display = display or ProgressDisplay()
    monitor = TransferMonitor(display)

    display.start()
    try:
        monitor.start(proc)
        start = time.monotonic()
        try:
            rc = proc.wait()
        except OSError as exc:
            raise RuntimeError(f"failed to wait on rsync: {exc}") from exc
        duration = time.monotonic() - start
        monitor.join()
    finally:
        display.finish()

    if rc != 0:
        raise RuntimeError(f"rsync failed (exit code {rc})")

    return print_summary(monitor.stats_lines(), duration)
