"""
Push / pull orchestration: resolve paths, prepare the target, run rsync
"""
from pathlib import Path
from typing import Optional

from .. import config as _cfg
from ..operations.transfer import SyncOptions, run_dry_run, run_transfer
from ..utils.logging import vlog, warn
from .paths import clean_path, parent_of_remote, resolve, to_remote
from .runner import CommandRunner, SubprocessRunner
from .ssh_manager import SSHManager


def _print_dry_run(summary):
    print(summary.tree)
    if summary.transferred_line:
        print(summary.transferred_line)


def remote_is_file(mgr: SSHManager, remote_path: str) -> bool:
    """Probe the remote path; any failure counts as 'not a file'."""
    try:
        return mgr.is_file(remote_path)
    except RuntimeError as exc:
        warn(f"remote file probe failed, assuming a directory: {exc}")
        return False


def push(runner: CommandRunner, host: str, local_path: Path, remote_path: str,
         options: SyncOptions, display=None):
    is_file = local_path.is_file()
    vlog(f"[push] {local_path} is a {'file' if is_file else 'directory'}")

    SSHManager(runner, host).mkdir_p(parent_of_remote(remote_path))

    if options.dry_run:
        _print_dry_run(run_dry_run(runner, host, local_path, remote_path, is_file, options))
    else:
        run_transfer(runner, host, local_path, remote_path, is_file, options, display)


def pull(runner: CommandRunner, host: str, local_path: Path, remote_path: str,
         options: SyncOptions, display=None):
    is_file = remote_is_file(SSHManager(runner, host), remote_path)
    vlog(f"[pull] {host}:{remote_path} is a {'file' if is_file else 'directory'}")

    local_parent = local_path.parent
    try:
        local_parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(f"failed to create {local_parent}: {exc}") from exc

    if options.dry_run:
        _print_dry_run(run_dry_run(runner, host, local_path, remote_path, is_file, options))
    else:
        run_transfer(runner, host, local_path, remote_path, is_file, options, display)


def run_sync(host: str, raw_path: str, options: SyncOptions,
             runner: Optional[CommandRunner] = None,
             cwd: Optional[Path] = None, home: Optional[Path] = None,
             display=None):
    """
    Sync *raw_path* with the same place on *host*: pushes by default, pulls
    with options.pull. Paths under the home directory map to '~/...' remotely.
    """
    runner = runner or SubprocessRunner()
    home = clean_path(home or _cfg.get_home())
    cwd = cwd or Path.cwd()

    local_path = resolve(raw_path, cwd, home)
    remote_path = to_remote(local_path, home)
    vlog(f"[paths] local={local_path}  remote={host}:{remote_path}")

    if options.pull:
        pull(runner, host, local_path, remote_path, options, display)
    else:
        push(runner, host, local_path, remote_path, options, display)
