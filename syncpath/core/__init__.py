"""Core functionality (paths, process running, ssh)"""
from .paths import resolve, to_remote, clean_path, parent_of_remote
from .runner import CommandRunner, SubprocessRunner
from .ssh_manager import SSHManager, ssh_args, remote_shell_path

__all__ = [
    "resolve", "to_remote", "clean_path", "parent_of_remote",
    "CommandRunner", "SubprocessRunner",
    "SSHManager", "ssh_args", "remote_shell_path",
]
