"""
ssh option policy and the remote commands syncpath needs
"""
from .. import config as _cfg
from ..utils.logging import vlog
from .runner import CommandRunner


def ssh_args() -> list[str]:
    """Multiplexing options shared by every ssh call and by rsync's -e."""
    return [
        "-o", f"ControlMaster={_cfg.CONTROL_MASTER}",
        "-o", f"ControlPersist={_cfg.CONTROL_PERSIST}",
        "-o", f"ControlPath={_cfg.CONTROL_PATH}",
    ]


def shell_escape(value: str) -> str:
    """Single-quote *value* for a POSIX shell."""
    return "'" + value.replace("'", "'\\''") + "'"


def shell_escape_double(value: str) -> str:
    """Escape the characters that stay special inside double quotes."""
    out = []
    for ch in value:
        if ch in '\\"$`':
            out.append("\\")
        out.append(ch)
    return "".join(out)


def remote_shell_path(path: str) -> str:
    """
    Quote a remote path for the remote shell. '~' paths become "$HOME/..." so
    the home directory still expands inside quotes.
    """
    if path == "~":
        return '"$HOME"'
    if path.startswith("~/"):
        return f'"$HOME/{shell_escape_double(path[2:])}"'
    return shell_escape(path)


class SSHManager:
    """
    Runs one-off remote commands on *host* through the system ssh client, so
    they share the ControlMaster connection rsync uses.
    """

    def __init__(self, runner: CommandRunner, host: str):
        self.runner = runner
        self.host = host

    def command_args(self, cmd: str) -> list[str]:
        return [*ssh_args(), self.host, cmd]

    def exec_status(self, cmd: str) -> int:
        """Run *cmd* on the remote host and return its exit code."""
        vlog(f"[ssh] {self.host}: {cmd}")
        try:
            return self.runner.status("ssh", self.command_args(cmd))
        except RuntimeError as exc:
            raise RuntimeError(f"failed to run ssh {cmd.split()[0]}: {exc}") from exc

    def is_file(self, remote_path: str) -> bool:
        """True when *remote_path* is a regular file on the remote host."""
        return self.exec_status(f"test -f {remote_shell_path(remote_path)}") == 0

    def mkdir_p(self, remote_path: str):
        """Create *remote_path* and its parents; raises on failure."""
        rc = self.exec_status(f"mkdir -p {remote_shell_path(remote_path)}")
        if rc != 0:
            raise RuntimeError(f"failed to create remote directory {remote_path}")
