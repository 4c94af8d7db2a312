"""
Process spawning behind a narrow interface so tests can script it
"""
import subprocess


class CommandRunner:
    """
    Everything syncpath runs goes through one of these three calls:

    * status()  run to completion, return the exit code
    * output()  run to completion, capture stdout and stderr (bytes)
    * spawn()   start a long-running process with text-mode stdout/stderr pipes
    """

    def status(self, program: str, args: list[str]) -> int:
        raise NotImplementedError

    def output(self, program: str, args: list[str]) -> subprocess.CompletedProcess:
        raise NotImplementedError

    def spawn(self, program: str, args: list[str]) -> subprocess.Popen:
        raise NotImplementedError


class SubprocessRunner(CommandRunner):
    """CommandRunner backed by the subprocess module."""

    def status(self, program: str, args: list[str]) -> int:
        try:
            return subprocess.run([program, *args]).returncode
        except OSError as exc:
            raise RuntimeError(f"failed to run {program}: {exc}") from exc

    def output(self, program: str, args: list[str]) -> subprocess.CompletedProcess:
        try:
            return subprocess.run([program, *args], capture_output=True)
        except OSError as exc:
            raise RuntimeError(f"failed to run {program}: {exc}") from exc

    def spawn(self, program: str, args: list[str]) -> subprocess.Popen:
        try:
            return subprocess.Popen(
                [program, *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                universal_newlines=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as exc:
            raise RuntimeError(f"failed to spawn {program}: {exc}") from exc
