"""
Local path resolution and local → remote path mapping
"""
from pathlib import Path, PurePosixPath


def expand_path(raw: str, home: Path) -> Path:
    """Expand a leading '~' to *home*."""
    if raw.startswith("~"):
        return home / raw[1:].lstrip("/")
    return Path(raw)


def clean_path(path: Path) -> Path:
    """
    Lexically normalize *path*: drop '.' components and let '..' pop the last
    emitted component. Popping past the root (or an empty result) is a no-op.
    """
    anchor = path.anchor
    out: list[str] = []
    for part in path.parts[1 if anchor else 0:]:
        if part == "..":
            if out:
                out.pop()
        elif part != ".":
            out.append(part)
    return Path(anchor, *out)


def resolve(raw: str, cwd: Path, home: Path) -> Path:
    """
    Turn user input into an absolute, lexically clean path.
    Does not touch the filesystem.
    """
    path = expand_path(raw, home)
    if not path.is_absolute():
        path = cwd / path
    return clean_path(path)


def to_remote(resolved: Path, home: Path) -> str:
    """
    Express *resolved* relative to the remote home ('~/...') when it lies under
    *home*; otherwise reuse the absolute local path verbatim.
    """
    try:
        rel = resolved.relative_to(home)
    except ValueError:
        return str(resolved)
    if not rel.parts:
        return "~"
    return f"~/{rel.as_posix()}"


def parent_of_remote(remote_path: str) -> str:
    """POSIX parent of a remote path string."""
    return str(PurePosixPath(remote_path).parent)
