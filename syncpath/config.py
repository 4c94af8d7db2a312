"""
Configuration constants for syncpath
"""
import os
from pathlib import Path
from typing import Optional

import paramiko
import yaml

from .utils.logging import warn

# ══════════════════════════════════════════════════════════════════════════════
#  DEFAULTS  ── overridden by the global YAML config via apply_config()
# ══════════════════════════════════════════════════════════════════════════════

# ssh connection reuse: one master connection shared by the probe, mkdir and rsync
CONTROL_MASTER = "auto"
CONTROL_PERSIST = "60s"
CONTROL_PATH = "~/.ssh/cm-%r@%h:%p"

# Always excluded from every transfer
DEFAULT_EXCLUDES = [".git/", "node_modules/", "target/", ".DS_Store"]
EXTRA_EXCLUDES: list[str] = []

NO_PERMS = False

# None means ~/.ssh/config
SSH_CONFIG_FILE: Optional[Path] = None


def get_home() -> Path:
    """Return the user's home directory or raise RuntimeError."""
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise RuntimeError("unable to resolve home dir") from exc
    if not str(home) or str(home) == "~":
        raise RuntimeError("unable to resolve home dir")
    return home


def get_ssh_config_file() -> Path:
    """Return the ssh config path in effect."""
    if SSH_CONFIG_FILE is not None:
        return SSH_CONFIG_FILE
    return get_home() / ".ssh" / "config"


# ══════════════════════════════════════════════════════════════════════════════
#  GLOBAL CONFIG FILE  ── $XDG_CONFIG_HOME/syncpath/config.yaml
# ══════════════════════════════════════════════════════════════════════════════

def get_global_config_dir() -> Path:
    """Return the global config directory for syncpath."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg) / "syncpath"
    return get_home() / ".config" / "syncpath"


def load_global_config(path: Optional[Path] = None) -> dict:
    """Load the global YAML config. A missing or broken file yields {}."""
    cfg_path = path or get_global_config_dir() / "config.yaml"
    if not cfg_path.is_file():
        return {}
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        warn(f"ignoring global config {cfg_path}: {exc}")
        return {}
    if not isinstance(data, dict):
        warn(f"ignoring global config {cfg_path}: expected a mapping")
        return {}
    return data


# ══════════════════════════════════════════════════════════════════════════════
#  APPLY CONFIG  ── mutates module-level variables
# ══════════════════════════════════════════════════════════════════════════════

def apply_config(data: dict):
    """
    Apply the `defaults:` section of a global config dict to the module-level
    variables. Supports keys: no_perms, excludes, control_persist,
    control_path, ssh_config.
    """
    global NO_PERMS, EXTRA_EXCLUDES, CONTROL_PERSIST, CONTROL_PATH, SSH_CONFIG_FILE

    defaults = data.get("defaults") or {}
    if not isinstance(defaults, dict):
        warn("ignoring global config defaults: expected a mapping")
        return

    if "no_perms" in defaults:
        NO_PERMS = bool(defaults["no_perms"])
    if "excludes" in defaults:
        excludes = defaults["excludes"] or []
        if isinstance(excludes, str):
            excludes = [excludes]
        EXTRA_EXCLUDES = [str(e) for e in excludes]
    if "control_persist" in defaults:
        CONTROL_PERSIST = str(defaults["control_persist"])
    if "control_path" in defaults:
        CONTROL_PATH = str(defaults["control_path"])
    if defaults.get("ssh_config"):
        SSH_CONFIG_FILE = Path(str(defaults["ssh_config"])).expanduser()


# ══════════════════════════════════════════════════════════════════════════════
#  SSH CONFIG  ── host aliases for the picker
# ══════════════════════════════════════════════════════════════════════════════

def _load_ssh_config(config_path: Path) -> paramiko.SSHConfig:
    try:
        return paramiko.SSHConfig.from_path(str(config_path))
    except (OSError, paramiko.SSHException) as exc:
        raise RuntimeError(f"failed to read {config_path}: {exc}") from exc


def read_ssh_hosts(path: Optional[Path] = None) -> list[str]:
    """
    Return the sorted Host aliases of an ssh config file, leaving out patterns
    (anything with *, ? or a ! negation). A missing file yields an empty list.
    """
    config_path = path or get_ssh_config_file()
    if not config_path.exists():
        return []
    ssh_config = _load_ssh_config(config_path)
    return sorted(
        host for host in ssh_config.get_hostnames()
        if not any(ch in host for ch in "*?!")
    )


def describe_host(alias: str, path: Optional[Path] = None) -> str:
    """
    Resolve an alias through the ssh config and return 'user@hostname:port',
    leaving out the parts the config does not set.
    """
    config_path = path or get_ssh_config_file()
    if not config_path.is_file():
        return alias
    try:
        entry = _load_ssh_config(config_path).lookup(alias)
    except (RuntimeError, paramiko.SSHException) as exc:
        warn(f"could not parse {config_path}: {exc}")
        return alias

    desc = entry.get("hostname", alias)
    if "user" in entry:
        desc = f"{entry['user']}@{desc}"
    if "port" in entry:
        desc = f"{desc}:{entry['port']}"
    return desc
