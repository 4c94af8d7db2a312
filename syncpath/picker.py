"""
Interactive host selection from ~/.ssh/config
"""
from typing import Optional
from pathlib import Path

from . import config as _cfg


def pick_host(hosts: list[str], ssh_config: Optional[Path] = None) -> str:
    """
    Print the hosts as a numbered list and ask for one.
    An empty answer selects the first host.
    """
    if not hosts:
        raise RuntimeError("no hosts found in ~/.ssh/config and no host provided")

    print("Select SSH host:")
    width = len(str(len(hosts)))
    for idx, host in enumerate(hosts, 1):
        desc = _cfg.describe_host(host, ssh_config)
        suffix = f"  ({desc})" if desc != host else ""
        print(f"  {idx:>{width}}) {host}{suffix}")

    while True:
        try:
            choice = input(f"Host [1-{len(hosts)}, default 1]: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            raise RuntimeError("host selection aborted")

        if not choice:
            return hosts[0]
        if choice in hosts:
            return choice
        if choice.isdigit() and 1 <= int(choice) <= len(hosts):
            return hosts[int(choice) - 1]
        print(f"  Please enter a number between 1 and {len(hosts)} or a host name.")


def pick_host_from_ssh_config(ssh_config: Optional[Path] = None) -> str:
    hosts = _cfg.read_ssh_hosts(ssh_config)
    return pick_host(hosts, ssh_config)
