#!/usr/bin/env python3
"""
syncpath - rsync + ssh with smart pathing
=========================================

Push a local path to the same place on a remote host, or pull it back.
Paths under your home directory map to '~/...' on the remote, so
`syncpath ~/projects/app devbox` lands in ~/projects/app on devbox.

  syncpath PATH [HOST]          push PATH to HOST
  syncpath PATH [HOST] --pull   pull the remote copy into PATH
  syncpath PATH [HOST] -d       show what would change, as a tree

Without HOST, a host is picked from ~/.ssh/config.
"""
import sys
import argparse
import traceback


def build_parser() -> argparse.ArgumentParser:
    from syncpath import __version__

    parser = argparse.ArgumentParser(
        prog="syncpath",
        description="rsync + ssh with smart pathing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", metavar="PATH",
                        help="Local path to sync (push) or path to pull into (pull)")
    parser.add_argument("host", nargs="?", metavar="HOST",
                        help="Host to sync with; if omitted, pick one from ~/.ssh/config")
    parser.add_argument("--pull", action="store_true",
                        help="Pull remote→local (default is push local→remote)")
    parser.add_argument("-d", "--dry-run", action="store_true",
                        help="Dry run: show a tree-style diff and transfer size")
    parser.add_argument("--no-perms", action="store_true", default=None,
                        help="Skip syncing permissions (useful for macOS/Linux UID/GID clashes)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every step, including the ssh and rsync commands")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    """CLI entry point for syncpath"""
    import syncpath.config as _cfg
    from syncpath.core.sync_engine import run_sync
    from syncpath.operations.transfer import SyncOptions
    from syncpath.picker import pick_host_from_ssh_config
    from syncpath.utils.logging import error, is_verbose, set_verbose, vlog

    args = build_parser().parse_args(argv)
    set_verbose(args.verbose)

    try:
        _cfg.apply_config(_cfg.load_global_config())

        options = SyncOptions(
            pull=args.pull,
            dry_run=args.dry_run,
            no_perms=_cfg.NO_PERMS if args.no_perms is None else args.no_perms,
        )

        host = args.host or pick_host_from_ssh_config()
        if is_verbose():
            vlog(f"[config] host={host}  ({_cfg.describe_host(host)})")

        run_sync(host, args.path, options)
    except RuntimeError as exc:
        if is_verbose():
            traceback.print_exc()
        error(str(exc))
        sys.exit(1)
    except KeyboardInterrupt:
        print()
        error("interrupted")
        sys.exit(130)


if __name__ == "__main__":
    main()
