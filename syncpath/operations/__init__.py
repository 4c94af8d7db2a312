"""Operations (rsync invocation, progress, dry-run tree)"""
from .tree import render_tree, TreeNode
from .progress import TransferMonitor, ProgressDisplay, RunStats, parse_stats, print_summary
from .transfer import SyncOptions, sync_endpoints, build_rsync_args, run_dry_run, run_transfer

__all__ = [
    "render_tree", "TreeNode",
    "TransferMonitor", "ProgressDisplay", "RunStats", "parse_stats", "print_summary",
    "SyncOptions", "sync_endpoints", "build_rsync_args", "run_dry_run", "run_transfer",
]
