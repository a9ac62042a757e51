"""
depfetch fetch command.

SUMMARY: Fetch every dependency reachable from the root manifest
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from depfetch.cli import (
    OutputFormatter,
    add_standard_flags,
    add_workspace_flag,
    get_repo_root,
    setup_logging,
)
from depfetch.core.exceptions import DepfetchError

SUMMARY = "Fetch every dependency reachable from the root manifest"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_workspace_flag(parser)
    parser.add_argument(
        "--no-pull",
        dest="pull",
        action="store_false",
        default=None,
        help="Skip 'git pull' after checkout (for tag or commit pins)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = get_repo_root(args)
        setup_logging(args, repo_root)

        from depfetch.core.resolve.runner import resolve_tree

        workspace = Path(args.workspace).expanduser() if getattr(args, "workspace", None) else None
        workspace_dir, result = resolve_tree(repo_root, workspace=workspace, pull=getattr(args, "pull", None))
    except DepfetchError as e:
        formatter.error(e, error_code="fetch_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"status": "success", "workspace": str(workspace_dir), **result.to_dict()})
    else:
        formatter.text("enabled features:")
        for qualified in result.enabled_features:
            formatter.text(qualified)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
