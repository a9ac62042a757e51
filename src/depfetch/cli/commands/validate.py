"""
depfetch validate command.

SUMMARY: Validate a directory's manifest and list its features and dependencies
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from depfetch.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from depfetch.core.config.domains import ManifestConfig
from depfetch.core.exceptions import DepfetchError
from depfetch.core.manifest import read_manifest

SUMMARY = "Validate a directory's manifest and list its features and dependencies"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "directory",
        nargs="?",
        default=None,
        help="Directory containing the manifest (default: repo root)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        repo_root = get_repo_root(args)
        directory = Path(args.directory).expanduser().resolve() if args.directory else repo_root
        manifest = read_manifest(directory, filenames=ManifestConfig(repo_root=repo_root).filenames)
    except DepfetchError as e:
        formatter.error(e, error_code="validate_error")
        return 1

    if manifest is None:
        formatter.success(
            {"directory": str(directory), "manifest": None, "features": []},
            f"No manifest in {directory}",
        )
        return 0

    features = [
        {
            "name": feature.name,
            "dependencies": [
                {
                    "name": edge.name,
                    "url": edge.url,
                    "revision": edge.revision,
                    "features": edge.features,
                }
                for edge in feature.dependencies
            ],
        }
        for feature in manifest.features
    ]
    if formatter.json_mode:
        formatter.json_output({"status": "valid", "manifest": str(manifest.path), "features": features})
        return 0

    formatter.text(f"{manifest.path}: valid")
    for feature in manifest.features:
        formatter.text(f"feature {feature.name}")
        for edge in feature.dependencies:
            pinned = edge.revision or "(default)"
            extra = f" [{edge.features}]" if edge.features else ""
            formatter.text(f"  {edge.name}: {edge.url}#{pinned}{extra}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
