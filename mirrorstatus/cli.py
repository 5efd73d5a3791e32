"""CLI entrypoint for mirror-status."""

from __future__ import annotations

import argparse
import sys
import textwrap
from pathlib import Path

from .config import build_config
from .errors import MirrorStatusError, UsageError
from .git.status import GitStatusProvider
from .logging import configure_logging
from .reporter import AreaStatusReporter

_EPILOG = textwrap.dedent(
    """\
    What it does:
      - Runs git status for each area and prints file lists and counts
      - If --since is provided, shows name-status diffs since the given ref
      - If the README describes a mirror, warns when cross-links are missing
      - If --drift-root is provided, compares file presence and hashes per area

    Safe by default: no write operations are performed.
    """
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mirror-status",
        description="Summarize uncommitted changes in the top-level areas of a Git repository.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--repo-root",
        metavar="PATH",
        help="Path to the repository root (defaults to the repository containing this tool).",
    )
    parser.add_argument(
        "--since",
        metavar="REV",
        help="Show name-status diffs since a Git ref (e.g. origin/main).",
    )
    parser.add_argument(
        "--areas",
        metavar="CSV",
        help="Comma-separated list of top-level areas to scan (default: prompts,workflows,scripts).",
    )
    parser.add_argument(
        "--drift-root",
        metavar="PATH",
        help="Compare file presence and hashes against another repository root.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=True,
        help="Compute only; never modify anything (always on).",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Read settings from this file instead of <repo-root>/.mirror-status.yml.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _default_repo_root(provider: GitStatusProvider) -> Path:
    anchor = Path(__file__).resolve().parent.parent
    toplevel = provider.toplevel(anchor)
    return Path(toplevel) if toplevel else anchor


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for mirror-status; returns the process exit code."""
    parser = _build_parser()
    args, unknown = parser.parse_known_args(argv)

    configure_logging(verbose=bool(args.verbose))
    provider = GitStatusProvider()

    try:
        if unknown:
            raise UsageError(f"Unknown argument: {unknown[0]}")
        repo_root = Path(args.repo_root) if args.repo_root else _default_repo_root(provider)
        config = build_config(
            repo_root,
            areas=args.areas,
            since=args.since,
            drift_root=args.drift_root,
            config_path=Path(args.config) if args.config else None,
        )
        AreaStatusReporter(provider).run(config)
    except UsageError as exc:
        sys.stderr.write(f"{exc}\n")
        parser.print_help(sys.stderr)
        return exc.exit_code
    except MirrorStatusError as exc:
        sys.stderr.write(f"{exc}\n")
        return exc.exit_code
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
