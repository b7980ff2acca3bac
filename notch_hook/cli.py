"""
Command line entry point.

    notch-hook [hook]
        Read one Claude Code hook event from stdin and notify the notch app.

    notch-hook diff --action preview --file-path PATH [--old-text T] [--new-text T]
        Write a preview diff for PATH and print the artifact path.

Environment variables:
- CLAUDE_PROJECT_DIR: Project root (default: current directory)
- NOTCH_SOCKET_PATH: Display service socket
- NOTCH_DIFF_DIR: Preview artifact directory
- NOTCH_SOCKET_TIMEOUT: Socket timeout in seconds (default: 2.0)
- NOTCH_HOOK_LOG_LEVEL: stderr log level (default: WARNING)
"""
import argparse
import sys
from pathlib import Path

from notch_hook.config import HookConfig
from notch_hook.errors import MalformedEvent, PreviewError, SetupError
from notch_hook.handlers.diff_preview import generate_preview_diff
from notch_hook.hook_utils import configure_logging, graceful_main, log_event, safe_exists
from notch_hook.router import run_hook

DIFF_ACTIONS = ("preview",)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notch-hook",
        description="Forward Claude Code hook events to the notch notification app",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("hook", help="Process a Claude Code hook event from stdin (default)")

    diff = subparsers.add_parser("diff", help="Generate a diff preview")
    diff.add_argument("--action", required=True, help="Diff action (only 'preview' is supported)")
    diff.add_argument("--file-path", required=True, help="File the edit applies to")
    diff.add_argument("--old-text", default=None, help="Text being replaced")
    diff.add_argument("--new-text", default=None, help="Replacement text or full new content")
    return parser


def load_config() -> HookConfig:
    """Build the per-process config and create its directories."""
    config = HookConfig.from_env()
    config.ensure_dirs()
    if not safe_exists(config.socket_path):
        log_event("config", "socket_missing", {
            "socket": str(config.socket_path),
            "msg": "The notch app may not be running",
        }, "warning")
    return config


@graceful_main("hook", fatal=(MalformedEvent, SetupError))
def hook_command() -> None:
    config = load_config()
    run_hook(config)


@graceful_main("diff", fatal=(PreviewError, SetupError))
def diff_command(args: argparse.Namespace) -> None:
    if args.action not in DIFF_ACTIONS:
        print(f"Unknown diff action: {args.action}", file=sys.stderr)
        return

    config = load_config()
    result = generate_preview_diff(
        Path(args.file_path), args.old_text, args.new_text, config.diff_dir
    )
    print(
        f"[diff] Generated preview diff: +{result.stats.added} -{result.stats.removed} lines",
        file=sys.stderr,
    )
    print(result.diff_path)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)

    if args.command == "diff":
        diff_command(args)
    else:
        hook_command()
    return 0


if __name__ == "__main__":
    sys.exit(main())
