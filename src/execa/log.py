"""Timestamped output + GitHub Actions formatting for the CLI."""

import os
import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _rule(title: str) -> str:
    return f"── {title} " + "─" * max(0, 45 - len(title))


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def header(title: str) -> None:
    if _is_github_actions():
        print(f"::group::{title}", flush=True)
    info(_rule(title))


def footer(title: str) -> None:
    info(_rule(title))
    if _is_github_actions():
        print("::endgroup::", flush=True)


def group_start(name: str, cmd: str) -> None:
    if _is_github_actions():
        print(f"::group::{name}", flush=True)
    info(f"▸ {name}: {cmd}")


def group_end() -> None:
    if _is_github_actions():
        print("::endgroup::", flush=True)


def output(label: str, text: str) -> None:
    """Captured text, one indented line per line of output. Skipped when empty."""
    if not text:
        return
    info(f"  {label}:")
    for line in text.splitlines():
        info(f"    {line}")


def success(msg: str) -> None:
    info(f"  ✓ {msg}")


def failure(msg: str) -> None:
    if _is_github_actions():
        # Workflow commands are single-line.
        print(f"::error::{msg.splitlines()[0] if msg else msg}", flush=True)
    info(f"  ✗ {msg}")


def error(msg: str) -> None:
    if _is_github_actions():
        print(f"::error::{msg.splitlines()[0] if msg else msg}", flush=True)
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
