"""Main entry point for the preview editor CLI."""
from __future__ import annotations

import asyncio
import os
import sys

from preview_cli import __version__
from preview_cli.client import ApiClient
from preview_cli.editor import EditorSession

DEFAULT_API_URL = "http://localhost:8000"


def print_help():
    """Print help message."""
    print(f"""
preview-edit v{__version__}

Usage:
  preview-edit [options]

Options:
  --api-url URL     Preview server (default: {DEFAULT_API_URL})
  --set ID=TEXT     Replace the text of region ID (repeatable; \\n for a line break)
  --list            List editable regions and their current text, then exit
  -h, --help        Show this help
  -v, --version     Show version

Environment:
  PREVIEW_API_URL   Override the preview server (same as --api-url)

Examples:
  preview-edit --list
  preview-edit --set title=Hello --set feature-1-text="Really fast"
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        api_url: str | None
        edits: list[tuple[str, str]]
        list_fields: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "api_url": None,
        "edits": [],
        "list_fields": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--api-url":
            if i + 1 < len(args):
                result["api_url"] = args[i + 1]
                i += 1
            else:
                print("Error: --api-url requires a URL")
                sys.exit(1)
        elif arg == "--set":
            if i + 1 < len(args) and "=" in args[i + 1]:
                field_id, text = args[i + 1].split("=", 1)
                result["edits"].append((field_id, text.replace("\\n", "\n")))
                i += 1
            else:
                print("Error: --set requires ID=TEXT")
                sys.exit(1)
        elif arg == "--list":
            result["list_fields"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        else:
            print(f"Unknown option: {arg}")
            print("Run 'preview-edit --help' for usage.")
            sys.exit(1)

        i += 1

    return result


async def run(api_url: str, edits: list[tuple[str, str]], list_fields: bool) -> int:
    """Load the page, apply edits, share. Returns the process exit code."""
    client = ApiClient(api_url)
    try:
        session = EditorSession(client)
        registry = await session.load()

        if not registry.ids:
            print(f"No editable regions found at {api_url}")
            return 1

        if list_fields:
            for field_id, text in registry.as_mapping().items():
                print(f"  {field_id}: {text!r}")
            return 0

        session.toggle_edit()
        for field_id, text in edits:
            if field_id not in registry.ids:
                print(f"Error: unknown region {field_id!r}")
                return 1
            registry.set_text(field_id, text)

        await session.share()

        for dialog in session.dialogs():
            print(f"{dialog.title}: {dialog.body}")
            if dialog.detail:
                print(f"  {dialog.detail}")

        return 1 if session.error else 0
    finally:
        await client.close()


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"preview-edit {__version__}")
        return

    api_url = args["api_url"] or os.environ.get("PREVIEW_API_URL") or DEFAULT_API_URL
    sys.exit(asyncio.run(run(api_url, args["edits"], args["list_fields"])))


if __name__ == "__main__":
    main()
