"""Main entry point for Briefmark CLI."""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from briefmark import RenderOptions, render
from briefmark.config import settings
from briefmark_cli import __version__


def print_help():
    """Print help message."""
    print(f"""
Briefmark CLI v{__version__}

Usage:
  briefmark [options] [FILE]

Reads FILE (or stdin when FILE is omitted or "-") and writes the rendered
result to stdout.

Options:
  --references FILE  JSON array of {{"id", "title", "kind"?, "inactive"?}}
                     targets; mentions and note links matching a title
                     render resolved
  --text             Render plain text instead of HTML
  -h, --help         Show this help
  -v, --version      Show version

Environment:
  BRIEFMARK_MAX_MENTION_LENGTH     Longest @mention label (default 60)
  BRIEFMARK_MAX_NOTE_TITLE_LENGTH  Longest [[note link]] title (default 200)
  BRIEFMARK_LOG_LEVEL              Log level (default WARNING)

Examples:
  briefmark reply.md
  briefmark --references refs.json reply.md > reply.html
  echo "Ping @Acme Corp" | briefmark --text
""")


def parse_args(args: list[str]) -> dict:
    """
    Parse command line arguments.

    Returns dict with:
        input_path: str | None (None or "-" for stdin)
        references_path: str | None
        text: bool
        show_help: bool
        show_version: bool
    """
    result = {
        "input_path": None,
        "references_path": None,
        "text": False,
        "show_help": False,
        "show_version": False,
    }

    i = 0
    while i < len(args):
        arg = args[i]

        if arg == "--references":
            if i + 1 < len(args):
                result["references_path"] = args[i + 1]
                i += 1
            else:
                print("Error: --references requires a file", file=sys.stderr)
                sys.exit(1)
        elif arg == "--text":
            result["text"] = True
        elif arg in ("--help", "-h"):
            result["show_help"] = True
        elif arg in ("--version", "-v"):
            result["show_version"] = True
        elif arg.startswith("-") and arg != "-":
            print(f"Unknown option: {arg}", file=sys.stderr)
            print("Run 'briefmark --help' for usage.", file=sys.stderr)
            sys.exit(1)
        elif result["input_path"] is None:
            result["input_path"] = arg
        else:
            print(f"Unexpected argument: {arg}", file=sys.stderr)
            print("Run 'briefmark --help' for usage.", file=sys.stderr)
            sys.exit(1)

        i += 1

    return result


def read_input(path: str | None) -> str:
    """Read source text from a file, or stdin for None / "-"."""
    if path is None or path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def load_references(path: str) -> list:
    """Load a JSON array of reference targets."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("references file must contain a JSON array")
    return data


def main():
    """Main entry point."""
    args = parse_args(sys.argv[1:])

    if args["show_help"]:
        print_help()
        return

    if args["show_version"]:
        print(f"briefmark {__version__}")
        return

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        text = read_input(args["input_path"])
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read input: {e}", file=sys.stderr)
        sys.exit(1)

    references = None
    if args["references_path"]:
        try:
            references = load_references(args["references_path"])
        except (OSError, ValueError) as e:
            print(f"Error: cannot load references: {e}", file=sys.stderr)
            sys.exit(1)

    options = RenderOptions(channel="text" if args["text"] else "html")
    output = render(text, references=references, options=options)
    sys.stdout.write(output)
    if output and not output.endswith("\n"):
        sys.stdout.write("\n")


if __name__ == "__main__":
    main()
