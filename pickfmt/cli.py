#!/usr/bin/env python3
"""
CLI tool for re-indenting Pick BASIC source files.
"""

import sys
import os
import argparse
import difflib
from pickfmt.main import FormatOptions, PickFormatter


DEFAULTS = FormatOptions()


def pickfmt(argv=None):
    parser = argparse.ArgumentParser(
        description="Re-indent a Pick BASIC program from its block structure.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pickfmt PROGRAM.BP                   # Print the formatted program
  pickfmt PROGRAM.BP OUT.BP            # Write the formatted program to OUT.BP
  pickfmt PROGRAM.BP -i                # Format in place
  pickfmt PROGRAM.BP --check           # Exit 1 if the file would change
  pickfmt PROGRAM.BP --diff            # Show the changes as a unified diff
        """,
    )

    parser.add_argument("source_file", help="Path to the Pick BASIC source file")
    parser.add_argument(
        "output_file",
        nargs="?",
        help="Optional path to write the formatted program to (default: stdout)",
    )
    parser.add_argument(
        "-i",
        "--in-place",
        action="store_true",
        help="Rewrite the source file",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Do not write anything; exit 1 if the file is not formatted",
    )
    parser.add_argument(
        "--diff",
        action="store_true",
        help="Print a unified diff instead of the formatted program",
    )
    parser.add_argument(
        "--margin",
        type=int,
        default=DEFAULTS.margin,
        help="Width of the left margin (default: %(default)s)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=DEFAULTS.indent,
        help="Spaces per nesting level (default: %(default)s)",
    )
    parser.add_argument(
        "--ignore-case",
        action="store_true",
        help="Match keywords regardless of case",
    )
    parser.add_argument(
        "--return-closes",
        action="store_true",
        help="Treat RETURN as the end of a block",
    )
    parser.add_argument(
        "--no-label-margin",
        action="store_true",
        help="Leave labelled lines unindented instead of placing the label in the margin",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Encoding of the source file (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which lines were re-indented",
    )

    args = parser.parse_args(argv)

    if args.margin < 0 or args.indent < 0:
        parser.error("--margin and --indent must not be negative")

    source_file = args.source_file

    if not os.path.exists(source_file):
        print(f"Error: File '{source_file}' not found")
        sys.exit(1)

    options = FormatOptions(
        margin=args.margin,
        indent=args.indent,
        ignore_case=args.ignore_case,
        return_closes_block=args.return_closes,
        labels_in_margin=not args.no_label_margin,
    )

    try:
        with open(source_file, "r", encoding=args.encoding, newline="") as f:
            content = f.read()

        result = PickFormatter(options).format_edits(content)
        if not result.ok:
            print(f"Error: {result.error}")
            sys.exit(1)

        if args.verbose:
            print(
                f"Info: {len(result.edits)} line(s) re-indented in {source_file}",
                file=sys.stderr,
            )
            for edit in result.edits[:10]:  # Show first 10
                print(f"  {edit.line + 1}: {edit.new_text.strip()}", file=sys.stderr)
            if len(result.edits) > 10:
                print(f"  ... and {len(result.edits) - 10} more", file=sys.stderr)

        if args.check:
            if result.text != content:
                print(f"Would reformat {source_file}")
                sys.exit(1)
            return

        if args.diff:
            diff = difflib.unified_diff(
                content.splitlines(keepends=True),
                result.text.splitlines(keepends=True),
                fromfile=source_file,
                tofile=source_file,
            )
            sys.stdout.writelines(diff)
            return

        if args.in_place or args.output_file:
            output_file = args.output_file or source_file
            with open(output_file, "w", encoding=args.encoding, newline="") as f:
                f.write(result.text)
            if args.verbose:
                print(f"Saved formatted program to {output_file}", file=sys.stderr)
            return

        sys.stdout.write(result.text)

    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    pickfmt()
