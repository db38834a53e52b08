#!/usr/bin/env python3
"""
noxc - command line front end for the nox scanner and reducer.

Usage:
    noxc FILE              # Print every line reduced to expressions
    noxc FILE --tokens     # Print the whole file's token stream
    noxc FILE --debug      # Log each token and error to stderr

Author: nox maintainers
"""

import argparse
import sys

from .config import NoxConfiguration
from .debug import configure_debug_logging
from .extract import extract_lines
from .lexer.errors import LexerError
from .lexer.lexer import Lexer
from .lines import LineFailure
from .render import render_line, render_tokens


def run_lines(source: str, config: NoxConfiguration, out) -> int:
    """Print each line's expressions; failing lines print an ERROR line."""
    failures = 0
    for _, result in extract_lines(source, config.filename):
        if isinstance(result, LineFailure):
            failures += 1
            out.write(f"ERROR: {result}\n")
            continue
        render_line(result, out)
        out.write("\n")
    return failures


def run_tokens(source: str, config: NoxConfiguration, out) -> bool:
    """Print the rendered token stream, or the scan error."""
    try:
        tokens = Lexer(source, config=config).tokenize()
    except LexerError as e:
        out.write(f"ERROR: {e}\n")
        return False

    render_tokens(tokens, out, config.indent_unit)
    if tokens:
        out.write("\n")
    return True


def main(argv=None):
    """Main entry point for noxc"""

    parser = argparse.ArgumentParser(
        prog="noxc",
        description="Scan and reduce a nox source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  noxc page.nox              # Expressions, line by line
  noxc page.nox --tokens     # Token stream with block structure
  NOX_DEBUG=1 noxc page.nox  # Same as --debug
        """
    )

    parser.add_argument('file', help='nox source file to read')
    parser.add_argument('--tokens', action='store_true',
                        help='Print the token stream instead of expressions')
    parser.add_argument('--debug', action='store_true',
                        help='Log every token push and raised error to stderr')

    args = parser.parse_args(argv)

    config = NoxConfiguration.from_env(filename=args.file)
    if args.debug:
        config.debug_mode = True
    if config.debug_mode:
        configure_debug_logging()

    try:
        with open(args.file, 'r', encoding='utf-8') as f:
            source = f.read()
    except OSError as e:
        print(f"noxc: cannot read {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.tokens:
        run_tokens(source, config, sys.stdout)
    else:
        run_lines(source, config, sys.stdout)

    sys.exit(0)


if __name__ == "__main__":
    main()
