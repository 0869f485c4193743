"""Runs the polish interpreter over a file, or in command-line mode if no file is given. Also uses error handling
context manager. Called from the polish console script.

Exit statuses: 0 on success, 64 on bad usage, 65 on lexical/parse errors, 66 if the file cannot be read and 70 on
runtime errors.
"""

import argparse
import sys

from polish.lang.error import ErrorHandler, ExitStatus
from polish.lang.session import Session
from polish.lang.shell import Shell


class ArgumentParser(argparse.ArgumentParser):
    """argparse, but exiting with ExitStatus.USAGE instead of 2 on bad usage."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitStatus.USAGE, f"{self.prog}: error: {message}\n")


def build_parser():
    parser = ArgumentParser(prog="polish")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the parsed expression before its value")
    parser.add_argument("--no-color", action="store_true", help="do not colour diagnostics")
    return parser


def main(argv=None):
    """Runs polish interpreter. Returns the exit status (fatal errors exit directly)."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        error_handler.color = not args.no_color

        if args.file is not None:
            return Session(error_handler, args.file, cmd_line=False, show_ast=args.ast).run_file().status

        Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_ast=args.ast)).cmdloop()

    if error_handler.status == ExitStatus.INTERRUPTED:
        return ExitStatus.INTERRUPTED
    return ExitStatus.OK


if __name__ == "__main__":
    sys.exit(main())
