"""Error handling for the polish interpreter. Only LangErrors should be encountered during a run: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every LangError carries the token it originated from, so ErrorHandler can point at the offending column of the
offending source line. Exit statuses follow sysexits.h.
"""

import sys
from enum import IntEnum

from termcolor import colored


class ExitStatus(IntEnum):
    """Process exit codes."""
    OK = 0
    USAGE = 64
    DATA_ERR = 65
    NO_INPUT = 66
    SOFTWARE = 70
    INTERRUPTED = 130


class LangError(Exception):
    """Base class for every diagnostic the interpreter can report. token may be None for errors that do not originate
    from the source text (unreadable files, internal errors).
    """
    kind = "Error"
    status = ExitStatus.SOFTWARE

    def __init__(self, token, message, internal=False):
        super().__init__(message)
        self.token = token
        self.message = message
        self.internal = internal

    @property
    def line(self):
        return self.token.line if self.token is not None else None

    @property
    def column(self):
        return self.token.column if self.token is not None else None

    def __repr__(self):
        return f"{type(self).__name__}({self.token!r}, {self.message!r})"


class LexicalError(LangError):
    """Unrecognized character or unterminated block comment."""
    kind = "LexicalError"
    status = ExitStatus.DATA_ERR


class ParseError(LangError):
    """Grammar violation. Aborts the parse: no partial tree is ever returned."""
    kind = "ParseError"
    status = ExitStatus.DATA_ERR


class EvaluationError(LangError):
    """Failure while walking a well-formed tree, e.g. division by zero."""
    kind = "RuntimeError"
    status = ExitStatus.SOFTWARE


class InputError(LangError):
    """Source could not be read."""
    kind = "InputError"
    status = ExitStatus.NO_INPUT


class ErrorHandler:
    """Context manager that renders LangErrors as diagnostics and suppresses them (or exits, if fatal)."""
    ERROR = "red"

    def __init__(self, fatal=True, color=True):
        self.fatal = fatal
        self.color = color
        self.interactive = False
        self.status = ExitStatus.OK

        self.path = None
        self.line_index = None

    def register_source(self, path, line_index):
        """Registers the source that subsequent errors refer to. Should be called after scanning each input."""
        self.path = path
        self.line_index = line_index

    def remove_source(self):
        """Forgets the registered source. Should be called after a run finishes."""
        self.line_index = None

    def _style(self, text, color=None, attrs=None):
        if not self.color:
            return text
        return colored(text, color, attrs=attrs)

    def diagnose(self, error):
        """Returns the offending source line with the lexeme highlighted, and a caret line pointing at it. Returns an
        empty string if the line is not available.
        """
        if error.token is None or self.line_index is None or not 1 <= error.line <= len(self.line_index):
            return ""

        text = self.line_index.get_line(error.line)
        start = error.column - 1
        end = start + max(len(error.token.lexeme), 1)

        diagnosis = "  " + text[:start]
        diagnosis += self._style(text[start:end], ErrorHandler.ERROR, ["bold"])
        diagnosis += text[end:] + "\n"

        pad = "".join(char if char == "\t" else " " for char in text[:start])
        diagnosis += "  " + pad + self._style("^" + "~" * (end - start - 1), ErrorHandler.ERROR, ["bold"])

        return diagnosis

    def render(self, error):
        """Returns the full diagnostic for error: a header line, followed by the diagnosis if there is one.

        Header formats:
            interactive: <kind> on column <col>: <message>
            file:        <path>:<line>:<col>: <kind>: <message>
        """
        if error.internal:
            header = self._style("[internal] ", ErrorHandler.ERROR, ["bold"])
        else:
            header = ""

        if error.token is None:
            location = f"{self.path}: " if self.path and not self.interactive else ""
            header += self._style(location, attrs=["bold"]) if location else ""
            header += self._style(error.kind, ErrorHandler.ERROR, ["bold"]) + f": {error.message}"
        elif self.interactive:
            header += self._style(error.kind, ErrorHandler.ERROR, ["bold"])
            header += f" on column {error.column}: {error.message}"
        else:
            header += self._style(f"{self.path}:{error.line}:{error.column}: ", attrs=["bold"])
            header += self._style(f"{error.kind}: ", ErrorHandler.ERROR, ["bold"]) + error.message

        diagnosis = self.diagnose(error)
        return header + "\n" + diagnosis if diagnosis else header

    def report(self, error):
        """Prints error's diagnostic and records its exit status."""
        print(self.render(error))
        self.status = error.status

    def throw(self, error):
        """Reports error, then exits with error.status if this handler is fatal."""
        self.report(error)

        if self.fatal:
            sys.exit(error.status)
        self.remove_source()  # if error occurred, reset source (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            interrupt = LangError(None, "keyboard interrupt")
            interrupt.status = ExitStatus.INTERRUPTED
            self.throw(interrupt)
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(EvaluationError(None, "expression nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, LangError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LangError(None, f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
