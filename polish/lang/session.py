"""Session control for the polish language. Runs the scan -> parse -> evaluate pipeline once per input, either over a
whole file or over each line (or group of continued lines) typed at the interactive shell.
"""

from dataclasses import dataclass
from typing import Optional

from polish.grammar.expr import Expression
from polish.lang.error import ExitStatus, InputError, LangError
from polish.lang.evaluator import Evaluator, stringify
from polish.lang.lexical import Scanner
from polish.lang.parser import parse
from polish.lang.printer import print_ast
from polish.lang.tokens import TokenKind


@dataclass
class RunResult:
    """Outcome of running one input. value, text and tree are only set if status is ExitStatus.OK."""
    status: ExitStatus
    value: Optional[float] = None
    text: Optional[str] = None
    tree: Optional[Expression] = None

    @property
    def ok(self):
        return self.status == ExitStatus.OK


class Session:
    """Governs a polish session: where its input comes from and how its errors are reported."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, show_ast=False):
        self.error_handler = error_handler
        self.error_handler.register_source(path, None)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_ast = show_ast  # whether or not to print each tree before its value
        self.evaluator = Evaluator()

        if self.cmd_line:
            self.error_handler.fatal = False
            self.error_handler.interactive = True

        elif path == Session.SH_FILE:
            raise InputError(None, f"'{Session.SH_FILE}' is a reserved filename")

    @staticmethod
    def preprocess_line(source):
        """Returns (blank, add_to_prev) for source typed at the shell. blank is whether source holds nothing but
        whitespace and comments; add_to_prev is whether it needs a line continuation, i.e. it has more '(' than ')' or
        ends inside a block comment.
        """
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()

        depth = 0
        for token in tokens:
            if token.kind is TokenKind.LPAREN:
                depth += 1
            elif token.kind is TokenKind.RPAREN:
                depth -= 1

        in_comment = any(issue.token.lexeme == "/*" for issue in scanner.issues)
        return len(tokens) == 1 and not scanner.issues, depth > 0 or in_comment

    def run(self, source):
        """Runs source as one program and prints its value. Errors are reported through the error handler (which
        exits if fatal); either way, returns a RunResult.
        """
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()
        self.error_handler.register_source(self.path, scanner.line_index)

        try:
            if scanner.issues:
                # every issue is shown; the last one aborts the run
                *shown, last = scanner.issues
                for issue in shown:
                    self.error_handler.report(issue)
                raise last

            tree = parse(tokens)
            value = self.evaluator.evaluate(tree)

        except LangError as error:
            self.error_handler.throw(error)
            return RunResult(error.status)

        self.error_handler.remove_source()

        if self.show_ast:
            print(print_ast(tree))
        text = stringify(value)
        print(text)

        return RunResult(ExitStatus.OK, value, text, tree)

    def run_file(self):
        """Reads self.path and runs its contents as one program."""
        try:
            with open(self.path, "r") as file:
                source = file.read()
        except OSError:
            raise InputError(None, f"'{self.path}' could not be opened")

        return self.run(source)
