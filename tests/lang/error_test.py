import io
import unittest
from contextlib import redirect_stdout

from polish.lang.error import ErrorHandler, EvaluationError, ExitStatus, InputError, LexicalError, ParseError
from polish.lang.lexical import Scanner, scan
from polish.lang.tokens import Token, TokenKind


def scanned_handler(source, path="prog.pn", interactive=False):
    handler = ErrorHandler(fatal=False, color=False)
    handler.interactive = interactive
    handler.register_source(path, scan(source)[1])
    return handler


class ErrorTestCase(unittest.TestCase):

    def test_kinds_and_statuses(self):
        cases = {
            LexicalError: ("LexicalError", ExitStatus.DATA_ERR),
            ParseError: ("ParseError", ExitStatus.DATA_ERR),
            EvaluationError: ("RuntimeError", ExitStatus.SOFTWARE),
            InputError: ("InputError", ExitStatus.NO_INPUT),
        }
        for case, (kind, status) in cases.items():
            error = case(None, "msg")
            self.assertEqual(kind, error.kind, case)
            self.assertEqual(status, error.status, case)
            self.assertEqual("msg", str(error), case)

        self.assertEqual(65, ExitStatus.DATA_ERR)
        self.assertEqual(70, ExitStatus.SOFTWARE)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_render_file_mode(self):
        scanner = Scanner("(+ 2 $)")
        scanner.scan_tokens()
        handler = scanned_handler("(+ 2 $)")

        expected = "prog.pn:1:6: LexicalError: unexpected character '$'\n" \
                   "  (+ 2 $)\n" \
                   "       ^"
        self.assertEqual(expected, handler.render(scanner.issues[0]))

    def test_render_interactive(self):
        tokens, __ = scan("(/ 4 0)")
        handler = scanned_handler("(/ 4 0)", path="<in>", interactive=True)

        expected = "RuntimeError on column 2: cannot divide by 0\n" \
                   "  (/ 4 0)\n" \
                   "   ^"
        self.assertEqual(expected, handler.render(EvaluationError(tokens[1], "cannot divide by 0")))

    def test_caret_spans_lexeme(self):
        tokens, __ = scan("(+ 1 2) 3.25")
        handler = scanned_handler("(+ 1 2) 3.25")

        rendered = handler.render(ParseError(tokens[-2], "expected end of input but got '3.25'"))
        self.assertEqual("          ^~~~", rendered.splitlines()[-1])

    def test_caret_on_later_line(self):
        source = "(+ 1\n\t2 $)"
        tokens, __ = scan(source)
        handler = scanned_handler(source)

        lines = handler.render(ParseError(tokens[-3], "expected ')' but got '$'")).splitlines()
        self.assertEqual("prog.pn:2:4: ParseError: expected ')' but got '$'", lines[0])
        self.assertEqual("  \t2 $)", lines[1])
        self.assertEqual("  \t  ^", lines[2])

    def test_render_end_of_input(self):
        tokens, __ = scan("(+ 1 2")
        handler = scanned_handler("(+ 1 2")

        lines = handler.render(ParseError(tokens[-1], "missing ')' after expression")).splitlines()
        self.assertEqual("prog.pn:1:7: ParseError: missing ')' after expression", lines[0])
        self.assertEqual("        ^", lines[2])

    def test_render_without_token(self):
        handler = ErrorHandler(fatal=False, color=False)
        self.assertEqual("InputError: 'x.pn' could not be opened",
                         handler.render(InputError(None, "'x.pn' could not be opened")))

        handler.register_source("prog.pn", None)
        self.assertEqual("prog.pn: RuntimeError: boom", handler.render(EvaluationError(None, "boom")))

        internal = EvaluationError(None, "boom", internal=True)
        self.assertEqual("[internal] prog.pn: RuntimeError: boom", handler.render(internal))

    def test_render_without_source(self):
        token = Token(TokenKind.SLASH, "/", None, 1, 2)
        handler = ErrorHandler(fatal=False, color=False)
        handler.register_source("prog.pn", None)
        self.assertEqual("prog.pn:1:2: RuntimeError: cannot divide by 0",
                         handler.render(EvaluationError(token, "cannot divide by 0")))

    def test_throw(self):
        tokens, __ = scan("(+ 1)")
        error = ParseError(tokens[-2], "'+' expects at least 2 operands but got 1")

        handler = scanned_handler("(+ 1)")
        out = io.StringIO()
        with redirect_stdout(out):
            handler.throw(error)
        self.assertIn("prog.pn:1:5: ParseError:", out.getvalue())
        self.assertEqual(ExitStatus.DATA_ERR, handler.status)
        self.assertIsNone(handler.line_index)

        handler = scanned_handler("(+ 1)")
        handler.fatal = True
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            handler.throw(error)
        self.assertEqual(65, ctx.exception.code)

    def test_context_manager(self):
        handler = ErrorHandler(fatal=False, color=False)
        out = io.StringIO()

        with redirect_stdout(out):
            with handler:
                raise EvaluationError(None, "cannot divide by 0")
        self.assertEqual(ExitStatus.SOFTWARE, handler.status)
        self.assertIn("RuntimeError: cannot divide by 0", out.getvalue())

        with redirect_stdout(out):
            with handler:
                raise KeyboardInterrupt()
        self.assertEqual(ExitStatus.INTERRUPTED, handler.status)

        with redirect_stdout(out), self.assertRaises(ValueError):
            with handler:
                raise ValueError("boom")
        self.assertIn("[internal] Error: unknown error: 'ValueError: boom'", out.getvalue())

        with self.assertRaises(SystemExit):
            with handler:
                raise SystemExit(0)

    def test_fatal_context_manager(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            with ErrorHandler(color=False):
                raise InputError(None, "'x.pn' could not be opened")
        self.assertEqual(66, ctx.exception.code)


if __name__ == '__main__':
    unittest.main()
