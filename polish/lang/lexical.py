"""Lexical analysis for the polish language. Converts source text into a sequence of Tokens, plus an index of where
each physical line begins and ends (used only to quote source lines in diagnostics).

Lexical grammar:

```
<token>   ::= "(" | ")" | "+" | "-" | "*" | "/"
            | <number>
<number>  ::= [0-9]+ ("." [0-9]+)?      ; "1." is the number 1 followed by an unrecognized "."

<comment> ::= "//" <char>* "\n"         ; newline is not part of the comment
            | "/*" <char>* "*/"         ; may span lines, does not nest
```

Whitespace (space, tab, carriage return, newline) separates tokens and is never tokenized. Any other character is
emitted as an UNRECOGNIZED token and recorded as a LexicalError in Scanner.issues: scanning itself never fails.
"""

from polish.lang.error import LexicalError
from polish.lang.tokens import Token, TokenKind


class SourceLineIndex:
    """(begin, end) offsets of each physical line of a source string. end excludes the newline."""

    def __init__(self, source):
        self.source = source
        self.spans = []

    def add(self, begin, end):
        self.spans.append((begin, end))

    def get_line(self, line_num):
        """Returns text of 1-indexed line line_num. Raises IndexError if there is no such line."""
        if not 1 <= line_num <= len(self.spans):
            raise IndexError(f"line {line_num} out of range")
        begin, end = self.spans[line_num - 1]
        return self.source[begin:end]

    def __len__(self):
        return len(self.spans)

    def __eq__(self, other):
        return isinstance(other, SourceLineIndex) and (self.source, self.spans) == (other.source, other.spans)

    def __repr__(self):
        return f"SourceLineIndex({self.spans})"


class Scanner:
    """Single left-to-right pass over source with up to two characters of lookahead."""
    SINGLE = {
        "(": TokenKind.LPAREN,
        ")": TokenKind.RPAREN,
        "+": TokenKind.PLUS,
        "-": TokenKind.MINUS,
        "*": TokenKind.STAR,
    }
    WHITESPACE = " \t\r\n"

    def __init__(self, source):
        self.source = source
        self.tokens = []
        self.issues = []
        self.line_index = SourceLineIndex(source)

        self._start = 0  # offset of first char of the token being scanned
        self._current = 0
        self._line = 1
        self._column = 1
        self._line_start = 0
        self._start_line = 1
        self._start_column = 1

    def scan_tokens(self):
        """Scans self.source and returns the token list, always terminated by exactly one END_OF_INPUT token. Should
        only be called once per Scanner.
        """
        while not self._at_end():
            self._start = self._current
            self._start_line, self._start_column = self._line, self._column
            self._scan_token()

        self.line_index.add(self._line_start, len(self.source))
        self.tokens.append(Token(TokenKind.END_OF_INPUT, "", None, self._line, self._column))
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in Scanner.SINGLE:
            self._add_token(Scanner.SINGLE[char])

        elif char == "/":
            if self._match("/"):
                while self._peek() != "\n" and not self._at_end():
                    self._advance()
            elif self._match("*"):
                self._block_comment()
            else:
                self._add_token(TokenKind.SLASH)

        elif char in Scanner.WHITESPACE:
            pass

        elif self._is_digit(char):
            self._number()

        else:
            self._add_token(TokenKind.UNRECOGNIZED)
            self.issues.append(LexicalError(self.tokens[-1], f"unexpected character '{char}'"))

    def _block_comment(self):
        while not self._at_end():
            if self._peek() == "*" and self._peek_next() == "/":
                self._advance()
                self._advance()
                return
            self._advance()

        opener = Token(TokenKind.UNRECOGNIZED, "/*", None, self._start_line, self._start_column)
        self.issues.append(LexicalError(opener, "unterminated block comment"))

    def _number(self):
        while self._is_digit(self._peek()):
            self._advance()

        if self._peek() == "." and self._is_digit(self._peek_next()):
            self._advance()
            while self._is_digit(self._peek()):
                self._advance()

        self._add_token(TokenKind.NUMBER, float(self.source[self._start:self._current]))

    def _add_token(self, kind, literal=None):
        lexeme = self.source[self._start:self._current]
        self.tokens.append(Token(kind, lexeme, literal, self._start_line, self._start_column))

    def _advance(self):
        char = self.source[self._current]
        self._current += 1

        if char == "\n":
            self.line_index.add(self._line_start, self._current - 1)
            self._line_start = self._current
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def _match(self, expected):
        if self._peek() != expected:
            return False
        self._advance()
        return True

    def _peek(self):
        return self.source[self._current] if not self._at_end() else ""

    def _peek_next(self):
        return self.source[self._current + 1] if self._current + 1 < len(self.source) else ""

    def _at_end(self):
        return self._current >= len(self.source)

    @staticmethod
    def _is_digit(char):
        return char != "" and char in "0123456789"


def scan(source):
    """Returns (tokens, line_index) for source. Never raises: lexical issues surface as UNRECOGNIZED tokens (use a
    Scanner directly to get at the issues themselves).
    """
    scanner = Scanner(source)
    return scanner.scan_tokens(), scanner.line_index
