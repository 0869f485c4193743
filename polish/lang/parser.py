"""Recursive-descent parser for the polish language. One method per nonterminal of the grammar in grammar/expr.py,
strictly LL(1): each nonterminal is chosen by looking at the current token only, and nothing is ever backtracked.

The first grammar violation raises a ParseError and abandons the parse; there is no error recovery.
"""

from polish.grammar.expr import NumberLiteral, Operation, OperatorKind, UnarySign
from polish.lang.error import ParseError
from polish.lang.tokens import TokenKind


class Parser:
    """Consumes a token list produced by the scanner. The list must end with an END_OF_INPUT token."""
    SIGNS = (TokenKind.PLUS, TokenKind.MINUS)
    FIRST = (TokenKind.NUMBER, TokenKind.LPAREN) + SIGNS  # tokens that can start an expression

    def __init__(self, tokens):
        assert tokens and tokens[-1].kind is TokenKind.END_OF_INPUT, "token list must end with END_OF_INPUT"
        self.tokens = tokens
        self.position = 0  # index of the next token to be consumed

    def parse(self):
        """Parses the whole token list into one Expression."""
        return self.program()

    def program(self):
        """program -> expression END_OF_INPUT"""
        expr = self.expression()
        self.consume(TokenKind.END_OF_INPUT, f"expected end of input but got '{self.peek()}'")
        return expr

    def expression(self):
        """expression -> NUMBER | sign | operation"""
        token = self.peek()

        if token.kind is TokenKind.NUMBER:
            return self.number()
        elif token.kind in Parser.SIGNS:
            return self.sign()
        elif token.kind is TokenKind.LPAREN:
            return self.operation()

        if token.kind is TokenKind.END_OF_INPUT:
            raise ParseError(token, "expected an expression but reached end of input")
        raise ParseError(token, f"expected an expression but got '{token}'")

    def number(self):
        token = self.consume(TokenKind.NUMBER, f"expected a number but got '{self.peek()}'")
        return NumberLiteral(token.literal, token)

    def sign(self):
        """sign -> ("+" | "-") (NUMBER | operation)"""
        sign = self.advance()

        if self.check(TokenKind.NUMBER):
            operand = self.number()
        elif self.check(TokenKind.LPAREN):
            operand = self.operation()
        else:
            raise ParseError(self.peek(), f"expected a number or '(' after '{sign}' but got '{self.peek()}'")

        return UnarySign(sign.lexeme, operand, sign)

    def operation(self):
        """operation -> "(" operator expression expression+ ")" """
        self.consume(TokenKind.LPAREN, f"expected '(' but got '{self.peek()}'")

        token = self.peek()
        kind = OperatorKind.from_token(token)
        if kind is None:
            raise ParseError(token, f"expected an operator '+', '-', '*' or '/' but got '{token}'")
        self.advance()

        operands = [self.expression()]
        if self.check(TokenKind.RPAREN):
            raise ParseError(self.peek(), f"'{token}' expects at least 2 operands but got 1")

        operands.append(self.expression())
        while self.check(*Parser.FIRST):
            operands.append(self.expression())

        if self.peek().lexeme == "":
            msg = "missing ')' after expression"
        else:
            msg = f"expected ')' but got '{self.peek()}'"
        self.consume(TokenKind.RPAREN, msg)

        return Operation(kind, operands, token)

    def consume(self, kind, msg):
        """Consumes and returns the next token if it is of kind, else raises ParseError with msg."""
        if self.check(kind):
            return self.advance()
        raise ParseError(self.peek(), msg)

    def check(self, *kinds):
        """Whether the next token is of one of kinds."""
        return self.peek().kind in kinds

    def advance(self):
        token = self.peek()
        if token.kind is not TokenKind.END_OF_INPUT:
            self.position += 1
        return token

    def peek(self):
        return self.tokens[self.position]


def parse(tokens):
    """Returns the Expression tree for tokens. Raises ParseError on the first grammar violation."""
    return Parser(tokens).parse()
