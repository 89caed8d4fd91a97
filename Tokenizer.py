#! /bin/env python3

from typing import List, Tuple
from Errors import InvalidCharacter, UnbalancedParentheses, MissingOperator


class ExprReader:
    EOF = 255

    def __init__(self, expression: str):
        self.expression = expression
        self.idx = 0

    def end(self) -> bool:
        return self.idx >= len(self.expression)

    def getNext(self) -> str:
        if self.end():
            return self.EOF
        sym = self.expression[self.idx]
        self.idx += 1
        return sym


class Token:
    ERROR = 0
    TIMES = 1  # *
    DIV = 2  # /
    PLUS = 11  # +
    MINUS = 12  # -
    CLOSEPAREN = 35  # )
    OPENPAREN = 50  # (
    NUMBER = 60  # number

    OPERATORS = [TIMES, DIV, PLUS, MINUS]

    TokenName = {
        ERROR: "ERROR",
        TIMES: "TIMES",
        DIV: "DIV",
        PLUS: "PLUS",
        MINUS: "MINUS",
        CLOSEPAREN: "CLOSEPAREN",
        OPENPAREN: "OPENPAREN",
        NUMBER: "NUMBER",
    }

    SYMBOLS = {
        "*": TIMES,
        "/": DIV,
        "+": PLUS,
        "-": MINUS,
        ")": CLOSEPAREN,
        "(": OPENPAREN,
    }

    # Parentheses are sentinels: the lowest precedence stops the reduction
    # loop at an open parenthesis
    PRECEDENCE = {
        TIMES: 2,
        DIV: 2,
        PLUS: 1,
        MINUS: 1,
        CLOSEPAREN: 0,
        OPENPAREN: 0,
    }

    type: int
    sym: str
    idx: int

    def __init__(self, type: int, sym: str, idx: int):
        self.type = type
        self.sym = sym
        self.idx = idx

    def __str__(self) -> str:
        return f'"{self.sym}" ({self.TokenName[self.type]}) at {self.idx}'

    def __repr__(self) -> str:
        return self.__str__()

    def __eq__(self, __o: object) -> bool:
        if not isinstance(__o, Token):
            return False
        return (self.type, self.sym, self.idx) == (__o.type, __o.sym, __o.idx)

    def __hash__(self) -> int:
        return hash((self.type, self.sym, self.idx))

    @property
    def precedence(self) -> int:
        return self.PRECEDENCE[self.type]

    def is_operator(self) -> bool:
        return self.type in self.OPERATORS


class Number(Token):
    value: int

    def __init__(self, value: int, sym: str, idx: int):
        super().__init__(Token.NUMBER, sym, idx)
        self.value = value


class Tokenizer:
    # Input runs through these checks in order; the first failing one raises
    # and no tokens are produced.
    expression: str
    tokens: Tuple[Token, ...]

    def __init__(self, expression: str):
        self.expression = expression

        self.remove_white_space()
        self.check_valid_chars()
        self.check_parentheses()
        self.check_near_parens()

        # States
        self.reader = ExprReader(self.expression)
        self.inputSym = None

        self.tokens = self.create_tokens()

    def remove_white_space(self) -> None:
        self.expression = "".join(
            c for c in self.expression if not c.isspace())

    @staticmethod
    def _is_digit(c: str) -> bool:
        return ord(c) >= ord("0") and ord(c) <= ord("9")

    def check_valid_chars(self) -> None:
        for i, c in enumerate(self.expression):
            if not self._is_digit(c) and c not in Token.SYMBOLS:
                raise InvalidCharacter(c, self.expression, i)

    def check_parentheses(self) -> None:
        opened: List[int] = []
        for i, c in enumerate(self.expression):
            if c == "(":
                opened.append(i)
            elif c == ")":
                if not opened:
                    # A ")" with nothing left to close
                    raise UnbalancedParentheses(self.expression, i)
                opened.pop()

        if opened:
            raise UnbalancedParentheses(self.expression, opened[0])

    def check_near_parens(self) -> None:
        # Implicit multiplication such as (3+2)4 or 3(4+2) is not supported
        expr = self.expression
        for i, c in enumerate(expr):
            if c == ")" and i + 1 < len(expr) and self._is_digit(expr[i + 1]):
                raise MissingOperator("Missing operator between right "
                                      "parenthesis and number.", expr, i)
            elif c == "(" and i > 0 and self._is_digit(expr[i - 1]):
                raise MissingOperator("Missing operator between left "
                                      "parenthesis and number.", expr, i)

    def next(self) -> None:
        self.inputSym = self.reader.getNext()

    def is_digit(self) -> bool:
        assert self.inputSym != None
        return self.inputSym != ExprReader.EOF and self._is_digit(self.inputSym)

    def number(self) -> Number:
        idx = self.reader.idx - 1
        result = 0
        sym = ""

        # Parse the whole run of digits
        while self.is_digit():
            result = result * 10 + int(self.inputSym)
            sym += self.inputSym
            self.next()

        return Number(result, sym, idx)

    def operator(self) -> Token:
        token = Token(Token.SYMBOLS[self.inputSym], self.inputSym,
                      self.reader.idx - 1)
        self.next()
        return token

    def getNext(self) -> Token:
        if self.is_digit():
            return self.number()
        else:
            return self.operator()

    def create_tokens(self) -> Tuple[Token, ...]:
        tokens = []
        self.next()  # Read the first char
        while self.inputSym != ExprReader.EOF:
            tokens.append(self.getNext())
        return tuple(tokens)


def tokenize(expression: str) -> Tuple[Token, ...]:
    return Tokenizer(expression).tokens
