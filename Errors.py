from typing import Optional


class EvaluationError(Exception):
    msg: str
    expression: Optional[str]
    idx: Optional[int]

    def __init__(self, msg: str, expression: str = None, idx: int = None):
        super().__init__(msg)
        self.msg = msg
        self.expression = expression
        self.idx = idx

    def __str__(self) -> str:
        return self.msg

    def source_loc(self) -> str:
        if self.expression is None or self.idx is None:
            return self.msg
        assert 0 <= self.idx < len(self.expression)

        return f"{self.expression}\n{' ' * self.idx}^\n{self.msg}"


# Raised by the tokenizer
class InvalidCharacter(EvaluationError):
    char: str

    def __init__(self, char: str, expression: str, idx: int):
        super().__init__(f"character {char} at index {idx} is not allowed.",
                         expression, idx)
        self.char = char


class UnbalancedParentheses(EvaluationError):
    def __init__(self, expression: str = None, idx: int = None):
        super().__init__("Parentheses are not balanced.", expression, idx)


class MissingOperator(EvaluationError):
    def __init__(self, msg: str, expression: str, idx: int):
        super().__init__(msg, expression, idx)


# Raised by the calculator
class MalformedExpression(EvaluationError):
    def __init__(self, expression: str = None, idx: int = None):
        super().__init__("Expression not formed correctly.", expression, idx)


class UnknownOperator(EvaluationError):
    def __init__(self, op: str, expression: str = None, idx: int = None):
        super().__init__(f"Operator {op} is not an allowed binary operation.",
                         expression, idx)


class DivisionByZero(EvaluationError):
    def __init__(self, expression: str = None, idx: int = None):
        super().__init__("Division by zero.", expression, idx)


class ResultOverflow(EvaluationError):
    def __init__(self, expression: str = None, idx: int = None):
        super().__init__("Division result too large.", expression, idx)
