from typing import Callable, List, Sequence, Union
from functools import wraps
import sys
from Tokenizer import Tokenizer, Token, Number
from Errors import (EvaluationError, MalformedExpression, UnknownOperator,
                    DivisionByZero, ResultOverflow)

Value = Union[int, float]


class CalcDebug:
    class Node:
        # A value that lived on the operand stack. Leaves are numbers,
        # inner nodes are applied operators.
        def __init__(self, id: int, label: str, value: Value,
                     children: List[int]):
            self.id = id
            self.label = label
            self.value = value
            self.children = children

        def is_leaf(self) -> bool:
            return not self.children

    def __init__(self, file: str = None, out=None,
                 dump_on_error: bool = True):
        self.trace = []
        self.depth = 0
        self.nodes = []
        # Node ids, kept in step with the calculator's operand stack
        self.stack = []
        self.file = file
        self.out = out
        self.dump_on_error = dump_on_error

    def add(self, item: str) -> None:
        self.trace.append(f"{'| ' * self.depth}{item}")

    def _node(self, label: str, value: Value, children: List[int]) -> Node:
        node = self.Node(len(self.nodes), label, value, children)
        self.nodes.append(node)
        self.stack.append(node.id)
        return node

    def number(self, token: Number) -> None:
        self._node(token.sym, token.value, [])
        self.add(f"push {token.value}")

    def operator(self, token: Token) -> None:
        self.add(f"push {token.sym}")

    def open(self) -> None:
        self.add("(")
        self.depth += 1

    def close(self) -> None:
        self.depth -= 1
        self.add(")")

    def apply(self, op: Token, a: Value, b: Value, result: Value) -> None:
        right = self.stack.pop()
        left = self.stack.pop()
        self._node(op.sym, result, [left, right])
        self.add(f"{a} {op.sym} {b} = {result}")

    def root(self) -> Node:
        if len(self.stack) != 1:
            return None
        return self.nodes[self.stack[-1]]

    def toStr(self) -> str:
        return "".join(f"{line}\n" for line in self.trace)

    def dump(self) -> None:
        if self.file:
            with open(self.file, "w+") as f:
                f.write(self.toStr())
        else:
            print(self.toStr(), end="",
                  file=self.out if self.out else sys.stdout)


class Calculator:
    expression: str
    debug: CalcDebug

    def __init__(self, expression: str = None, debug: CalcDebug = None):
        # Only used to locate errors
        self.expression = expression
        self.debug = debug

    def _traced(func: Callable):
        @wraps(func)
        def wrapTrace(self, *args, **kargs):
            try:
                ret = func(self, *args, **kargs)

            except EvaluationError as e:
                # Leave the partial trace behind for inspection
                if self.debug and self.debug.dump_on_error:
                    self.debug.add(f"error: {e}")
                    self.debug.dump()
                raise e

            return ret

        return wrapTrace

    def apply_operation(self, a: Value, b: Value, op: Token) -> Value:
        # a is the left operand, b the right one
        try:
            if op.type == Token.PLUS:
                return a + b
            elif op.type == Token.MINUS:
                return a - b
            elif op.type == Token.TIMES:
                return a * b
            elif op.type == Token.DIV:
                if b == 0:
                    raise DivisionByZero(self.expression, op.idx)
                return a / b
        except OverflowError:
            # Mixing a float with an integer too large to convert
            raise ResultOverflow(self.expression, op.idx)

        raise UnknownOperator(op.sym, self.expression, op.idx)

    def _pop_operand(self, values: List[Value], op: Token) -> Value:
        if not values:
            raise MalformedExpression(self.expression, op.idx)
        return values.pop()

    def _reduce(self, values: List[Value], operators: List[Token]) -> None:
        op = operators[-1]
        b = self._pop_operand(values, op)  # r-value first
        a = self._pop_operand(values, op)
        operators.pop()

        result = self.apply_operation(a, b, op)
        values.append(result)
        if self.debug:
            self.debug.apply(op, a, b, result)

    @_traced
    def calculate(self, tokens: Sequence[Token]) -> Value:
        values = []  # operand stack
        operators = []  # operators and open parentheses

        for token in tokens:
            if token.type == Token.OPENPAREN:
                operators.append(token)
                if self.debug:
                    self.debug.open()

            elif token.type == Token.NUMBER:
                values.append(token.value)
                if self.debug:
                    self.debug.number(token)

            elif token.type == Token.CLOSEPAREN:
                # Evaluate everything enclosed by this ) and its matching (
                while operators and operators[-1].type != Token.OPENPAREN:
                    self._reduce(values, operators)
                if not operators:
                    raise MalformedExpression(self.expression, token.idx)
                operators.pop()
                if self.debug:
                    self.debug.close()

            else:
                if not token.is_operator():
                    raise UnknownOperator(token.sym, self.expression,
                                          token.idx)
                # Apply pending operators that bind at least as tightly
                while operators and \
                        operators[-1].precedence >= token.precedence:
                    self._reduce(values, operators)
                operators.append(token)
                if self.debug:
                    self.debug.operator(token)

        while operators:
            self._reduce(values, operators)

        if len(values) != 1:
            raise MalformedExpression(self.expression)
        if self.debug:
            self.debug.add(f"result {values[0]}")
        return values[0]


def evaluate(expression: str, debug: CalcDebug = None) -> Value:
    tokenizer = Tokenizer(expression)
    calculator = Calculator(tokenizer.expression, debug=debug)
    return calculator.calculate(tokenizer.tokens)
