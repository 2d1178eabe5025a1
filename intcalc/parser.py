import operator
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from intcalc.tokenizer import CloseParen, Identifier, Lexer, Number, OpenParen, Operator, Punctuation, Token
from intcalc.utils import CalcError, Sign


class ParserError(CalcError):
    kind = "Parser error"


ADDITIVE_OPERATIONS: dict[Sign, Callable[[int, int], int]] = {
    Sign.PLUS: operator.add,
    Sign.MINUS: operator.sub,
}

ADDITIVE = (Sign.PLUS, Sign.MINUS)
MULTIPLICATIVE = (Sign.STAR,)


@dataclass
class _Group:
    """Partial sum and product of an expression, parenthesized or not"""

    total: int = 0
    add_sign: Sign = Sign.PLUS
    product: int = 1
    # sign in front of the group's opening parenthesis, kept while the group is open
    negate: bool = False

    def fold(self, next_sign: Sign) -> None:
        self.total = self.result()
        self.add_sign = next_sign
        self.product = 1

    def result(self) -> int:
        return ADDITIVE_OPERATIONS[self.add_sign](self.total, self.product)


class Parser:
    """Evaluates assignments straight off the lexer, without building a tree"""

    def __init__(self, lexer: Lexer, variables: Mapping[str, int]) -> None:
        self.lexer = lexer
        self.variables = variables

    def consume_assignment(self) -> tuple[str, int]:
        target = self.lexer.next_token()
        if not isinstance(target, Identifier):
            raise self._error("expected variable", target)

        assign = self.lexer.next_token()
        if not (isinstance(assign, Operator) and assign.symbol is Sign.EQUAL):
            raise self._error("expected assignment", assign)

        value = self._consume_expression()

        end = self.lexer.next_token()
        if not (isinstance(end, Punctuation) and end.symbol == ";"):
            raise self._error("expected semicolon", end)

        return target.name, value

    def _error(self, errmsg: str, token: Optional[Token]) -> ParserError:
        line = token.line if token is not None else self.lexer.line
        return ParserError(errmsg, line=line, code=self.lexer.code)

    def _peek_operator(self, allowed: tuple[Sign, ...]) -> Optional[Sign]:
        token = self.lexer.peek_token()
        if isinstance(token, Operator) and token.symbol in allowed:
            return token.symbol
        return None

    def _consume_expression(self) -> int:
        # groups whose closing parenthesis is still pending, innermost last
        open_groups: list[_Group] = []
        group = _Group()
        while True:
            negate = self._consume_signs()
            token = self.lexer.next_token()
            if isinstance(token, OpenParen):
                group.negate = negate
                open_groups.append(group)
                group = _Group()
                continue

            value = self._consume_operand(token)
            if negate:
                value = -value
            while True:
                group.product *= value
                sign = self._peek_operator(ADDITIVE + MULTIPLICATIVE)
                if sign is not None:
                    self.lexer.next_token()
                    if sign in ADDITIVE:
                        group.fold(sign)
                    break

                result = group.result()
                if not open_groups:
                    return result
                closing = self.lexer.next_token()
                if not isinstance(closing, CloseParen):
                    raise self._error("missing closing brace", closing)
                group = open_groups.pop()
                value = -result if group.negate else result

    def _consume_signs(self) -> bool:
        """Consumes a run of unary signs, True if they negate the factor"""
        negate = False
        while True:
            sign = self._peek_operator(ADDITIVE)
            if sign is None:
                return negate
            self.lexer.next_token()
            if sign is Sign.MINUS:
                negate = not negate

    def _consume_operand(self, token: Optional[Token]) -> int:
        if isinstance(token, Number):
            return token.value
        elif isinstance(token, Identifier):
            if token.name not in self.variables:
                raise self._error("unknown variable", token)
            return self.variables[token.name]
        else:
            raise self._error("unexpected token", token)
