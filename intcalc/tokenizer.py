import re
from dataclasses import dataclass
from typing import Optional

from intcalc.utils import CalcError, Sign


class LexError(CalcError):
    kind = "Tokenizer error"


@dataclass(frozen=True)
class Number:
    value: int
    line: int

    def __str__(self) -> str:
        return f"<NUMBER>{self.value}"


@dataclass(frozen=True)
class Identifier:
    name: str
    line: int

    def __str__(self) -> str:
        return f"<IDENTIFIER>{self.name}"


@dataclass(frozen=True)
class Operator:
    symbol: Sign
    line: int

    def __str__(self) -> str:
        return f"<OPERATOR>{self.symbol.value}"


@dataclass(frozen=True)
class Punctuation:
    symbol: str
    line: int

    def __str__(self) -> str:
        return f"<PUNCTUATION>{self.symbol}"


@dataclass(frozen=True)
class OpenParen:
    line: int

    def __str__(self) -> str:
        return "<BRACKET_OPEN>("


@dataclass(frozen=True)
class CloseParen:
    line: int

    def __str__(self) -> str:
        return "<BRACKET_CLOSE>)"


Token = Number | Identifier | Operator | Punctuation | OpenParen | CloseParen


# characters allowed right after a zero-valued number; "" is end of input
NUMBER_TERMINATORS = frozenset([" ", "\t", "\n", ";", "+", "-", "*", ")", ""])

SIGNS = {sign.value: sign for sign in Sign}


def _is_valid_in_number(s: str) -> bool:
    return s.isascii() and s.isdigit()


def _is_identifier_start(s: str) -> bool:
    return s.isalpha() or s == "_"


def _is_valid_in_identifier(s: str) -> bool:
    return s.isalpha() or s.isdecimal() or s == "_"


class Lexer:
    """Reads tokens on demand with one token of lookahead; None marks end of input"""

    def __init__(self, code: str) -> None:
        self.code = code
        self.line = 1
        self._idx = 0
        self._lookahead: Optional[Token] = None
        self._names: dict[str, str] = {}

    def peek_token(self) -> Optional[Token]:
        if self._lookahead is None:
            self._lookahead = self._read_token()
        return self._lookahead

    def next_token(self) -> Optional[Token]:
        if self._lookahead is not None:
            token, self._lookahead = self._lookahead, None
            return token
        return self._read_token()

    def _current(self) -> str:
        return self.code[self._idx] if self._idx < len(self.code) else ""

    def _error(self, errmsg: str, line: int) -> LexError:
        return LexError(errmsg, line=line, code=self.code)

    def _read_token(self) -> Optional[Token]:
        while self._current().isspace():
            if self._current() == "\n":
                self.line += 1
            self._idx += 1

        char = self._current()
        line = self.line

        if _is_valid_in_number(char):
            return self._read_number()
        elif _is_identifier_start(char):
            return self._read_identifier()
        elif char == "":
            return None

        self._idx += 1
        if char in SIGNS:
            return Operator(symbol=SIGNS[char], line=line)
        elif char == ";":
            return Punctuation(symbol=char, line=line)
        elif char == "(":
            return OpenParen(line=line)
        elif char == ")":
            return CloseParen(line=line)
        else:
            raise self._error("unexpected character", line=line)

    def _read_number(self) -> Number:
        start_idx = self._idx
        while _is_valid_in_number(self._current()):
            self._idx += 1
        digits = self.code[start_idx : self._idx]
        value = int(digits)
        leading_zeros = len(digits) - len(digits.lstrip("0"))

        if value == 0 and self._current() not in NUMBER_TERMINATORS:
            raise self._error("invalid number format", line=self.line)
        # "007" starts with the zero-valued run "00" followed by a digit and is rejected,
        # while a single leading zero passes: "019" reads as 19
        if value != 0 and leading_zeros > 1:
            raise self._error("invalid number format", line=self.line)

        return Number(value=value, line=self.line)

    def _read_identifier(self) -> Identifier:
        start_idx = self._idx
        self._idx += 1
        while _is_valid_in_identifier(self._current()):
            self._idx += 1
        name = self.code[start_idx : self._idx]
        return Identifier(name=self._names.setdefault(name, name), line=self.line)


def tokenize(code: str) -> list[Token]:
    lexer = Lexer(code)
    tokens: list[Token] = []
    while True:
        token = lexer.next_token()
        if token is None:
            return tokens
        tokens.append(token)


def _lexeme(token: Token) -> str:
    if isinstance(token, Number):
        return str(token.value)
    elif isinstance(token, Identifier):
        return token.name
    elif isinstance(token, Operator):
        return token.symbol.value
    elif isinstance(token, Punctuation):
        return token.symbol
    elif isinstance(token, OpenParen):
        return "("
    else:
        return ")"


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(_lexeme(t) for t in tokens)

    result = re.sub(r"\s+;", ";", result)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)
    return result
