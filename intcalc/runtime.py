import logging
from typing import Optional

from intcalc.parser import Parser, ParserError
from intcalc.tokenizer import Identifier, Lexer
from intcalc.utils import CalcError

logger = logging.getLogger(__name__)


class Execution:
    """One program run, stopping at the first error"""

    def __init__(self, code: str) -> None:
        self.code = code
        self.variables: dict[str, int] = {}
        self.diagnostics: list[str] = []
        self.error: Optional[CalcError] = None
        self._lexer = Lexer(code)
        self._parser = Parser(self._lexer, self.variables)

    @property
    def failed(self) -> bool:
        return bool(self.diagnostics)

    def run(self) -> "Execution":
        while not self.diagnostics:
            try:
                token = self._lexer.peek_token()
                if token is None:
                    break
                if not isinstance(token, Identifier):
                    raise ParserError("syntax error", line=token.line, code=self.code)
                name, value = self._parser.consume_assignment()
            except CalcError as e:
                self._record(e)
                break
            self.variables[name] = value
            logger.debug("Assigned %s = %d", name, value)
        return self

    def _record(self, error: CalcError) -> None:
        self.error = error
        self.diagnostics.append(error.message)
        logger.info("%s", error)


def run(code: str) -> Execution:
    return Execution(code).run()


def render(execution: Execution) -> list[str]:
    if execution.failed:
        return ["error"]
    return [f"{name} = {value}" for name, value in execution.variables.items()]
