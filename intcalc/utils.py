import enum
from dataclasses import dataclass
from typing import ClassVar


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


class Sign(PrintableEnum):
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    EQUAL = "="


def source_line(code: str, line: int, width: int = 40) -> str:
    """1-based line of code, trimmed to width"""
    lines = code.split("\n")
    if not 1 <= line <= len(lines):
        return ""
    text = lines[line - 1].rstrip()
    if len(text) > width:
        text = text[: width - 3] + "..."
    return text


@dataclass
class CalcError(Exception):
    errmsg: str
    line: int
    code: str = ""

    kind: ClassVar[str] = "Error"

    @property
    def message(self) -> str:
        """Diagnostic text as recorded by a run"""
        return f"{self.errmsg} at line {self.line}"

    def __str__(self) -> str:
        excerpt = source_line(self.code, self.line)
        lines = [f"[{self.kind}] {self.message}"]
        if excerpt:
            lines.append(f"{self.line:>4} | {excerpt}")
        return "\n".join(lines)
