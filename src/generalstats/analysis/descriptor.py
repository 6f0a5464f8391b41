"""
Statistic descriptor parser.

Turns a user-supplied label such as ``Average[25,Percentile]`` back into a
statistic. This is the inverse of ``Statistic.describe``:

    descriptor := NAME | NAME "[" arg ("," arg)* "]"
    arg        := NUMBER | descriptor

Names are matched case-insensitively and whitespace is ignored. Anything
malformed raises ``DescriptorError`` carrying the character offset, so the
web and CLI layers can reject the input instead of failing later.
"""

from __future__ import annotations

import re

from generalstats.analysis.statistics import STATISTICS, Average, Statistic

_TOKEN_PATTERN = re.compile(
    r"\s*(?:(?P<number>[-+]?\d+(?:\.\d+)?)|(?P<name>[A-Za-z_]\w*)|(?P<punct>[\[\],]))"
)

_NAMES = {name.lower(): cls for name, cls in STATISTICS.items()}


class DescriptorError(ValueError):
    """A descriptor string could not be parsed into a statistic."""

    def __init__(self, message: str, text: str, position: int):
        super().__init__(f"{message} at position {position} in {text!r}")
        self.text = text
        self.position = position


class _Parser:
    def __init__(self, text: str):
        self.text = text
        self.tokens: list[tuple[str, str, int]] = []
        self.pos = 0
        self._tokenize()

    def _tokenize(self) -> None:
        offset = 0
        while offset < len(self.text):
            if self.text[offset:].strip() == "":
                break
            match = _TOKEN_PATTERN.match(self.text, offset)
            if match is None:
                raise DescriptorError("unexpected character", self.text, offset)
            kind = match.lastgroup
            self.tokens.append((kind, match.group(kind), match.start(kind)))
            offset = match.end()

    def _peek(self) -> tuple[str, str, int] | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _next(self) -> tuple[str, str, int]:
        token = self._peek()
        if token is None:
            raise DescriptorError("unexpected end of descriptor", self.text, len(self.text))
        self.pos += 1
        return token

    def _expect(self, value: str) -> None:
        kind, text, position = self._next()
        if text != value:
            raise DescriptorError(f"expected {value!r}, found {text!r}", self.text, position)

    def parse(self) -> Statistic:
        statistic = self._descriptor()
        trailing = self._peek()
        if trailing is not None:
            raise DescriptorError(f"unexpected {trailing[1]!r}", self.text, trailing[2])
        return statistic

    def _descriptor(self) -> Statistic:
        kind, name, position = self._next()
        if kind != "name":
            raise DescriptorError(f"expected a statistic name, found {name!r}", self.text, position)

        cls = _NAMES.get(name.lower())
        if cls is None:
            raise DescriptorError(f"unknown statistic {name!r}", self.text, position)

        args: list[int | float | Statistic] = []
        token = self._peek()
        if token is not None and token[1] == "[":
            self._next()
            args.append(self._arg())
            while (token := self._peek()) is not None and token[1] == ",":
                self._next()
                args.append(self._arg())
            self._expect("]")

        return self._build(cls, args, position)

    def _arg(self) -> int | float | Statistic:
        token = self._peek()
        if token is not None and token[0] == "number":
            self._next()
            text = token[1]
            return float(text) if "." in text else int(text)
        return self._descriptor()

    def _build(
        self, cls: type[Statistic], args: list[int | float | Statistic], position: int
    ) -> Statistic:
        if cls is Average:
            if len(args) != 2:
                raise DescriptorError(
                    f"Average takes [window,statistic], got {len(args)} argument(s)",
                    self.text,
                    position,
                )
            window, inner = args
            if isinstance(window, float) and window.is_integer():
                window = int(window)
            if not isinstance(window, int) or window < 0:
                raise DescriptorError(
                    "Average window must be a non-negative integer", self.text, position
                )
            if not isinstance(inner, Statistic):
                raise DescriptorError(
                    "Average smooths a statistic, not a number", self.text, position
                )
            return Average(window, inner)

        if args:
            raise DescriptorError(f"{cls.name} takes no arguments", self.text, position)
        return cls()


def parse_statistic(text: str) -> Statistic:
    """
    Parse a descriptor label into a statistic.

    Args:
        text: Descriptor such as ``"Win"`` or ``"Average[25,Percentile]"``

    Returns:
        The described statistic

    Raises:
        DescriptorError: If *text* is empty, malformed or names an unknown statistic
    """
    if not text or not text.strip():
        raise DescriptorError("empty descriptor", text or "", 0)
    return _Parser(text).parse()
