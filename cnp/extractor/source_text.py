"""Comment masking and string-literal bookkeeping for JS/TS source."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field

# A '/' after one of these (or at the start of the file) opens a regex literal.
# '<' is left out so JSX closing tags read as division.
_REGEX_PRECEDERS = set("(,=:[!&|?{};+-*%>~^")

# Keywords after which a '/' starts an expression, hence a regex literal.
_REGEX_KEYWORDS = frozenset({
    "return", "typeof", "case", "throw", "yield", "await", "in", "of",
    "delete", "void", "new", "else", "do", "instanceof",
})


@dataclass(frozen=True)
class StringLiteral:
    start: int  # offset of the opening quote
    end: int  # offset of the closing quote
    quote: str
    value: str
    interpolated: bool = False


@dataclass
class MaskedSource:
    """Source text with comments blanked out, offsets unchanged.

    ``spans`` holds the (start, end) offsets covered by string text. For a
    template literal only the literal chunks are spans; the bodies of its
    ``${ ... }`` placeholders are code.
    """
    text: str
    strings: dict[int, StringLiteral] = field(default_factory=dict)
    spans: list[tuple[int, int]] = field(default_factory=list)
    _starts: list[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if not self.spans:
            self.spans = [(s.start, s.end) for s in self.strings.values()]
        self.spans.sort()
        self._starts = [start for start, _ in self.spans]

    def literal_at(self, offset: int) -> StringLiteral | None:
        """Return the literal whose opening quote sits at offset."""
        return self.strings.get(offset)

    def in_string(self, offset: int) -> bool:
        i = bisect.bisect_right(self._starts, offset) - 1
        if i < 0:
            return False
        start, end = self.spans[i]
        return start <= offset <= end


def mask_source(source: str) -> MaskedSource:
    """Blank out // and /* */ comments and record every string literal.

    Newlines inside comments are kept so line numbers and offsets match the
    original. Single- and double-quoted strings end at a newline when they
    are unterminated, which keeps stray apostrophes in JSX text from eating
    the rest of the file. An unclosed block comment or template literal is
    not one: its opening character is skipped and lexing carries on.
    """
    lexer = _Lexer(source)
    lexer.code(0)
    return MaskedSource(text="".join(lexer.out), strings=lexer.strings, spans=lexer.spans)


class _Lexer:
    def __init__(self, source: str):
        self.source = source
        self.length = len(source)
        self.out = list(source)
        self.strings: dict[int, StringLiteral] = {}
        self.spans: list[tuple[int, int]] = []

    def code(self, pos: int, nested: bool = False) -> int | None:
        """Lex code from pos.

        At top level this runs to the end and returns the length. Nested
        inside a ``${`` it returns the offset of the closing brace, or None
        when the source ends first.
        """
        source = self.source
        depth = 0
        prev = ""  # last significant character
        word = ""  # identifier or keyword that prev ends, if any

        while pos < self.length:
            ch = source[pos]
            next_ch = source[pos + 1] if pos + 1 < self.length else ""

            if ch == "/" and next_ch == "/" and not _is_url(source, pos):
                end = _line_end(source, pos)
                self._blank(pos, end)
                pos = end
                continue

            if ch == "/" and next_ch == "*":
                end = source.find("*/", pos + 2)
                if end != -1:
                    self._blank(pos, end + 2)
                    pos = end + 2
                    continue
            elif ch in ("'", '"'):
                end = _scan_quoted(source, pos, ch)
                if end is None:
                    pos = _line_end(source, pos)
                else:
                    self._add(StringLiteral(start=pos, end=end, quote=ch, value=source[pos + 1:end]))
                    pos = end + 1
                prev, word = ch, ""
                continue
            elif ch == "`":
                end = self.template(pos)
                if end is not None:
                    pos = end + 1
                    prev, word = ch, ""
                    continue
            elif ch == "/" and (not prev or prev in _REGEX_PRECEDERS or word in _REGEX_KEYWORDS):
                end = _scan_regex(source, pos)
                if end is not None:
                    pos = end + 1
                    prev, word = "/", ""
                    continue
            elif _is_word_char(ch):
                end = pos + 1
                while end < self.length and _is_word_char(source[end]):
                    end += 1
                word = source[pos:end]
                prev = source[end - 1]
                pos = end
                continue
            elif nested and ch == "{":
                depth += 1
            elif nested and ch == "}":
                if depth == 0:
                    return pos
                depth -= 1

            if not ch.isspace():
                prev, word = ch, ""
            pos += 1

        return None if nested else pos

    def template(self, start: int) -> int | None:
        """Lex a template literal; return its closing backtick or None if unclosed."""
        source = self.source
        chunk = start
        interpolated = False
        pos = start + 1

        while pos < self.length:
            ch = source[pos]
            if ch == "\\":
                pos += 2
                continue
            if ch == "`":
                self.spans.append((chunk, pos))
                self.strings[start] = StringLiteral(
                    start=start, end=pos, quote="`",
                    value=source[start + 1:pos], interpolated=interpolated,
                )
                return pos
            if ch == "$" and source.startswith("{", pos + 1):
                interpolated = True
                self.spans.append((chunk, pos + 1))
                close = self.code(pos + 2, nested=True)
                if close is None:
                    break
                chunk = close
                pos = close + 1
                continue
            pos += 1

        self._rollback(start)
        return None

    def _add(self, literal: StringLiteral) -> None:
        self.strings[literal.start] = literal
        self.spans.append((literal.start, literal.end))

    def _rollback(self, start: int) -> None:
        # Everything at or after start was written by the failed attempt.
        self.out[start:] = self.source[start:]
        self.strings = {k: v for k, v in self.strings.items() if k < start}
        self.spans = [span for span in self.spans if span[0] < start]

    def _blank(self, start: int, end: int) -> None:
        out = self.out
        for i in range(start, end):
            if out[i] != "\n":
                out[i] = " "


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _is_url(source: str, pos: int) -> bool:
    # "scheme://" in JSX text, e.g. <a>http://x.io</a>
    return pos >= 2 and source[pos - 1] == ":" and source[pos - 2].isalpha()


def _line_end(source: str, pos: int) -> int:
    end = source.find("\n", pos)
    return len(source) if end == -1 else end


def _scan_quoted(source: str, start: int, quote: str) -> int | None:
    pos = start + 1
    length = len(source)
    while pos < length:
        ch = source[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == quote:
            return pos
        if ch == "\n":
            return None
        pos += 1
    return None


def _scan_regex(source: str, start: int) -> int | None:
    pos = start + 1
    length = len(source)
    in_class = False
    while pos < length:
        ch = source[pos]
        if ch == "\\":
            pos += 2
            continue
        if ch == "\n":
            return None
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "/":
            return pos
        pos += 1
    return None
