"""Find package imports in JavaScript/TypeScript using trigger-anchored regexes."""

from __future__ import annotations

import re
from pathlib import Path

from cnp.errors import FileReadError
from cnp.extractor.source_text import MaskedSource, mask_source
from cnp.extractor.specifier import parse_reference
from cnp.models import ImportReference, SourceFile

# Every pattern ends on the opening quote of the specifier (group "q").
# The clause of import/export ... from may span lines but never crosses a
# string, a statement end, a call or an assignment.
_FROM_RE = re.compile(
    r"""(?<![\w$.])(?:import|export)(?![\w$])[^;'"`()=]{0,2000}?(?<![\w$])from\s*(?P<q>['"`])""",
)
_SIDE_EFFECT_RE = re.compile(r"""(?<![\w$.])import\s*(?P<q>['"`])""")
_DYNAMIC_IMPORT_RE = re.compile(r"""(?<![\w$.])import\s*\(\s*(?P<q>['"`])""")
_REQUIRE_RE = re.compile(
    r"""(?<![\w$.])require(?:\s*\.\s*resolve)?\s*\(\s*(?P<q>['"`])""",
)

# A call argument must be the whole literal: require('a' + b) is not resolvable.
_CALL_END_RE = re.compile(r"\s*[,)]")

_PATTERNS: tuple[tuple[re.Pattern[str], bool], ...] = (
    (_FROM_RE, False),
    (_SIDE_EFFECT_RE, False),
    (_DYNAMIC_IMPORT_RE, True),
    (_REQUIRE_RE, True),
)


def extract_imports(source: str) -> list[ImportReference]:
    """Return every literal import/require specifier in source order."""
    masked = mask_source(source)
    found: dict[int, str] = {}

    for pattern, is_call in _PATTERNS:
        for m in pattern.finditer(masked.text):
            if masked.in_string(m.start()):
                continue
            spec = _literal_specifier(masked, m.start("q"), is_call)
            if spec is not None:
                found[m.start("q")] = spec

    return [parse_reference(found[pos]) for pos in sorted(found)]


def extract_packages(source: str) -> set[str]:
    return {ref.package_name for ref in extract_imports(source) if ref.package_name}


def read_source(path: Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise FileReadError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e


def extract_file(source_file: SourceFile) -> set[str]:
    """Package names imported by one file; raises FileReadError."""
    return extract_packages(read_source(source_file.path))


def _literal_specifier(masked: MaskedSource, quote_pos: int, is_call: bool) -> str | None:
    literal = masked.literal_at(quote_pos)
    if literal is None or literal.interpolated:
        return None
    if is_call and not _CALL_END_RE.match(masked.text, literal.end + 1):
        return None
    return literal.value
