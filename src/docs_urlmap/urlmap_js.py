from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from .table import DocumentationLinkTable

HEADER_COMMENT: Final[str] = "// URL map for external documentation links"

_ARRAY_START_RE: Final[re.Pattern[str]] = re.compile(
    r"(?:\b(?:var|let|const)\s+)?\bbaseURLs\s*=\s*\["
)
# Whitespace and comments between tokens of the array literal.
_GAP_RE: Final[re.Pattern[str]] = re.compile(r"(?:\s+|//[^\n]*|/\*.*?\*/)*", re.S)
_STRING = r"""(?:'(?P<{0}sq>(?:\\.|[^'\\\n])*)'|"(?P<{0}dq>(?:\\.|[^"\\\n])*)")"""
_ROW_RE: Final[re.Pattern[str]] = re.compile(
    r"\[\s*"
    + _STRING.format("p")
    + r"\s*,\s*"
    + _STRING.format("u")
    + r"\s*,?\s*\]"
)
_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(
    r"\\(?:u\{(?P<cp>[0-9A-Fa-f]{1,6})\}|u(?P<u4>[0-9A-Fa-f]{4})"
    r"|x(?P<x2>[0-9A-Fa-f]{2})|(?P<ch>.))",
    re.S,
)
_NAMED_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_QUOTE_ESCAPES: Final[dict[str, str]] = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _js_quote(text: str) -> str:
    out: list[str] = []
    for ch in text:
        if ch in _QUOTE_ESCAPES:
            out.append(_QUOTE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ch in "\x7f\u2028\u2029":
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(ch)
    return "'" + "".join(out) + "'"


def _decode_escape(e: re.Match[str]) -> str:
    code = e.group("cp") or e.group("u4") or e.group("x2")
    if code is not None:
        return chr(int(code, 16))
    ch = e.group("ch")
    return _NAMED_ESCAPES.get(ch, ch)


def _js_unquote(m: re.Match[str], group: str) -> str:
    raw = m.group(f"{group}sq")
    if raw is None:
        raw = m.group(f"{group}dq")
    try:
        decoded = _ESCAPE_RE.sub(_decode_escape, raw)
        # \uD83D\uDE00 style pairs decode to two surrogates; join them.
        return decoded.encode("utf-16", "surrogatepass").decode("utf-16")
    except (ValueError, UnicodeError) as e:
        raise ValueError(f"Invalid escape in string literal {raw!r}") from e


def _line_no(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


def render_urlmap_js(table: DocumentationLinkTable) -> str:
    lines = [HEADER_COMMENT, "baseURLs = ["]
    for entry in table.entries:
        lines.append(
            f"  [ {_js_quote(entry.namespace_prefix)}, {_js_quote(entry.base_url)} ],"
        )
    lines.append("]")
    return "\n".join(lines) + "\n"


def parse_urlmap_js(text: str) -> DocumentationLinkTable:
    """Read the ``baseURLs`` array out of a urlmap.js source text.

    Only the array literal is interpreted: rows of two string literals,
    separated by single commas (one trailing comma allowed), with comments
    allowed between rows.
    """

    start = _ARRAY_START_RE.search(text)
    if start is None:
        raise ValueError("No 'baseURLs = [' array found in urlmap source")

    pairs: list[tuple[str, str]] = []
    pos = _GAP_RE.match(text, start.end()).end()
    while pos < len(text) and text[pos] != "]":
        row = _ROW_RE.match(text, pos)
        if row is None:
            raise ValueError(f"Malformed baseURLs row at line {_line_no(text, pos)}")
        pairs.append((_js_unquote(row, "p"), _js_unquote(row, "u")))

        pos = _GAP_RE.match(text, row.end()).end()
        if pos < len(text) and text[pos] == ",":
            pos = _GAP_RE.match(text, pos + 1).end()
        elif pos < len(text) and text[pos] != "]":
            raise ValueError(
                f"Expected ',' or ']' after baseURLs row at line {_line_no(text, pos)}"
            )

    if pos >= len(text):
        raise ValueError("Unterminated baseURLs array")
    return DocumentationLinkTable.from_pairs(pairs)


def read_urlmap(path: Path) -> DocumentationLinkTable:
    return parse_urlmap_js(path.read_text(encoding="utf-8"))


def write_urlmap(table: DocumentationLinkTable, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_urlmap_js(table), encoding="utf-8", newline="\n")
    return path
