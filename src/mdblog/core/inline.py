"""Inline span substitutions applied to a single body line.

Passes run in a fixed order: links/images, emphasis, quotes, code spans.
Each pass scans left to right with one pending opener at a time. After a
match the scan resumes right after the inserted HTML, so replaced text is
never scanned again and spans do not nest.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from mdblog.core.models import AssetRequest


Guard = Callable[[str, int], bool]


def _char(line: str, i: int) -> str:
    """Character at i, or '' when i is out of range."""
    return line[i] if 0 <= i < len(line) else ""


def _always(line: str, i: int) -> bool:
    return True


def find_closer(line: str, token: str, start: int, accept: Guard = _always) -> int:
    """Index of the nearest token at or after start that passes accept, else -1."""
    j = line.find(token, start)
    while j != -1 and not accept(line, j):
        j = line.find(token, j + 1)
    return j


@dataclass(frozen=True)
class Delimiter:
    """A symmetric inline delimiter and the HTML it turns into."""
    token:      str
    open_html:  str
    close_html: str
    can_open:   Guard = _always     # called with the opener's index
    can_close:  Guard = _always     # called with the closer's index
    min_inner:  int = 0             # minimum characters between opener and closer


def _bold_opens(line: str, i: int) -> bool:
    return _char(line, i + 2) != " "


def _bold_closes(line: str, j: int) -> bool:
    return _char(line, j - 1) not in (" ", "*") and _char(line, j + 2) != "*"


def _italic_opens(line: str, i: int) -> bool:
    return _char(line, i + 1) not in (" ", "*")


def _italic_closes(line: str, j: int) -> bool:
    return _char(line, j - 1) not in (" ", "*") and _char(line, j + 1) != "*"


BOLD = Delimiter("**", "<strong>", "</strong>", _bold_opens, _bold_closes, min_inner=1)
ITALIC = Delimiter("*", "<em>", "</em>", _italic_opens, _italic_closes, min_inner=1)
QUOTE = Delimiter('"', "&ldquo;", "&rdquo;")
CODE = Delimiter("``", "<code>", "</code>")

EMPHASIS_PASS = (BOLD, ITALIC)     # bold is tried first at every position
QUOTE_PASS = (QUOTE,)
CODE_PASS = (CODE,)


def _match_at(line: str, i: int, delim: Delimiter) -> Optional[tuple[str, int]]:
    """Try to match delim opening at i. Returns (new_line, resume_index) or None."""
    if not line.startswith(delim.token, i) or not delim.can_open(line, i):
        return None
    inner_start = i + len(delim.token)
    j = find_closer(line, delim.token, inner_start + delim.min_inner, delim.can_close)
    if j == -1:
        return None
    replacement = f"{delim.open_html}{line[inner_start:j]}{delim.close_html}"
    return line[:i] + replacement + line[j + len(delim.token):], i + len(replacement)


def replace_delimited(line: str, delimiters: tuple[Delimiter, ...]) -> str:
    """Run one delimiter pass over line, trying each delimiter in order at each position."""
    i = 0
    while i < len(line):
        for delim in delimiters:
            match = _match_at(line, i, delim)
            if match:
                line, i = match
                break
        else:
            i += 1
    return line


def replace_emphasis(line: str) -> str:
    return replace_delimited(line, EMPHASIS_PASS)


def replace_quotes(line: str) -> str:
    return replace_delimited(line, QUOTE_PASS)


def replace_code_spans(line: str) -> str:
    return replace_delimited(line, CODE_PASS)


def is_local_asset(target: str) -> bool:
    """True for relative file references; URLs, absolute paths and data URIs are left alone."""
    return bool(target) and "://" not in target and not target.startswith(("/", "data:", "#"))


def replace_links(line: str) -> tuple[str, list[AssetRequest]]:
    """Rewrite [label](target) as anchors and ![alt](src) as images.

    Returns the new line and one AssetRequest per local image source.
    """
    assets: list[AssetRequest] = []
    i = line.find("[")
    while i != -1:
        j = line.find("](", i + 1)
        k = line.find(")", j + 2) if j != -1 else -1
        if k == -1:
            break
        label, target = line[i + 1:j], line[j + 2:k]
        if _char(line, i - 1) == "!":
            start = i - 1
            replacement = f"<img src='{target}' alt='{label}'>"
            if is_local_asset(target):
                assets.append(AssetRequest(source=target))
        else:
            start = i
            replacement = f"<a href='{target}'>{label}</a>"
        line = line[:start] + replacement + line[k + 1:]
        i = line.find("[", start + len(replacement))
    return line, assets


@dataclass
class InlineResult:
    text:   str
    assets: list[AssetRequest] = field(default_factory=list)


def transform_inline(line: str) -> InlineResult:
    """Apply every inline pass to line in order."""
    line, assets = replace_links(line)
    line = replace_emphasis(line)
    line = replace_quotes(line)
    line = replace_code_spans(line)
    return InlineResult(text=line, assets=assets)
