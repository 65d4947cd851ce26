"""Block-level classification of body lines and the list open/close state machine"""

import logging
import re

from mdblog.core.models import ListState


logger = logging.getLogger(__name__)

DEFAULT_BULLETS = "-+"
MAX_HEADING_LEVEL = 6

ORDERED_ITEM_RE = re.compile(r"^\d+\.(?: (?P<text>.*)|$)")
CODE_BLOCK_RE = re.compile(r"^<code>(?:(?!</code>).)*</code>$")
IMAGE_BLOCK_RE = re.compile(r"^<img [^<>]*>$")


def _first_char(line: str) -> str:
    stripped = line.lstrip()
    return stripped[0] if stripped else ""


def close_lists(
    line: str,
    output: list[str],
    ol: ListState,
    ul: ListState,
    bullets: str = DEFAULT_BULLETS,
    ) -> tuple[list[str], ListState, ListState]:
    """Close any open list the line cannot continue.

    The two checks are independent: an open ordered list closes on a line not
    starting with a digit, an open unordered list on one not starting with a bullet.
    """
    first = _first_char(line)
    if ol == ListState.started and not first.isdigit():
        output.append("</ol>")
        ol = ListState.not_started
    if ul == ListState.started and (not first or first not in bullets):
        output.append("</ul>")
        ul = ListState.not_started
    return output, ol, ul


def finish_lists(
    output: list[str],
    ol: ListState,
    ul: ListState,
    ) -> tuple[list[str], ListState, ListState]:
    """Close lists still open at end of stream."""
    if ol == ListState.started:
        output.append("</ol>")
    if ul == ListState.started:
        output.append("</ul>")
    return output, ListState.not_started, ListState.not_started


def _heading(trimmed: str) -> tuple[bool, str | None]:
    """Return (is_heading, html). html is None for a malformed heading that must be dropped."""
    if not trimmed.startswith("#"):
        return False, None
    tokens = trimmed.split()
    marker = tokens[0]
    if marker.strip("#"):
        logger.warning("Malformed heading dropped: %s", trimmed)
        return True, None
    level = len(marker)
    if level > MAX_HEADING_LEVEL:
        logger.warning("Heading level %d clamped to h%d: %s", level, MAX_HEADING_LEVEL, trimmed)
        level = MAX_HEADING_LEVEL
    text = " ".join(tokens[1:])
    return True, f"<h{level}>{text}</h{level}>"


def _unordered_text(trimmed: str, bullets: str) -> str | None:
    """Item text if trimmed is a bullet item, else None."""
    if not trimmed or trimmed[0] not in bullets:
        return None
    if len(trimmed) > 1 and trimmed[1] != " ":
        return None
    return trimmed[2:].strip()


def classify(
    line: str,
    output: list[str],
    ol: ListState,
    ul: ListState,
    bullets: str = DEFAULT_BULLETS,
    ) -> tuple[list[str], ListState, ListState]:
    """Append the HTML block for an inline-transformed line; first matching rule wins.

    output is appended to in place and returned alongside the new list states.
    """
    trimmed = line.strip()

    is_heading, html = _heading(trimmed)
    if is_heading:
        if html is not None:
            output.append(html)
        return output, ol, ul

    if m := ORDERED_ITEM_RE.match(trimmed):
        if ol == ListState.not_started:
            output.append("<ol>")
            ol = ListState.started
        output.append(f"<li>{(m.group('text') or '').strip()}</li>")
        return output, ol, ul

    if (text := _unordered_text(trimmed, bullets)) is not None:
        if ul == ListState.not_started:
            output.append("<ul>")
            ul = ListState.started
        output.append(f"<li>{text}</li>")
        return output, ol, ul

    if CODE_BLOCK_RE.match(trimmed):
        output.append(f"<pre>{trimmed}</pre>")
    elif IMAGE_BLOCK_RE.match(trimmed):
        output.append(trimmed)
    elif trimmed.startswith(">"):
        output.append(f"<blockquote>{trimmed[1:].strip()}</blockquote>")
    else:
        output.append(f"<p>{trimmed}</p>")
    return output, ol, ul
