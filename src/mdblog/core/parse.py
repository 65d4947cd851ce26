"""Document assembly: drive metadata extraction, inline spans and block classification over a line stream"""

from pathlib import Path
from typing import Iterable, Iterator

from mdblog.core.blocks import DEFAULT_BULLETS, classify, close_lists, finish_lists
from mdblog.core.inline import transform_inline
from mdblog.core.metadata import read_metadata
from mdblog.core.models import (
    AssetRequest,
    BlurbState,
    ListState,
    Metadata,
    MetadataReadState,
    ParsedDocument,
)


CONTINUE_READING = "<em>Continue Reading…</em>"
HEADING_DEMOTIONS = (("h3", "h4"), ("h2", "h3"), ("h1", "h2"))


def build_blurb(output: list[str]) -> str:
    """Fallback blurb: fragments 1-3 (zero-indexed) with headings demoted one level."""
    blurb = "".join(output[1:4]) + CONTINUE_READING
    for old, new in HEADING_DEMOTIONS:
        blurb = blurb.replace(f"<{old}>", f"<{new}>").replace(f"</{old}>", f"</{new}>")
    return blurb


def parse_lines(lines: Iterable[str], bullets: str = DEFAULT_BULLETS) -> ParsedDocument:
    """Convert a single-pass stream of lines (terminators stripped) into a ParsedDocument."""
    metadata = Metadata()
    meta_state = MetadataReadState.not_started
    blurb_state = BlurbState.not_started
    ol = ul = ListState.not_started
    output: list[str] = []
    assets: list[AssetRequest] = []

    for line in lines:
        if not line:
            continue

        if meta_state != MetadataReadState.finished:
            if meta_state == MetadataReadState.not_started and not line.strip():
                continue
            was_started = meta_state == MetadataReadState.started
            metadata, meta_state, blurb_state = read_metadata(line, metadata, meta_state, blurb_state)
            # A first line that is not a fence ends the phase and is body text.
            if was_started or meta_state != MetadataReadState.finished:
                continue

        output, ol, ul = close_lists(line, output, ol, ul, bullets)
        result = transform_inline(line)
        assets.extend(result.assets)
        output, ol, ul = classify(result.text, output, ol, ul, bullets)

    output, ol, ul = finish_lists(output, ol, ul)

    if blurb_state == BlurbState.not_started and len(output) >= 3:
        metadata = metadata.model_copy(update={"blurb": build_blurb(output)})

    return ParsedDocument(html_body="\n".join(output), metadata=metadata, assets=assets)


def parse_text(text: str, bullets: str = DEFAULT_BULLETS) -> ParsedDocument:
    return parse_lines(text.splitlines(), bullets)


def read_lines(path: Path) -> Iterator[str]:
    """Lazily yield UTF-8 lines of path with line terminators stripped."""
    with path.open(encoding="utf-8", newline=None) as f:
        for line in f:
            yield line.rstrip("\r\n")


def parse_file(path: Path, bullets: str = DEFAULT_BULLETS) -> ParsedDocument:
    return parse_lines(read_lines(path), bullets)
