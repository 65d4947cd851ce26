"""Front-matter extraction: a fenced block of `key: value` lines at the top of a post"""

import logging
from datetime import date
from typing import Optional

from dateutil import parser as date_parser

from mdblog.core.models import BlurbState, Metadata, MetadataReadState


logger = logging.getLogger(__name__)

FENCE = "```"


def is_fence(line: str) -> bool:
    """Return True if line is the metadata fence (exactly three backticks)."""
    return line == FENCE


def parse_publish_date(text: str) -> Optional[date]:
    """Parse date text into a calendar date; None when the text is not a date."""
    try:
        return date_parser.parse(text.strip()).date()
    except (ValueError, OverflowError):
        return None


def _read_field(
    line: str,
    metadata: Metadata,
    blurb_state: BlurbState,
    ) -> tuple[Metadata, BlurbState]:
    """Apply one `key: value` line to metadata. Lines without a colon are ignored."""
    if ":" not in line:
        return metadata, blurb_state
    key, value = line.split(":", 1)
    key, value = key.strip(), value.strip()

    if key == "title":
        return metadata.model_copy(update={"title": value}), blurb_state
    if key == "publishDate":
        return metadata.model_copy(update={"publish_date": parse_publish_date(value)}), blurb_state
    if key == "blurb":
        if blurb_state == BlurbState.started:
            logger.warning("Duplicate blurb in metadata, keeping the first one: %s", line)
            return metadata, blurb_state
        return metadata.model_copy(update={"blurb": value}), BlurbState.started

    logger.warning("Unrecognized metadata key %r ignored", key)
    return metadata, blurb_state


def read_metadata(
    line: str,
    metadata: Metadata,
    state: MetadataReadState,
    blurb_state: BlurbState,
    ) -> tuple[Metadata, MetadataReadState, BlurbState]:
    """Advance the metadata state machine by one line.

    not_started -> started on a fence line. Any other first line means the
    document has no metadata block, so the state jumps to finished and the
    caller must treat that line as body.
    started -> finished on the closing fence; every other line is a field.
    finished is terminal.
    """
    if state == MetadataReadState.finished:
        return metadata, state, blurb_state

    if state == MetadataReadState.not_started:
        if is_fence(line):
            return metadata, MetadataReadState.started, blurb_state
        return metadata, MetadataReadState.finished, blurb_state

    if is_fence(line):
        return metadata, MetadataReadState.finished, blurb_state
    metadata, blurb_state = _read_field(line, metadata, blurb_state)
    return metadata, state, blurb_state
