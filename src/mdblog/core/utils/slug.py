"""Slug generation for output file names"""

import re


def slugify(text: str, fallback: str = "post") -> str:
    """Lowercase, hyphen-separated, URL-safe slug; fallback when nothing usable remains."""
    text = re.sub(r'[^\w\s-]', '', text.lower())
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-') or fallback
