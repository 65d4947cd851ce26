"""Post discovery and chronological ordering"""

from datetime import date
from pathlib import Path

from mdblog.core.models import Post


MD_EXTENSIONS = {'.md', '.markdown'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def sort_posts(posts: list[Post]) -> list[Post]:
    """Newest first; posts with an invalid publish date sort last, ties broken by slug."""
    def key(post: Post) -> tuple[int, int, str]:
        published = post.document.metadata.publish_date
        return (0 if published else 1, -(published or date.min).toordinal(), post.slug)
    return sorted(posts, key=key)
