"""Build orchestration: discover, parse, write pages, copy assets, write the index"""

from pathlib import Path
from typing import Optional

from mdblog.core.assets import AssetCopier
from mdblog.core.blocks import DEFAULT_BULLETS
from mdblog.core.discover import discover_files, sort_posts
from mdblog.core.export import write_index, write_post
from mdblog.core.models import Post
from mdblog.core.parse import parse_file
from mdblog.core.utils.slug import slugify


def load_post(path: Path, bullets: str = DEFAULT_BULLETS, root: Optional[Path] = None) -> Post:
    """Parse a single markdown file into a Post whose slug comes from the file name.

    With root given, the post keeps its directory relative to root so output mirrors the source tree.
    """
    rel_dir = path.parent.relative_to(root) if root is not None else Path(".")
    return Post(path=path, slug=slugify(path.stem), document=parse_file(path, bullets), rel_dir=rel_dir)


def load_posts(path: Path, bullets: str = DEFAULT_BULLETS) -> list[Post]:
    """Parse every markdown file under path, newest first.

    Raises RuntimeError when two sources would write the same output page.
    """
    root = path if path.is_dir() else path.parent
    posts = []
    seen: dict[str, Path] = {}
    for p in discover_files(path):
        try:
            post = load_post(p, bullets, root)
        except (OSError, UnicodeDecodeError) as e:
            raise RuntimeError(f"Failed to read {p}: {e}") from e
        if post.href in seen:
            raise RuntimeError(f"Duplicate output {post.href} from {seen[post.href]} and {p}")
        seen[post.href] = p
        posts.append(post)
    return sort_posts(posts)


def run_build(
    path: Path,
    output_dir: Path,
    site_title: str = "Blog",
    bullets: str = DEFAULT_BULLETS,
    asset_workers: int = 4,
    sidecar: bool = True,
    ) -> tuple[list[tuple[Path, Path]], int]:
    """Build the site. Returns ((source, html_path) pairs, number of assets copied).

    Asset copies are queued while pages are written and only awaited at the end;
    a failed copy is logged and never aborts the build.
    """
    posts = load_posts(path, bullets)
    results = []
    with AssetCopier(output_dir, asset_workers) as copier:
        for post in posts:
            for request in post.document.assets:
                copier.submit(request, post.path.parent, output_dir / post.rel_dir)
            try:
                html_path = write_post(post, output_dir, site_title, sidecar)
            except OSError as e:
                raise RuntimeError(f"Failed to write {post.slug}: {e}") from e
            results.append((post.path, html_path))
        if posts:
            write_index(posts, output_dir, site_title)
    return results, copier.copied
