"""Page templates and output writers: post pages, the index page, and sidecar JSON"""

import json
import re
from html import escape, unescape
from pathlib import Path

from mdblog.core.models import Post


PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta name="description" content="{description}">
    <title>{title}</title>
    <link rel="stylesheet" href="{root}style.css">
</head>
<body>
{body}
</body>
</html>
"""

TAG_RE = re.compile(r"<[^>]+>")

INDEX_ENTRY = """\
<article>
<h2><a href='{href}'>{title}</a></h2>
<time datetime="{date}">{date}</time>
{blurb}
</article>"""


def _plain_text(html: str) -> str:
    """Strip tags and entities so an HTML fragment can go in an attribute."""
    return " ".join(unescape(TAG_RE.sub(" ", html)).split())


def _page_title(post: Post, site_title: str) -> str:
    title = post.document.metadata.title
    return f"{title} | {site_title}" if title else site_title


def render_page(post: Post, site_title: str = "Blog") -> str:
    """Wrap a parsed post body in the page template."""
    meta = post.document.metadata
    return PAGE_TEMPLATE.format(
        title=escape(_page_title(post, site_title)),
        description=escape(_plain_text(meta.blurb)),
        root="../" * len(post.rel_dir.parts),
        body=post.document.html_body,
    )


def render_index(posts: list[Post], site_title: str = "Blog") -> str:
    """Listing page for posts in the given order, each with its blurb."""
    entries = [
        INDEX_ENTRY.format(
            href=p.href,
            title=escape(p.document.metadata.title or p.slug),
            date=p.document.metadata.publish_date.isoformat() if p.document.metadata.publish_date else "",
            blurb=p.document.metadata.blurb,
        )
        for p in posts
    ]
    body = f"<h1>{escape(site_title)}</h1>\n" + "\n".join(entries)
    return PAGE_TEMPLATE.format(title=escape(site_title), description=escape(site_title), root="", body=body)


def build_sidecar(post: Post) -> dict:
    """Metadata sidecar: slug, source path, and front-matter fields (camelCase keys)."""
    return {
        "slug": post.slug,
        "path": str(post.path),
        "metadata": post.document.metadata.model_dump(mode="json", by_alias=True),
    }


def write_post(post: Post, output_dir: Path, site_title: str = "Blog", sidecar: bool = True) -> Path:
    """Write <slug>.html (and <slug>.json when sidecar is set) under the post's mirrored directory.

    Returns the HTML path.
    """
    dest_dir = output_dir / post.rel_dir
    dest_dir.mkdir(parents=True, exist_ok=True)
    html_path = dest_dir / f"{post.slug}.html"
    html_path.write_text(render_page(post, site_title), encoding='utf-8')
    if sidecar:
        (dest_dir / f"{post.slug}.json").write_text(
            json.dumps(build_sidecar(post), indent=2, ensure_ascii=False), encoding='utf-8',
        )
    return html_path


def write_index(posts: list[Post], output_dir: Path, site_title: str = "Blog") -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / "index.html"
    index_path.write_text(render_index(posts, site_title), encoding='utf-8')
    return index_path
