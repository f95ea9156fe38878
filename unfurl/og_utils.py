import re
from urllib.parse import urljoin

from bs4 import UnicodeDammit

from unfurl import http_utils
from unfurl.title_utils import decode_entities

META_TAG = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)
ATTRIBUTE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


def _attributes(tag: str) -> dict:
    attrs = {}
    for m in ATTRIBUTE.finditer(tag):
        attrs.setdefault(m.group(1).lower(), m.group(2) if m.group(2) is not None else m.group(3))
    return attrs


def extract_og(html: str, prop: str) -> str | None:
    """Raw content of the first og:<prop> meta tag.

    property= and name= are both seen in the wild, in either attribute
    order. Entities are left as written.
    """
    for tag in META_TAG.finditer(html):
        attrs = _attributes(tag.group(0))
        key = attrs.get("property") or attrs.get("name") or ""
        content = (attrs.get("content") or "").strip()
        if key.strip().lower() == prop and content:
            return content
    return None


def fetch_og(url: str) -> dict:
    """Scrape the first og:image and og:title from a page.

    Always returns a dict; a page that can't be fetched or parsed gives {}.
    """
    body = http_utils.get_body(url)
    if not body:
        return {}
    html = UnicodeDammit(body, is_html=True).unicode_markup
    if not html:
        return {}

    out = {}
    image = extract_og(html, "og:image")
    if image:
        image = decode_entities(image)
        # root-relative and protocol-relative paths only
        out["image"] = urljoin(url, image) if image.startswith("/") else image
    title = extract_og(html, "og:title")
    if title:
        out["title"] = title
    return out
