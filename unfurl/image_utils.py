import re
from urllib.parse import urlsplit, urlunsplit

SQUARE_SIZE = 600

# Apple's image CDN encodes the rendition size in the file name,
# e.g. .../source/1200x630bf-60.jpg
MZSTATIC_RENDITION = re.compile(
    r"/(\d+)x(\d+)([a-z]{0,4}(?:-\d+)?\.(?:jpe?g|png|webp))$", re.IGNORECASE
)


def is_mzstatic(host: str | None) -> bool:
    host = (host or "").lower()
    return host == "mzstatic.com" or host.endswith(".mzstatic.com")


def normalize_image(url: str | None) -> str | None:
    if not url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    if not is_mzstatic(parts.hostname):
        return url
    path = MZSTATIC_RENDITION.sub(
        lambda m: f"/{SQUARE_SIZE}x{SQUARE_SIZE}{m.group(3)}", parts.path
    )
    return urlunsplit(parts._replace(path=path))
