# ABOUTME: Path normalization for hrefs found inside a package document.
# ABOUTME: Resolves relative references against the containing document's location.

import posixpath
from urllib.parse import unquote, urlsplit


def normalize(base_path: str, href: str) -> str:
    """Resolve `href` relative to the document at `base_path`.

    Returns an absolute path within the package (leading "/"). Hrefs with a
    URL scheme point outside the package and are returned unchanged.
    """
    href = href.strip()
    if urlsplit(href).scheme:
        return href

    path, sep, fragment = href.partition("#")
    path = unquote(path)
    if path.startswith("/"):
        resolved = path
    else:
        resolved = posixpath.join(posixpath.dirname(base_path.lstrip("/")), path)

    normalized = posixpath.normpath("/" + resolved.lstrip("/"))
    if path.endswith("/") and normalized != "/":
        normalized += "/"
    return normalized + sep + fragment
