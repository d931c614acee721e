import os
from urllib.parse import urlsplit

# Characters that are unsafe (or awkward) in filenames on common platforms.
_INVALID_CHARS = ('"', "\\", "/", ":", "*", "?", "<", ">", "|", "-")


def url_to_filename(url: str, extension: str = "pdf") -> str:
    """Map *url* to a deterministic, filesystem-safe, lower-case filename.

    The name is built from host, path and query string, so two documents that
    share a basename on different paths do not collide::

        https://Example.com/docs/A-1.pdf?v=2  →  example.com__docs_a_1.pdf_v=2.pdf

    Raises:
        ValueError: if *url* cannot be parsed or has no host.
    """
    parsed = urlsplit(url)
    if not parsed.netloc:
        raise ValueError(f"Cannot derive a filename from {url!r}: missing host.")

    filename = parsed.netloc
    if parsed.path:
        filename += "_" + parsed.path.replace("/", "_")
    if parsed.query:
        filename += "_" + parsed.query.replace("&", "_")

    for char in _INVALID_CHARS:
        filename = filename.replace(char, "_")

    suffix = "." + extension.lstrip(".")
    if os.path.splitext(filename)[1] != suffix:
        filename += suffix

    return filename.lower()
