import ipaddress
import socket
from urllib.parse import urlparse

ALLOWED_SCHEMES = {"http", "https"}


def _is_private_address(hostname: str) -> bool:
    """Return True if *hostname* resolves to a private, loopback, or link-local address."""
    try:
        infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror:
        return False

    for info in infos:
        # Strip IPv6 zone IDs (e.g. "::1%eth0" → "::1")
        raw_ip = info[4][0].split("%")[0]
        try:
            addr = ipaddress.ip_address(raw_ip)
        except ValueError:
            continue
        if addr.is_private or addr.is_loopback or addr.is_link_local or addr.is_reserved:
            return True
    return False


def validate_url(url: str, *, block_private: bool = False) -> None:
    """Raise ValueError if *url* is not an absolute http(s) URL with a host.

    With *block_private* set, URLs whose host resolves to an internal
    address are rejected as well.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        parsed.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as exc:
        raise ValueError(f"Malformed URL: {exc}") from exc

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    if not hostname:
        raise ValueError("URL must have a valid hostname.")

    if block_private and _is_private_address(hostname):
        raise ValueError("Requests to private/internal addresses are not allowed.")


def is_valid_url(url: str, *, block_private: bool = False) -> bool:
    try:
        validate_url(url, block_private=block_private)
    except ValueError:
        return False
    return True
