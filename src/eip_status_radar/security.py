from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlparse, urlunparse

SENSITIVE_PATTERNS = [
    re.compile(r"(?i)(authorization:)(\s*)(.+)"),
    re.compile(r"(?i)(cookie:)(\s*)(.+)"),
    re.compile(r"(?i)(token)(\s*[:=]\s*)([^\s]+)"),
]

_LOCAL_HOSTNAMES = {"localhost", "localhost.localdomain"}


def safe_log_text(text: str) -> str:
    out = str(text or "")
    for pat in SENSITIVE_PATTERNS:
        out = pat.sub(lambda m: f"{m.group(1)}{m.group(2)}***", out)
    return out


def _is_local_or_private_host(host: str) -> bool:
    h = (host or "").strip().lower().rstrip(".")
    if not h:
        return False
    if h in _LOCAL_HOSTNAMES or h.endswith(".local"):
        return True

    try:
        ip = ipaddress.ip_address(h)
    except ValueError:
        return False

    return bool(ip.is_private or ip.is_loopback or ip.is_link_local)


def validate_source_url(raw_url: str, *, service_name: str = "Data source") -> str:
    """
    Normalize and validate the graphs endpoint URL.

    - Only http(s).
    - Plain http is accepted for local/private hosts (dev servers) only.
    - Reject credentials in URL.
    """
    value = (raw_url or "").strip()
    if not value:
        raise ValueError(f"{service_name}: configure GRAPHS_API_URL.")

    parsed = urlparse(value)
    scheme = parsed.scheme.lower()
    if scheme not in {"http", "https"}:
        raise ValueError(f"{service_name}: only http(s) URLs are supported.")
    if not parsed.netloc or not parsed.hostname:
        raise ValueError(f"{service_name}: invalid URL.")
    if parsed.username or parsed.password:
        raise ValueError(f"{service_name}: do not embed credentials in the URL.")
    if scheme == "http" and not _is_local_or_private_host(parsed.hostname):
        raise ValueError(f"{service_name}: plain http is only allowed for local hosts.")

    cleaned = parsed._replace(fragment="", params="")
    return urlunparse(cleaned).rstrip("/")
