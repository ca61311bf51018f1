from __future__ import annotations
from typing import Optional


def build_origin(account: str, insecure: bool) -> str:
    """Return scheme://host for an account FQDN, keeping an explicit scheme if given."""
    if "://" in account:
        return account.rstrip("/")
    scheme = "http" if insecure else "https"
    return f"{scheme}://{account.strip('/')}"


def apply_prefix(prefix: Optional[str], path: str) -> str:
    """Join the client path prefix with a request path; result always starts with '/'."""
    p = path if path.startswith("/") else f"/{path}"
    if not prefix:
        return p
    pre = prefix.strip("/")
    if not pre:
        return p
    return f"/{pre}{p}" if p != "/" else f"/{pre}"
