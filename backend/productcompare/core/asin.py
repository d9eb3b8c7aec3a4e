from __future__ import annotations

import re
from urllib.parse import parse_qs, urlparse

from productcompare.core.errors import InvalidProductUrl

ASIN_RE = re.compile(r"^[A-Z0-9]{10}$")

# Checked in order; /dp/ is by far the most common
PATH_PATTERNS = [
    re.compile(r"/dp/([A-Z0-9]{10})"),
    re.compile(r"/product/([A-Z0-9]{10})"),
    re.compile(r"/gp/product/([A-Z0-9]{10})"),
]
FALLBACK_PATTERN = re.compile(r"[A-Z0-9]{10}")


def extract_asin(value: str) -> str:
    """
    Accepts either a bare ASIN or an Amazon product URL:
      B07ZPKN6YR
      https://www.amazon.com/Some-Name/dp/B07ZPKN6YR/ref=sr_1_1
      https://www.amazon.com/gp/product/B07ZPKN6YR
      https://www.amazon.com/item?asin=B07ZPKN6YR
    """
    s = (value or "").strip()
    if ASIN_RE.match(s):
        return s

    parsed = urlparse(s)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidProductUrl("Invalid Amazon URL", details=s)

    for pat in PATH_PATTERNS:
        m = pat.search(parsed.path)
        if m:
            return m.group(1)

    asin = parse_qs(parsed.query).get("asin")
    if asin and asin[0].strip():
        return asin[0].strip()

    m = FALLBACK_PATTERN.search(parsed.path)
    if m:
        return m.group(0)

    raise InvalidProductUrl("Could not find ASIN in URL", details=s)
