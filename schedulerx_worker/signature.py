"""Request signature used by the management API."""

import base64
import hashlib
import hmac


def hmac_sha1_encrypt(text: str, key: str) -> str:
    """Sign ``text`` with ``key``: base64 of the hex HMAC-SHA1, stripped of ``+``, ``=`` and ``/``."""
    digest = hmac.new(key.encode(), text.encode(), hashlib.sha1).hexdigest()
    encoded = base64.b64encode(digest.encode("ascii")).decode("ascii")
    return encoded.replace("+", "").replace("=", "").replace("/", "")