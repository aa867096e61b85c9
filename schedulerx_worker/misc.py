"""Assorted helpers: message manifests, path templates and id counters."""

import itertools
import random
import re
import threading
from typing import List, Optional
from urllib.parse import SplitResult, urlsplit

_MANIFEST_SPLITTER = "$"
_PATH_TPL_PREFIX = "$"
_BASE64_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789+~"
_MAX_INT32 = 2**31 - 1

_seed = 1000
_seed_lock = threading.Lock()

_uid: Optional[int] = None
_uid_lock = threading.Lock()

_delivery_ids = itertools.count(1)
_delivery_lock = threading.Lock()

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def get_msg_type(manifest: str) -> str:
    """Return the simple message type after ``$`` in a manifest."""
    if manifest and _MANIFEST_SPLITTER in manifest:
        parts = manifest.split(_MANIFEST_SPLITTER)
        if len(parts) == 2:
            return parts[1]
    raise ValueError(f"Invalid manifest: {manifest} ")


def shuffle_strings(items: List[str]) -> List[str]:
    """Shuffle a list in place and return it."""
    random.shuffle(items)
    return items


def base64_encode(value: int, prefix: str) -> str:
    """Append the 6-bit digits of ``value``, least significant first, to ``prefix``."""
    if value < 0:
        raise ValueError(f"value must not be negative, got {value}")
    digits = [prefix]
    while True:
        digits.append(_BASE64_CHARS[value & 63])
        value >>= 6
        if value == 0:
            return "".join(digits)


def gen_path_tpl() -> str:
    """Return a fresh short path segment for a temporary actor path."""
    global _seed
    with _seed_lock:
        if _seed == _MAX_INT32:
            _seed = 0
        _seed += 1
        current = _seed
    return base64_encode(current, _PATH_TPL_PREFIX)


def get_handshake_uid() -> int:
    """Return this process's handshake uid as an unsigned 64-bit value."""
    global _uid
    with _uid_lock:
        if not _uid:
            _uid = random.randint(-(2**31), _MAX_INT32) & 0xFFFFFFFFFFFFFFFF
        return _uid


def get_delivery_id() -> int:
    """Return the next delivery id, starting at 1."""
    with _delivery_lock:
        return next(_delivery_ids)


def _port_is_valid(parts: SplitResult) -> bool:
    try:
        port = parts.port
    except ValueError:
        return False
    return port is None or port >= 0


def is_valid_domain(domain: str) -> bool:
    """Tell whether ``domain`` is an absolute URL with a scheme and a host."""
    if not domain:
        return False
    scheme, sep, _ = domain.partition(":")
    if not sep or not _SCHEME_RE.fullmatch(scheme):
        return False
    if _BAD_ESCAPE_RE.search(domain):
        return False
    if any(ch.isspace() or ord(ch) < 0x20 or ord(ch) == 0x7F for ch in domain):
        return False
    try:
        parts = urlsplit(domain)
    except ValueError:
        return False
    if not _port_is_valid(parts):
        return False
    return bool(parts.scheme) and bool(parts.netloc)