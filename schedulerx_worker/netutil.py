"""Network address helpers and worker id generation."""

import ipaddress
import logging
import os
import re
import socket
import threading
import time
from typing import Iterator, Optional, Tuple

_log = logging.getLogger(__name__)

_PORT_RE = re.compile(r"[+-]?[0-9]+")

_worker_id: Optional[str] = None
_worker_id_lock = threading.Lock()


def _split_host_port(addr: str) -> Tuple[str, str]:
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0:
            raise ValueError("missing ']' in address")
        host, rest = addr[1:end], addr[end + 1:]
        if not rest:
            raise ValueError("missing port in address")
        if not rest.startswith(":") or ":" in rest[1:]:
            raise ValueError("too many colons in address" if ":" in rest[1:] else "missing port in address")
        return host, rest[1:]
    if ":" not in addr:
        raise ValueError("missing port in address")
    host, port = addr.rsplit(":", 1)
    if ":" in host:
        raise ValueError("too many colons in address")
    if "[" in host or "]" in host:
        raise ValueError("unexpected bracket in address")
    return host, port


def parse_ip_addr(addr: str) -> Tuple[str, int]:
    """Split ``host:port`` into a host string and an integer port."""
    try:
        host, port_text = _split_host_port(addr)
        if not _PORT_RE.fullmatch(port_text):
            raise ValueError(f"invalid port {port_text!r}")
    except ValueError as exc:
        raise ValueError(f"Invalid addr: {addr}, err:{exc} ") from None
    return host, int(port_text)


def _candidate_addresses() -> Iterator[str]:
    try:
        _, _, addresses = socket.gethostbyname_ex(socket.gethostname())
    except OSError:
        addresses = []
    yield from addresses
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            # Connecting a UDP socket sends nothing; it only picks a route.
            sock.connect(("192.0.2.1", 80))
            local = sock.getsockname()[0]
    except OSError:
        return
    yield local


def get_ipv4_host() -> str:
    """Return the first non-loopback IPv4 address of this machine."""
    for candidate in _candidate_addresses():
        try:
            ip = ipaddress.ip_address(candidate)
        except ValueError:
            continue
        if ip.version == 4 and not ip.is_loopback and not ip.is_unspecified:
            return str(ip)
    raise OSError("cannot find valid ipv4 addr")


def _format_ipv4(host: str) -> str:
    return "".join(f"{int(segment):03d}" for segment in host.split("."))


def get_format_ipv4_addr() -> str:
    """Return the local IPv4 address with each octet padded to three digits."""
    return _format_ipv4(get_ipv4_host())


def get_worker_id() -> str:
    """Return this process's worker id, computed once; empty if no address is found."""
    global _worker_id
    with _worker_id_lock:
        if _worker_id is None:
            try:
                formatted = get_format_ipv4_addr()
            except OSError as exc:
                _log.warning(
                    "Generate workerId failed due to get format ipv4 addr failed, err=%s", exc
                )
                _worker_id = ""
            else:
                stamp = int(time.time() * 1000) % 100000
                _worker_id = "_".join([formatted, str(os.getpid()), str(stamp)])
        return _worker_id