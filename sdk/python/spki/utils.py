from __future__ import annotations

import base64
import os
import re
from typing import Tuple

PEM_LINE_WIDTH = 64
DEFAULT_PEM_SEARCH_RANGE = 4096

_PEM_BEGIN = b"-----BEGIN "
_PEM_BLOCK = re.compile(
    rb"-----BEGIN ([^\r\n-]+)-----\r?\n(.*?)-----END \1-----",
    re.DOTALL,
)


def utf8_encode(s: str) -> bytes:
    return s.encode("utf-8")


def uint64_from_be(b: bytes) -> int:
    if len(b) != 8:
        raise ValueError(f"uint64_from_be: expected 8 bytes, got {len(b)}")
    return int.from_bytes(b, byteorder="big", signed=False)


def pem_search_range() -> int:
    override = os.getenv("SPKI_PEM_SEARCH_RANGE")
    if override:
        try:
            value = int(override)
        except ValueError as exc:
            raise ValueError("SPKI_PEM_SEARCH_RANGE must be an integer") from exc
        if value <= 0:
            raise ValueError("SPKI_PEM_SEARCH_RANGE must be positive")
        return value
    return DEFAULT_PEM_SEARCH_RANGE


def maybe_der(data: bytes) -> bool:
    """
    True when data could start a DER SEQUENCE (constructed, universal tag 16).
    """
    return data[:1] == b"\x30"


def looks_like_pem(data: bytes, search_range: int | None = None) -> bool:
    if search_range is None:
        search_range = pem_search_range()
    return _PEM_BEGIN in data[:search_range]


def pem_encode(der: bytes, label: str) -> str:
    """
    Standard base64 body wrapped at 64 columns between BEGIN/END lines.
    """
    body = base64.b64encode(der).decode("ascii")
    lines = [body[i : i + PEM_LINE_WIDTH] for i in range(0, len(body), PEM_LINE_WIDTH)]
    return "".join([
        f"-----BEGIN {label}-----\n",
        *(line + "\n" for line in lines),
        f"-----END {label}-----\n",
    ])


def pem_decode(data: bytes) -> Tuple[str, bytes]:
    """
    Returns (label, decoded_body) of the first PEM block in data.
    Raises ValueError when no well-formed block is present.
    """
    match = _PEM_BLOCK.search(data)
    if match is None:
        raise ValueError("pem_decode: no PEM block found")

    label = match.group(1).decode("ascii", errors="strict")
    body = b"".join(match.group(2).split())
    # binascii.Error is a ValueError
    return label, base64.b64decode(body, validate=True)
