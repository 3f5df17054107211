"""Stable 32-bit string hashing used for partition keys.

Python's :func:`hash` is salted per process, so keys derived from it would
scatter the same hostname or logger across partitions after every restart.
The helpers here reproduce the ``31 * h + c`` polynomial over UTF-16 code
units with signed 32-bit wrap-around, which keeps keys identical across
processes and compatible with JVM producers writing to the same topic.
"""

from __future__ import annotations

import struct

_MASK = 0xFFFFFFFF


def string_hash(text: str) -> int:
    """Return the signed 32-bit polynomial hash of ``text``.

    Examples
    --------
    >>> string_hash("")
    0
    >>> string_hash("hello")
    99162322
    >>> string_hash("polygenelubricants")
    -2147483648
    """

    value = 0
    encoded = text.encode("utf-16-be")
    for index in range(0, len(encoded), 2):
        unit = (encoded[index] << 8) | encoded[index + 1]
        value = (31 * value + unit) & _MASK
    if value & 0x80000000:
        value -= 1 << 32
    return value


def hash_bytes(text: str) -> bytes:
    """Return the 4-byte big-endian encoding of :func:`string_hash`.

    Examples
    --------
    >>> hash_bytes("hello").hex()
    '05e918d2'
    """

    return struct.pack(">i", string_hash(text))


__all__ = ["hash_bytes", "string_hash"]
