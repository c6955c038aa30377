"""Recursive length prefix encoding."""

from __future__ import annotations

from typing import Union

Item = Union[bytes, list]


def _length_prefix(length: int, short_base: int, long_base: int) -> bytes:
    if length <= 55:
        return bytes([short_base + length])
    size = length.to_bytes((length.bit_length() + 7) // 8, "big")
    return bytes([long_base + len(size)]) + size


def encode(item) -> bytes:
    """Encode bytes, non-negative ints or (nested) lists of them."""
    if isinstance(item, bool):
        raise TypeError("cannot encode bool")
    if isinstance(item, int):
        if item < 0:
            raise ValueError("cannot encode negative integer")
        item = item.to_bytes((item.bit_length() + 7) // 8, "big")
    if isinstance(item, (bytes, bytearray)):
        data = bytes(item)
        if len(data) == 1 and data[0] < 0x80:
            return data
        return _length_prefix(len(data), 0x80, 0xB7) + data
    if isinstance(item, (list, tuple)):
        body = b"".join(encode(element) for element in item)
        return _length_prefix(len(body), 0xC0, 0xF7) + body
    raise TypeError(f"cannot encode {type(item).__name__}")


def _read_length(data: bytes, pos: int, size: int) -> int:
    end = pos + size
    if end > len(data):
        raise ValueError("rlp: value size exceeds available input length")
    return int.from_bytes(data[pos:end], "big")


def _decode_at(data: bytes, pos: int) -> tuple[Item, int]:
    if pos >= len(data):
        raise ValueError("rlp: unexpected end of input")
    prefix = data[pos]
    pos += 1
    if prefix < 0x80:
        return bytes([prefix]), pos
    if prefix <= 0xB7:
        length = prefix - 0x80
    elif prefix < 0xC0:
        size = prefix - 0xB7
        length = _read_length(data, pos, size)
        pos += size
    elif prefix <= 0xF7:
        length = prefix - 0xC0
    else:
        size = prefix - 0xF7
        length = _read_length(data, pos, size)
        pos += size
    end = pos + length
    if end > len(data):
        raise ValueError("rlp: value size exceeds available input length")
    if prefix < 0xC0:
        return data[pos:end], end
    items = []
    while pos < end:
        element, pos = _decode_at(data, pos)
        items.append(element)
    if pos != end:
        raise ValueError("rlp: list element exceeds list length")
    return items, end


def decode(data: bytes) -> Item:
    """Decode a single RLP item; trailing bytes are an error."""
    item, pos = _decode_at(bytes(data), 0)
    if pos != len(data):
        raise ValueError("rlp: input contains more than one value")
    return item