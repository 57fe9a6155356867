"""Unsigned LEB128 varints as used by multicodec and multihash prefixes."""

from typing import Tuple

from cid_errors import TruncatedVarint, VarintOverflow

# multiformats unsigned-varint caps encodings at 9 bytes (63 bits)
MAX_VARINT_BYTES = 9


def write_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("value must be non-negative")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def read_varint(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Read one varint starting at ``offset``.

    Returns:
        (value, bytes_consumed)
    """
    value = 0
    shift = 0
    pos = offset
    while True:
        if pos >= len(data):
            raise TruncatedVarint(
                f"Varint at offset {offset} ends after {pos - offset} byte(s)"
            )
        if pos - offset >= MAX_VARINT_BYTES:
            raise VarintOverflow(
                f"Varint at offset {offset} is longer than {MAX_VARINT_BYTES} bytes"
            )
        byte = data[pos]
        value |= (byte & 0x7F) << shift
        pos += 1
        if not byte & 0x80:
            return value, pos - offset
        shift += 7
