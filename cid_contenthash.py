"""
Encode IPFS CIDs as ENS ``contenthash`` values (EIP-1577) and back.

Binary layout:
  Namespace (1B) | Version (1B) | varint(1) | varint(codec) | varint(hash fn) | varint(hash len) | digest
  0xe3 (ipfs)    | 0x01         | CIDv1 binary form ...

CIDv0 inputs are upgraded to the CIDv1 binary form before the namespace is
attached, so a v0 and v1 CID of the same content give the same bytes.
"""

from string import hexdigits
from types import MappingProxyType
from typing import Optional, Union

from cid_codec import CID, cid_from_bytes, parse_cid
from cid_errors import InvalidContentHash, UnsupportedNamespace

IPFS_NAMESPACE = 0xe3
IPNS_NAMESPACE = 0xe5
CONTENT_HASH_VERSION = 0x01
EMPTY_CONTENT_HASH = "0x"

NAMESPACES = MappingProxyType({
    "ipfs": IPFS_NAMESPACE,
    "ipns": IPNS_NAMESPACE,
})
NAMESPACE_NAMES = MappingProxyType({code: name for name, code in NAMESPACES.items()})


def encode_content_hash_bytes(cid: CID, namespace: str = "ipfs") -> bytes:
    """Serialize a parsed CID into the EIP-1577 byte layout."""
    code = NAMESPACES.get(namespace)
    if code is None:
        raise UnsupportedNamespace(f"Unsupported content hash namespace {namespace!r}")
    return bytes([code, CONTENT_HASH_VERSION]) + cid.to_bytes()


def encode_content_hash(cid: Optional[str]) -> str:
    """
    Convert a CID string to a 0x-prefixed lowercase hex content hash.

    Empty input gives the bare "0x" sentinel. Malformed input raises a
    CIDError subclass; it never degrades to "0x".
    """
    if cid is None or not cid.strip():
        return EMPTY_CONTENT_HASH
    return "0x" + encode_content_hash_bytes(parse_cid(cid)).hex()


def _content_hash_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    hex_part = value.strip()
    if hex_part[:2] in ("0x", "0X"):
        hex_part = hex_part[2:]
    if any(c not in hexdigits for c in hex_part):
        raise InvalidContentHash(f"Content hash is not valid hex: {value!r}")
    try:
        return bytes.fromhex(hex_part)
    except ValueError:
        raise InvalidContentHash(f"Content hash is not valid hex: {value!r}")


def _split_namespace(raw: bytes):
    if len(raw) < 2:
        raise InvalidContentHash(f"Content hash is too short ({len(raw)} bytes)")
    name = NAMESPACE_NAMES.get(raw[0])
    if name is None:
        raise UnsupportedNamespace(f"Unsupported content hash namespace 0x{raw[0]:02x}")
    if raw[1] != CONTENT_HASH_VERSION:
        raise InvalidContentHash(
            f"Content hash version must be 0x{CONTENT_HASH_VERSION:02x} (got 0x{raw[1]:02x})"
        )
    return name, raw[2:]


def content_hash_namespace(value: Union[str, bytes]) -> str:
    """Return the namespace name ("ipfs" or "ipns") of a content hash."""
    name, _ = _split_namespace(_content_hash_bytes(value))
    return name


def decode_content_hash(value: Union[str, bytes, None]) -> Optional[CID]:
    """
    Parse a content hash back into a CID.

    Returns None for the empty "0x" sentinel.
    """
    if value is None:
        return None
    raw = _content_hash_bytes(value)
    if not raw:
        return None
    _, cid_bytes = _split_namespace(raw)
    return cid_from_bytes(cid_bytes)


def describe_content_hash(cid: CID, namespace: str = "ipfs") -> str:
    """Return a human-readable field-by-field breakdown of the encoding."""
    mh = cid.multihash
    lines = [
        f"  Namespace        : 0x{NAMESPACES.get(namespace, 0):02x}  ({namespace})",
        f"  Version          : 0x{CONTENT_HASH_VERSION:02x}",
        f"  CID version      : 1  (source CIDv{cid.version})",
        f"  Codec            : 0x{cid.codec:02x}  ({cid.codec_name or 'unknown'})",
        f"  Hash function    : 0x{mh.function_code:02x}  ({mh.name or 'unknown'})",
        f"  Digest length    : {mh.digest_length} bytes",
        f"  Digest           : 0x{mh.digest.hex()}",
    ]
    return "\n".join(lines)
