"""
Parse IPFS Content Identifiers (CIDs).

CIDv0: 46 character Base58btc string starting with "Qm". The decoded
payload is a bare sha2-256 multihash (0x12 0x20 + 32 digest bytes); codec
is always dag-pb.

CIDv1: multibase prefix + encoded bytes, where the bytes are
    varint(1) | varint(codec) | varint(hash function) | varint(hash length) | digest
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Optional

from cid_errors import (
    CIDError,
    DigestLengthMismatch,
    InvalidCIDv0,
    UnrecognizedCIDFormat,
    UnsupportedCIDVersion,
)
from cid_multibase import (
    MULTIBASE_NAMES,
    decode_base58,
    encode_base58,
    multibase_decode,
    multibase_encode,
)
from cid_varint import read_varint, write_varint

DAG_PB = 0x70
SHA2_256 = 0x12
SHA2_256_LENGTH = 32

CIDV0_LENGTH = 46
CIDV0_PREFIX = "Qm"
CIDV0_HEADER = bytes([SHA2_256, SHA2_256_LENGTH])

# Content codecs (multicodec table, tag "ipld" and friends)
CODEC_NAMES = MappingProxyType({
    0x51: "cbor",
    0x55: "raw",
    0x70: "dag-pb",
    0x71: "dag-cbor",
    0x72: "libp2p-key",
    0x78: "git-raw",
    0x85: "dag-jose",
    0x0129: "dag-json",
    0x0200: "json",
})

# Multihash function codes
MULTIHASH_NAMES = MappingProxyType({
    0x00: "identity",
    0x11: "sha1",
    0x12: "sha2-256",
    0x13: "sha2-512",
    0x14: "sha3-512",
    0x15: "sha3-384",
    0x16: "sha3-256",
    0x17: "sha3-224",
    0x1b: "keccak-256",
    0x1e: "blake3",
    0x1012: "sha2-256-trunc254-padded",
    0xb220: "blake2b-256",
    0xb240: "blake2b-512",
})


class CIDVersion(str, Enum):
    V0 = "v0"
    V1 = "v1"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Multihash:
    function_code: int
    digest_length: int
    digest: bytes

    def __post_init__(self):
        if len(self.digest) != self.digest_length:
            raise DigestLengthMismatch(self.digest_length, len(self.digest))

    @property
    def name(self) -> Optional[str]:
        return MULTIHASH_NAMES.get(self.function_code)

    def to_bytes(self) -> bytes:
        return write_varint(self.function_code) + write_varint(self.digest_length) + self.digest


@dataclass(frozen=True)
class CID:
    version: int
    codec: int
    multihash: Multihash

    def __post_init__(self):
        if self.version not in (0, 1):
            raise UnsupportedCIDVersion(self.version)
        if self.version == 0 and not self.is_v0_compatible:
            raise InvalidCIDv0("CIDv0 must be dag-pb with a sha2-256/32 multihash")

    @property
    def codec_name(self) -> Optional[str]:
        return CODEC_NAMES.get(self.codec)

    def to_v1(self) -> "CID":
        if self.version == 1:
            return self
        return CID(1, self.codec, self.multihash)

    @property
    def is_v0_compatible(self) -> bool:
        return (
            self.codec == DAG_PB
            and self.multihash.function_code == SHA2_256
            and self.multihash.digest_length == SHA2_256_LENGTH
        )

    def to_v0(self) -> "CID":
        if self.version == 0:
            return self
        return CID(0, self.codec, self.multihash)

    def to_bytes(self) -> bytes:
        """Canonical CIDv1 binary form; v0 CIDs are upgraded losslessly."""
        return write_varint(1) + write_varint(self.codec) + self.multihash.to_bytes()

    def encode(self, base: Optional[str] = None) -> str:
        """
        Render the CID as text.

        CIDv0 renders as bare Base58btc of its multihash unless a base is
        requested, in which case it is upgraded to v1 first.
        """
        if self.version == 0 and base is None:
            return encode_base58(self.multihash.to_bytes())
        return multibase_encode(self.to_bytes(), base or "base32")

    def __str__(self):
        return self.encode()


def _route(cid: str) -> CIDVersion:
    if cid.startswith(CIDV0_PREFIX):
        return CIDVersion.V0
    if cid and cid[0] in MULTIBASE_NAMES:
        return CIDVersion.V1
    return CIDVersion.UNKNOWN


def _parse_cidv0(cid: str) -> CID:
    raw = decode_base58(cid)
    if len(cid) != CIDV0_LENGTH:
        raise InvalidCIDv0(
            f"CIDv0 must be {CIDV0_LENGTH} characters (got {len(cid)})"
        )
    if len(raw) != len(CIDV0_HEADER) + SHA2_256_LENGTH:
        raise InvalidCIDv0(f"CIDv0 must decode to 34 bytes (got {len(raw)})")
    if raw[:2] != CIDV0_HEADER:
        raise InvalidCIDv0(
            f"CIDv0 multihash header must be 0x1220 (got 0x{raw[:2].hex()})"
        )
    return CID(0, DAG_PB, Multihash(SHA2_256, SHA2_256_LENGTH, raw[2:]))


def cid_from_bytes(raw: bytes) -> CID:
    """Build a CID from its CIDv1 binary form."""
    version, consumed = read_varint(raw, 0)
    offset = consumed
    if version != 1:
        raise UnsupportedCIDVersion(version)
    codec, consumed = read_varint(raw, offset)
    offset += consumed
    function_code, consumed = read_varint(raw, offset)
    offset += consumed
    digest_length, consumed = read_varint(raw, offset)
    offset += consumed
    digest = raw[offset:]
    if len(digest) != digest_length:
        raise DigestLengthMismatch(digest_length, len(digest))
    return CID(1, codec, Multihash(function_code, digest_length, digest))


def _parse_cidv1(cid: str) -> CID:
    _, raw = multibase_decode(cid)
    return cid_from_bytes(raw)


def parse_cid(cid: str) -> CID:
    cid = (cid or "").strip()
    version = _route(cid)
    if version is CIDVersion.V0:
        return _parse_cidv0(cid)
    if version is CIDVersion.V1:
        return _parse_cidv1(cid)
    if not cid:
        raise UnrecognizedCIDFormat("CID is empty")
    raise UnrecognizedCIDFormat(f"Unrecognized CID format: {cid[:12]!r}")


def detect_cid_version(cid) -> CIDVersion:
    """Classify a CID string without raising; malformed input is 'unknown'."""
    if not isinstance(cid, str):
        return CIDVersion.UNKNOWN
    try:
        parsed = parse_cid(cid)
    except CIDError:
        return CIDVersion.UNKNOWN
    return CIDVersion.V0 if parsed.version == 0 else CIDVersion.V1
