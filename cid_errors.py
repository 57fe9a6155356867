"""Errors raised while decoding CIDs and ENS content hashes.

Every error is a ValueError so callers that already catch ValueError for
malformed input keep working. ``code`` is a stable identifier used in API
responses.
"""

from typing import Optional


class CIDError(ValueError):
    """Base class for all CID / content hash decoding failures"""

    code = "cid_error"


class InvalidCharacter(CIDError):
    code = "invalid_character"

    def __init__(self, char: str, index: int, alphabet: str):
        self.char = char
        self.index = index
        self.alphabet = alphabet
        super().__init__(
            f"Invalid {alphabet} character {char!r} at position {index}"
        )


class InvalidLength(CIDError):
    code = "invalid_length"


class TruncatedVarint(CIDError):
    code = "truncated_varint"


class VarintOverflow(CIDError):
    code = "varint_overflow"


class UnsupportedMultibase(CIDError):
    code = "unsupported_multibase"

    def __init__(self, prefix: str, name: Optional[str] = None):
        self.prefix = prefix
        self.name = name
        if name:
            message = f"Multibase {name!r} (prefix {prefix!r}) is not supported"
        else:
            message = f"Unknown multibase prefix {prefix!r}"
        super().__init__(message)


class UnsupportedCIDVersion(CIDError):
    code = "unsupported_cid_version"

    def __init__(self, version: int):
        self.version = version
        super().__init__(f"Unsupported CID version {version}, expected 0 or 1")


class DigestLengthMismatch(CIDError):
    code = "digest_length_mismatch"

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Multihash declares {expected} digest bytes, got {actual}"
        )


class InvalidCIDv0(CIDError):
    code = "invalid_cidv0"


class UnrecognizedCIDFormat(CIDError):
    code = "unrecognized_cid_format"


class InvalidContentHash(CIDError):
    code = "invalid_content_hash"


class UnsupportedNamespace(CIDError):
    code = "unsupported_namespace"
