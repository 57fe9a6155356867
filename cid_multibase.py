"""
Multibase text encodings used by CIDs.

CIDv0 strings are bare Base58btc. CIDv1 strings carry a one character
multibase prefix (``b`` for lowercase Base32 in practice) followed by the
encoded bytes.
"""

import base64
from types import MappingProxyType
from typing import Tuple

import base58

from cid_errors import InvalidCharacter, InvalidLength, UnsupportedMultibase

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
BASE32_ALPHABET = "abcdefghijklmnopqrstuvwxyz234567"
BASE16_ALPHABET = "0123456789abcdef"

# Symbols left over in a final partial Base32 group that can't come from
# any whole number of bytes
_BASE32_BAD_REMAINDERS = (1, 3, 6)

# Registered multibase prefixes (multiformats/multibase multibase.csv)
MULTIBASE_NAMES = MappingProxyType({
    "0": "base2",
    "7": "base8",
    "9": "base10",
    "f": "base16",
    "F": "base16upper",
    "v": "base32hex",
    "V": "base32hexupper",
    "t": "base32hexpad",
    "T": "base32hexpadupper",
    "b": "base32",
    "B": "base32upper",
    "c": "base32pad",
    "C": "base32padupper",
    "h": "base32z",
    "k": "base36",
    "K": "base36upper",
    "z": "base58btc",
    "Z": "base58flickr",
    "m": "base64",
    "M": "base64pad",
    "u": "base64url",
    "U": "base64urlpad",
    "p": "proquint",
})


def _check_alphabet(s: str, alphabet: str, name: str) -> None:
    for index, char in enumerate(s):
        if char not in alphabet:
            raise InvalidCharacter(char, index, name)


def decode_base58(s: str) -> bytes:
    """Decode Base58btc; each leading '1' becomes a 0x00 byte."""
    _check_alphabet(s, BASE58_ALPHABET, "base58btc")
    return base58.b58decode(s)


def encode_base58(data: bytes) -> str:
    return base58.b58encode(data).decode('ascii')


def decode_base32(s: str) -> bytes:
    """
    Decode RFC4648 Base32, lowercase, without padding.

    Every 8 symbols carry 5 bytes; a final partial group yields as many
    whole bytes as its bits allow, and its leftover bits must be zero.
    """
    _check_alphabet(s, BASE32_ALPHABET, "base32")
    remainder = len(s) % 8
    if remainder in _BASE32_BAD_REMAINDERS:
        raise InvalidLength(
            f"Base32 input of {len(s)} symbols ends in a partial group of {remainder}"
        )
    # The last symbol must not carry bits past the final whole byte
    unused_bits = (5 * len(s)) % 8
    if unused_bits and BASE32_ALPHABET.index(s[-1]) & ((1 << unused_bits) - 1):
        raise InvalidCharacter(s[-1], len(s) - 1, "base32")
    padding = "=" * ((8 - remainder) % 8)
    return base64.b32decode(s.upper() + padding)


def encode_base32(data: bytes) -> str:
    return base64.b32encode(data).decode('ascii').rstrip("=").lower()


def decode_base16(s: str) -> bytes:
    _check_alphabet(s, BASE16_ALPHABET, "base16")
    if len(s) % 2:
        raise InvalidLength(f"Base16 input has odd length {len(s)}")
    return bytes.fromhex(s)


def encode_base16(data: bytes) -> str:
    return data.hex()


def _decode_base32upper(s: str) -> bytes:
    _check_alphabet(s, BASE32_ALPHABET.upper(), "base32upper")
    return decode_base32(s.lower())


def _decode_base16upper(s: str) -> bytes:
    _check_alphabet(s, BASE16_ALPHABET.upper(), "base16upper")
    return decode_base16(s.lower())


DECODERS = MappingProxyType({
    "base32": decode_base32,
    "base32upper": _decode_base32upper,
    "base58btc": decode_base58,
    "base16": decode_base16,
    "base16upper": _decode_base16upper,
})

ENCODERS = MappingProxyType({
    "base32": encode_base32,
    "base32upper": lambda data: encode_base32(data).upper(),
    "base58btc": encode_base58,
    "base16": encode_base16,
    "base16upper": lambda data: encode_base16(data).upper(),
})

PREFIXES = MappingProxyType({name: prefix for prefix, name in MULTIBASE_NAMES.items()})


def multibase_decode(s: str) -> Tuple[str, bytes]:
    """
    Consume the multibase prefix of ``s`` and decode the rest.

    Returns:
        (base_name, decoded_bytes)
    """
    if not s:
        raise InvalidLength("Multibase string is empty")
    prefix = s[0]
    name = MULTIBASE_NAMES.get(prefix)
    decoder = DECODERS.get(name)
    if decoder is None:
        raise UnsupportedMultibase(prefix, name)
    return name, decoder(s[1:])


def multibase_encode(data: bytes, base: str = "base32") -> str:
    encoder = ENCODERS.get(base)
    if encoder is None:
        raise UnsupportedMultibase(PREFIXES.get(base, "?"), base)
    return PREFIXES[base] + encoder(data)
