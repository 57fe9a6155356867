#!/usr/bin/env python3
"""
Convert IPFS CIDs to ENS contenthash values (EIP-1577).

Input: CIDv0 (Qm...) or CIDv1 (bafy...) strings
Output: 0x-prefixed hex content hash, one per line

Process:
1. Decode the CID text (Base58btc for v0, multibase for v1)
2. Re-serialize it in CIDv1 binary form
3. Prepend e3 01 (ipfs namespace + content hash version)

With --decode the arguments are content hashes and the CIDv1 (base32)
string is printed instead.
"""

import argparse
import sys

from cid_codec import parse_cid
from cid_contenthash import (
    content_hash_namespace,
    decode_content_hash,
    describe_content_hash,
    encode_content_hash,
)
from cid_errors import CIDError


def convert(value: str, decode: bool = False, breakdown: bool = False) -> str:
    namespace = "ipfs"
    if decode:
        cid = decode_content_hash(value)
        if cid is None:
            return ""
        output = cid.encode("base32")
        namespace = content_hash_namespace(value)
    else:
        output = encode_content_hash(value)
        if output == "0x":
            return output
        cid = parse_cid(value)
    if breakdown:
        output += "\n" + describe_content_hash(cid, namespace)
    return output


def main(argv=None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Convert IPFS CIDs to ENS contenthash values (EIP-1577).'
    )
    parser.add_argument(
        'values',
        nargs='+',
        help='CIDs to encode (or content hashes with --decode)'
    )
    parser.add_argument(
        '--decode',
        action='store_true',
        help='Treat arguments as content hashes and print CIDv1 strings'
    )
    parser.add_argument(
        '--breakdown',
        action='store_true',
        help='Print a field-by-field breakdown after each result'
    )

    args = parser.parse_args(argv)

    for value in args.values:
        # Remove surrounding whitespace from input
        value = value.strip()
        try:
            print(convert(value, decode=args.decode, breakdown=args.breakdown))
        except CIDError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
