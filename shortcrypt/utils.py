"""Utility helpers: key material derivation, keystream expansion, xor mixing."""
from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Tuple, Union

logger = logging.getLogger(__name__)

BASE_BITS = 4
BASE_RANGE = 1 << BASE_BITS
BLOCK_SIZE = hashlib.sha256().digest_size


def is_valid_base(base) -> bool:
    return isinstance(base, int) and not isinstance(base, bool) and 0 <= base < BASE_RANGE


def to_bytes(data: Union[str, bytes, bytearray, memoryview], name: str = 'plaintext') -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f'{name} must be str or bytes-like')


def _keystream_block(digest: bytes, base: int, counter: int) -> bytes:
    hasher = hashlib.sha256()
    hasher.update(digest)
    hasher.update(b"||")
    hasher.update(bytes([base]))
    hasher.update(b"||")
    hasher.update(counter.to_bytes(4, "big"))
    return hasher.digest()


@dataclass(frozen=True)
class KeyMaterial:
    """
    Immutable key schedule derived from a secret key.

    `table` holds the first keystream block for every base value so short
    plaintexts never hash at encryption time. Longer keystreams are extended
    block by block with the same counter-mode construction.
    """
    digest: bytes = field(repr=False)
    table: Tuple[bytes, ...] = field(repr=False)

    def keystream(self, base: int, length: int) -> bytes:
        """
        Deterministic keystream for `base`, `length` bytes long.
        Block c is SHA256(digest || base || c).
        """
        if length <= BLOCK_SIZE:
            return self.table[base][:length]
        out = bytearray(self.table[base])
        counter = 1
        while len(out) < length:
            out.extend(_keystream_block(self.digest, base, counter))
            counter += 1
        return bytes(out[:length])


def derive_key_material(key: Union[str, bytes]) -> KeyMaterial:
    """Hash `key` once and precompute one keystream block per base value."""
    key_bytes = to_bytes(key, name='key')
    if not key_bytes:
        raise ValueError('key must not be empty')
    digest = hashlib.sha256(key_bytes).digest()
    table = tuple(_keystream_block(digest, base, 0) for base in range(BASE_RANGE))
    logger.debug("derived key material (%d keystream blocks)", len(table))
    return KeyMaterial(digest=digest, table=table)


def xor_bytes(data: bytes, keystream: bytes) -> bytes:
    return bytes([b ^ k for b, k in zip(data, keystream)])
