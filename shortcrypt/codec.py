"""Text codecs for ciphers.

A cipher is packed into one big-endian bit stream: the 4-bit base first,
then the body bytes, zero padded at the end to a whole number of symbols.
Both alphabets have a power-of-two size, so no padding characters are
ever emitted and the text length depends only on the plaintext length.
"""
from __future__ import annotations

import logging
import string
from typing import Dict, Tuple

from .errors import InvalidCharacter, InvalidLength
from .utils import BASE_BITS, BASE_RANGE, is_valid_base

logger = logging.getLogger(__name__)

# RFC 4648 base64url, never padded
URL_SAFE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits + "-_"
# RFC 4648 base32, all symbols valid in QR alphanumeric mode
QR_ALPHANUMERIC_ALPHABET = string.ascii_uppercase + "234567"


class BitCodec:
    """Regroups a packed (base, body) bit stream into symbols of one alphabet."""

    def __init__(self, alphabet: str):
        size = len(alphabet)
        if size < 2 or size & (size - 1):
            raise ValueError('alphabet size must be a power of two')
        if len(set(alphabet)) != size:
            raise ValueError('alphabet symbols must be unique')
        self.alphabet = alphabet
        self.bits = size.bit_length() - 1
        self._index: Dict[str, int] = {c: i for i, c in enumerate(alphabet)}

    def __repr__(self):
        return f'{type(self).__name__}(bits={self.bits})'

    def encoded_length(self, body_length: int) -> int:
        return -(-(BASE_BITS + 8 * body_length) // self.bits)

    def encode(self, base: int, body: bytes) -> str:
        if not is_valid_base(base):
            raise ValueError(f'base must be an int in range 0..{BASE_RANGE - 1}')
        mask = (1 << self.bits) - 1
        out = []
        # v never holds more than bits + 8 bits
        v = base
        nbits = BASE_BITS
        for byte in body:
            v = (v << 8) | byte
            nbits += 8
            while nbits >= self.bits:
                nbits -= self.bits
                out.append(self.alphabet[(v >> nbits) & mask])
            v &= (1 << nbits) - 1
        if nbits:
            out.append(self.alphabet[(v << (self.bits - nbits)) & mask])
        return ''.join(out)

    def decode(self, text: str) -> Tuple[int, bytes]:
        if not isinstance(text, str):
            raise TypeError('encoded text must be a str')
        symbols = []
        for position, char in enumerate(text):
            symbol = self._index.get(char)
            if symbol is None:
                logger.debug("rejected symbol at position %d", position)
                raise InvalidCharacter(char, position)
            symbols.append(symbol)

        count = len(symbols)
        body_length = (count * self.bits - BASE_BITS) // 8
        if count == 0 or self.encoded_length(body_length) != count:
            raise InvalidLength(count)

        # the first symbol always carries the whole base
        nbits = self.bits - BASE_BITS
        base = symbols[0] >> nbits
        v = symbols[0] & ((1 << nbits) - 1)
        body = bytearray()
        for symbol in symbols[1:]:
            v = (v << self.bits) | symbol
            nbits += self.bits
            if nbits >= 8:
                nbits -= 8
                body.append(v >> nbits)
                v &= (1 << nbits) - 1
        if v:
            # padding bits are always zero in encoder output
            raise InvalidCharacter(text[-1], count - 1)
        return base, bytes(body)


URL_SAFE = BitCodec(URL_SAFE_ALPHABET)
QR_ALPHANUMERIC = BitCodec(QR_ALPHANUMERIC_ALPHABET)
