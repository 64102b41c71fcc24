"""Exceptions raised by shortcrypt.

Decoding and decryption are the only fallible operations. A cipher decrypted
with the wrong key does NOT raise: there is no integrity check, so it simply
yields different bytes.
"""


class ShortCryptError(Exception):
    pass


class InvalidCharacter(ShortCryptError, ValueError):
    """Encoded text contains a symbol outside the codec's alphabet."""

    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f'invalid character {char!r} at position {position}')


class InvalidLength(ShortCryptError, ValueError):
    """Encoded text length cannot hold a (base, body) packing."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f'encoded length {length} does not match any cipher size')


class DecryptionError(ShortCryptError):
    pass
