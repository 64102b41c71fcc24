"""Core encryption/decryption functions and the ShortCrypt facade.

A cipher is a ``(base, body)`` tuple. The base is a 4-bit selector picked at
random per call; the body is the plaintext xor-ed with a keystream chosen by
the key and the base, so it is exactly as long as the plaintext. Encoded as
text the whole cipher costs only 4 bits more than the plaintext.

This is obfuscation, not authenticated encryption. Decrypting with the wrong
key, or decrypting tampered text, silently returns wrong bytes.
"""
from __future__ import annotations

import logging
import secrets
from typing import Optional, Tuple, Union

from .codec import BitCodec, QR_ALPHANUMERIC, URL_SAFE
from .errors import DecryptionError
from .utils import BASE_RANGE, KeyMaterial, derive_key_material, is_valid_base, to_bytes, xor_bytes

logger = logging.getLogger(__name__)

Cipher = Tuple[int, bytes]
Plaintext = Union[str, bytes, bytearray, memoryview]

_system_random = secrets.SystemRandom()


def encrypt(material: KeyMaterial, plaintext: Plaintext, base: Optional[int] = None, rng=None) -> Cipher:
    """
    Encrypt `plaintext` into a (base, body) cipher.
    When `base` is None it is drawn from `rng` (default: OS entropy).
    """
    data = to_bytes(plaintext)
    if base is None:
        base = (rng or _system_random).randrange(BASE_RANGE)
    elif not is_valid_base(base):
        raise ValueError(f'base must be an int in range 0..{BASE_RANGE - 1}')
    body = xor_bytes(data, material.keystream(base, len(data)))
    return base, body


def decrypt_into(material: KeyMaterial, cipher: Cipher, output: bytearray) -> bytearray:
    base, body = cipher
    if not is_valid_base(base):
        logger.debug("rejected cipher base %r", base)
        raise DecryptionError('the base is not correct')
    body = to_bytes(body, name='body')
    output.extend(xor_bytes(body, material.keystream(base, len(body))))
    return output


def decrypt(material: KeyMaterial, cipher: Cipher) -> bytes:
    """
    Recover the plaintext of `cipher`.
    Raises DecryptionError only when the base is outside 0..15; a wrong key is
    not detected.
    """
    return bytes(decrypt_into(material, cipher, bytearray()))


def _push_text(output, text: str):
    if isinstance(output, str):
        return output + text
    if isinstance(output, list):
        output.append(text)
        return output
    if hasattr(output, 'write'):
        output.write(text)
        return output
    raise TypeError('output must be a str, a list of str or a writable text buffer')


class ShortCrypt:
    """
    Binds one key to the encrypt/decrypt and text encoding operations.

    >>> sc = ShortCrypt("magickey")
    >>> sc.decrypt_url_component(sc.encrypt_to_url_component("articles"))
    b'articles'

    `rng` is any object with a ``randrange`` method (``random.Random`` works);
    it picks the base of every cipher. The key material is derived once and
    never mutated, so one instance can be shared between threads.
    """

    def __init__(self, key: Union[str, bytes], rng=None):
        self._material = derive_key_material(key)
        self._rng = rng or _system_random

    def __repr__(self):
        return f'{type(self).__name__}(<key hidden>)'

    def encrypt(self, plaintext: Plaintext, base: Optional[int] = None) -> Cipher:
        return encrypt(self._material, plaintext, base=base, rng=self._rng)

    def decrypt(self, cipher: Cipher) -> bytes:
        return decrypt(self._material, cipher)

    def _encode(self, codec: BitCodec, plaintext: Plaintext, base: Optional[int]) -> str:
        return codec.encode(*self.encrypt(plaintext, base=base))

    def _decode_into(self, codec: BitCodec, text: str, output: bytearray) -> bytearray:
        return decrypt_into(self._material, codec.decode(text), output)

    def _push_decoded(self, codec: BitCodec, text: str, output):
        if isinstance(output, bytearray):
            return self._decode_into(codec, text, output)
        if isinstance(output, bytes):
            return output + bytes(self._decode_into(codec, text, bytearray()))
        raise TypeError('output must be bytes or bytearray')

    def encrypt_to_url_component(self, plaintext: Plaintext, base: Optional[int] = None) -> str:
        """Encrypt and encode with the URL-safe alphabet (A-Z a-z 0-9 - _)."""
        return self._encode(URL_SAFE, plaintext, base)

    def encrypt_to_url_component_and_push_to_string(self, plaintext: Plaintext, output, base: Optional[int] = None):
        """
        Like `encrypt_to_url_component` but appends to `output`.
        A list or text buffer is appended to in place and returned; a str
        prefix returns the concatenation.
        """
        return _push_text(output, self._encode(URL_SAFE, plaintext, base))

    def decrypt_url_component(self, url_component: str) -> bytes:
        return bytes(self._decode_into(URL_SAFE, url_component, bytearray()))

    def decrypt_url_component_and_push_to_vec(self, url_component: str, output: Union[bytes, bytearray]):
        return self._push_decoded(URL_SAFE, url_component, output)

    def encrypt_to_qr_code_alphanumeric(self, plaintext: Plaintext, base: Optional[int] = None) -> str:
        """Encrypt and encode with uppercase letters and 2-7, valid in QR alphanumeric mode."""
        return self._encode(QR_ALPHANUMERIC, plaintext, base)

    def encrypt_to_qr_code_alphanumeric_and_push_to_string(self, plaintext: Plaintext, output, base: Optional[int] = None):
        return _push_text(output, self._encode(QR_ALPHANUMERIC, plaintext, base))

    def decrypt_qr_code_alphanumeric(self, qr_code_alphanumeric: str) -> bytes:
        return bytes(self._decode_into(QR_ALPHANUMERIC, qr_code_alphanumeric, bytearray()))

    def decrypt_qr_code_alphanumeric_and_push_to_vec(self, qr_code_alphanumeric: str, output: Union[bytes, bytearray]):
        return self._push_decoded(QR_ALPHANUMERIC, qr_code_alphanumeric, output)
