# Package initializer for the shortcrypt module
from .core import Cipher, ShortCrypt, encrypt, decrypt
from .codec import BitCodec, QR_ALPHANUMERIC, URL_SAFE
from .errors import ShortCryptError, InvalidCharacter, InvalidLength, DecryptionError
from .utils import BASE_BITS, BASE_RANGE, KeyMaterial, derive_key_material

__version__ = "1.0.0"

__all__ = [
    "Cipher", "ShortCrypt", "encrypt", "decrypt",
    "BitCodec", "QR_ALPHANUMERIC", "URL_SAFE",
    "ShortCryptError", "InvalidCharacter", "InvalidLength", "DecryptionError",
    "BASE_BITS", "BASE_RANGE", "KeyMaterial", "derive_key_material",
]
