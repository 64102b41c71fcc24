"""Command line entry points for encrypting and decrypting short ciphers.

Usage:
    python encrypt.py "articles" --format qr
    python decrypt.py "<cipher-string>" --format qr
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import pyperclip

from .config import FORMATS, load_config, resolve_settings
from .core import ShortCrypt
from .errors import ShortCryptError

logger = logging.getLogger(__name__)


def _parser(description: str, positional: str, help_text: str) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description=description)
    p.add_argument(positional, nargs=1, help=help_text)
    p.add_argument("--format", choices=FORMATS, default=None, help="Text encoding: url (default) or qr")
    p.add_argument("--key", default=None, help="Secret key (overrides config.json and MASTER_KEY)")
    p.add_argument("--config", default=None, help="Path to config.json")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def _setup(args):
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)
    cfg = load_config(Path(args.config) if args.config else None)
    key, fmt = resolve_settings(cfg, key=args.key, fmt=args.format)
    logger.debug("using %s format", fmt)
    return ShortCrypt(key), fmt


def print_encryption_output(cipher: str, fmt: str):
    print(f"Format: {fmt}")
    print(f"Cipher length: {len(cipher)} characters")
    print("")
    print("CIPHER:")
    print(cipher)


def print_decryption_output(plaintext: bytes):
    print("PLAINTEXT:")
    print(plaintext.decode("utf-8", errors="replace"))


def encrypt_main(argv=None):
    p = _parser("Encrypt plaintext into a short cipher string.", "text", "Plaintext to encrypt (wrap in quotes)")
    p.add_argument("--copy", action="store_true", help="Copy the cipher to the clipboard")
    args = p.parse_args(argv)

    try:
        sc, fmt = _setup(args)
    except (ValueError, OSError) as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    plaintext = args.text[0]
    if fmt == "qr":
        cipher = sc.encrypt_to_qr_code_alphanumeric(plaintext)
    else:
        cipher = sc.encrypt_to_url_component(plaintext)
    print_encryption_output(cipher, fmt)

    if args.copy:
        try:
            pyperclip.copy(cipher)
        except pyperclip.PyperclipException as e:
            logger.debug("clipboard unavailable: %s", e)
            print("(Clipboard not available, copy the value above manually.)")
        else:
            print("(Cipher copied to clipboard.)")


def decrypt_main(argv=None):
    p = _parser("Decrypt a cipher string produced by this tool.", "cipher", "Cipher string to decrypt")
    args = p.parse_args(argv)

    try:
        sc, fmt = _setup(args)
    except (ValueError, OSError) as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    cipher = args.cipher[0].strip()
    try:
        if fmt == "qr":
            plaintext = sc.decrypt_qr_code_alphanumeric(cipher)
        else:
            plaintext = sc.decrypt_url_component(cipher)
    except ShortCryptError as e:
        print(f"Decryption failed: {e}")
        sys.exit(2)

    print_decryption_output(plaintext)
