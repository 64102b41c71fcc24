#!/usr/bin/env python3
"""CLI wrapper for decryption.
Usage: python decrypt.py "<cipher-string>" [--format url|qr]
"""
from shortcrypt.cli import decrypt_main

if __name__ == "__main__":
    decrypt_main()
