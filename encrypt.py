#!/usr/bin/env python3
"""CLI wrapper for encryption.
Usage: python encrypt.py "some text to encrypt" [--format url|qr]
"""
from shortcrypt.cli import encrypt_main

if __name__ == "__main__":
    encrypt_main()
