#!/usr/bin/env python3
"""
crypto-client
Entry point for ``python -m crypto_client.main``
"""
from .cli import main

if __name__ == "__main__":
    main()
