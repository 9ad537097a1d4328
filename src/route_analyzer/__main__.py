#!/usr/bin/env python3
"""Module entry point: python -m route_analyzer ..."""

from .cli import main

if __name__ == "__main__":
    main()
