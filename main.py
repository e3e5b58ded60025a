#!/usr/bin/env python3
"""KegelBump — entry point.

Run with:
    python main.py
    python -m kegelbump
"""

from kegelbump.__main__ import main


if __name__ == "__main__":
    main()
