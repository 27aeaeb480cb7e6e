"""
CLI entry point for the typstable package.

This allows running the package with: python -m typstable
"""

from .cli import main

if __name__ == "__main__":
    main()
