"""
PassGuard Module Entry Point
=============================

Allows running the PassGuard CLI via: python -m passguard
"""

from passguard.cli import main

if __name__ == "__main__":
    main()
