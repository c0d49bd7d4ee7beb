"""
token_ledger.version — semantic version string.

Usage:
    from token_ledger.version import __version__
"""

from __future__ import annotations

# Bump this when making a tagged release. Use semver (major.minor.patch).
__version__ = "0.1.0"

__all__ = ["__version__"]
