"""LinkPortal - lifecycle management for linked GitHub accounts.

Resolves GitHub accounts and their links to corporate identities, and
unlinks or terminates them with an audit trail.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
