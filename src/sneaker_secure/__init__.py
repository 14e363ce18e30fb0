"""
SneakerSecure: sneaker authentication and personal collection storage.

Local persistence for a catalog of known sneakers, the user's claimed
collection, the one-time legacy migration and identifier verification.
"""

__version__ = "1.0.0"
