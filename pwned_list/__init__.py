"""
Pwned List — strict checking and binary search of the Pwned Password list.

Layout: fixed 42-byte records (40 uppercase hex + CRLF), sorted by key.
Philosophy:  Never load the list. Stream it to check it, seek into it to search it.
"""

__version__ = "1.0.0"
