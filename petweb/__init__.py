"""Small HTTP/1.0 file servers and client, with hash table and linked-list helpers."""

__version__ = "0.1.0"