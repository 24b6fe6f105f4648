"""
Persistence adapters.

Services receive a storage instance at construction and never touch the
underlying map directly, so a persistent backend can replace the
in-memory one without changing service logic.
"""
