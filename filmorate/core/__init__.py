"""
Cross-cutting primitives shared across the Filmorate API:
settings, logging setup, the error hierarchy and its HTTP mapping.
"""
