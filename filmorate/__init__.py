"""Filmorate: a social film catalog with likes, friendships and popularity rankings."""

__version__ = "0.1.0"
