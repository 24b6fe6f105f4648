"""Entities, update payloads and field rules for films and users."""
