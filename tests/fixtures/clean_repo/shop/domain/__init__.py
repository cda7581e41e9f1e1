"""Entities and repository ports."""
