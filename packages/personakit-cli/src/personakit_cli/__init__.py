"""Personakit CLI: browse, validate, and resolve persona templates."""
