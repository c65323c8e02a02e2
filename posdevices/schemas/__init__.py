"""Pydantic shapes for device records and their configuration blocks."""
