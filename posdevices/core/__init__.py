"""Taxonomy, presentation options and the HTTP/logging plumbing."""
