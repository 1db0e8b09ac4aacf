"""Markdown documents with embedded Django components."""
