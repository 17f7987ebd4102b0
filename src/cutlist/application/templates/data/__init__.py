"""Bundled project template files."""
