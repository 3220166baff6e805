"""Packaged data schemas (YAML encoded JSON Schema)."""
