"""Reusable libraries: tracker search core and lookup capability."""
