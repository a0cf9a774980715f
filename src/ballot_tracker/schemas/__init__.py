"""Pydantic v2 schemas for tracked ballots and display states."""
