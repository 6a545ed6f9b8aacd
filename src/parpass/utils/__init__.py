"""Shared helpers for the ParPass client."""
