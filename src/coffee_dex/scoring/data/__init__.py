"""Versioned category rule data."""
