"""Packaged candidate pools."""
