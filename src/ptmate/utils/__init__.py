"""Utility helpers for ptmate."""
