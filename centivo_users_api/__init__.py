"""Centivo Users API package."""
