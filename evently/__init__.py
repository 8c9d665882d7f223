"""Evently: event listings, reviews and moderation."""

__version__ = "1.0.0"
