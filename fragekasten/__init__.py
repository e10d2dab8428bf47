"""Fragekasten: anonymous question box with webhook notifications."""

__version__ = "0.3.0"
