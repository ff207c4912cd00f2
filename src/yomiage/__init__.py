"""Yomiage - Chat message reading pipeline for voice sessions."""

__version__ = "0.1.0"
