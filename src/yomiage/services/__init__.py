"""Yomiage services."""
