"""Detect, fill and submit signup/login forms on unseen pages."""

__version__ = "0.3.0"
