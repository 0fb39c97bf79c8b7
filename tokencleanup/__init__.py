"""Expired token cleanup for identity provider stores."""

__version__ = "0.1.0"
