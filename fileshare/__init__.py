"""Minimal HTTP file server: static web UI, JSON directory listing, uploads."""

__version__ = "1.0.0"
