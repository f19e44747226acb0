"""I/O adapter package.

This package contains the boundary code between HTTP requests and the
served directory tree:
  - reading the ``FILESHARE_*`` environment at startup
  - validating user-provided paths so they stay inside the base path

Keep this package free of HTTP concerns; routers translate its errors.
"""
