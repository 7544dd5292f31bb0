"""Data input/output helpers (export files and file paths).

Utility modules here keep disk-level concerns isolated from the rest of the
application:
- :mod:`export` names export files and writes them atomically.
- :mod:`log_loader` parses exported recordings for offline review.
- :mod:`file_paths` resolves where exports are stored.
"""
