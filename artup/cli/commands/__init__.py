"""
Click command implementations for artup CLI.

Each module corresponds to an artup command (upload.py implements
'artup upload').
"""

from .upload import upload

COMMANDS = [
    upload,
]

__all__ = [
    "COMMANDS",
    "upload",
]
