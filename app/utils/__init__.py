"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- uploads: Upload naming and storage

==============================================================================
"""

from .uploads import UploadIntake

__all__ = [
    "UploadIntake",
]
