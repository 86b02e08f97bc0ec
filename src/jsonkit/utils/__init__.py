"""jsonkit Utilities

This package contains pointer resolution, value helpers and error types
used by the patch engine and stores.
"""

__all__ = [
    "errors",
    "json_patch",
    "json_values",
    "pointer",
]
