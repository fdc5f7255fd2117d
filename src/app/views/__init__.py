"""App views package.

UI rendering layer for Streamlit application.
Pure rendering - no business logic or store access.
"""

__all__ = ["colors", "common", "overview"]
