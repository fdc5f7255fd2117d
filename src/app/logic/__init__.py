"""App logic package.

State and view-model layer for the Streamlit application.
Pure Python/Polars - no Streamlit UI calls outside data_loader.
"""

__all__ = ["dashboard", "data_loader", "overview"]
