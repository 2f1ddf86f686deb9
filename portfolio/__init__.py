"""Streamlit-free logic behind the portfolio site."""

__version__ = "0.1.0"
