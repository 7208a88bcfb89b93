"""User interface entry points (Streamlit dashboard and Typer CLI)."""

from __future__ import annotations

from .cli import app

__all__ = ["app"]
