"""Dosing presentation layer."""

from dosing.presentation.routes import router

__all__ = ["router"]
