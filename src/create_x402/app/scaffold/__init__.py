"""Scaffold orchestration package."""

from .service import ScaffoldResult, ScaffoldService

__all__ = ["ScaffoldResult", "ScaffoldService"]
