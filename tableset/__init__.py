"""
Top-level package for the cross-filtering table set.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    tableset.core
    tableset.views
    tableset.ui
"""

__all__: list[str] = []
