"""
Top‑level package for the Conference Central API.

This file makes ``conference_central_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``conference_central_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
