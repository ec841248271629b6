"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Profiles and conferences each have their own schema,
service and endpoint modules; the endpoint routers are grouped under
the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
