# backend/registry_auth/__init__.py
from __future__ import annotations

"""
Marks `registry_auth` as a Python package.

Auth error handling lives in registry_auth/auth, database provisioning in
registry_auth/db, HTTP routers in registry_auth/api.
"""

__version__ = "0.1.0"
