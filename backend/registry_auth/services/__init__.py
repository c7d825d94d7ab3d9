# backend/registry_auth/services/__init__.py
from __future__ import annotations

"""
Service integrations that are optional at runtime (analytics).
"""
