# backend/registry_auth/schemas/__init__.py
from __future__ import annotations

"""
Pydantic schemas for request/response models.

This module is the API contract layer and depends on:
- registry_auth.auth.flow.LoadingState

It is used by:
- registry_auth.api.auth routes
"""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from registry_auth.auth.flow import LoadingState


# ---------- Sign-in / sign-up requests ----------


class EmailSignInRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip()


class SocialSignInRequest(BaseModel):
    provider: str = "github"
    callback_url: Optional[str] = None

    @field_validator("provider")
    @classmethod
    def normalize_provider(cls, value: str) -> str:
        return value.strip().lower()


class EmailSignUpRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip()


# ---------- Responses ----------


class AuthFlowRead(BaseModel):
    """Snapshot of an AuthFlow after an operation resolved."""

    loading_state: LoadingState
    error: Optional[str] = None
    data: Optional[Any] = None


class ProvidersRead(BaseModel):
    email_password: bool = True
    social: List[str] = Field(default_factory=list)
