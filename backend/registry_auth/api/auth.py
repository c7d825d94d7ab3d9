# backend/registry_auth/api/auth.py
from __future__ import annotations

"""
Sign-in / sign-up endpoints backed by AuthFlow.

Each request gets its own AuthFlow. Successful operations return the flow
snapshot (social sign-in keeps ``loading_state == "social"`` and carries
the provider redirect in ``data``); failures raise HTTPException whose
detail is the flow's user-facing error text.
"""

from functools import lru_cache
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends, HTTPException

from registry_auth import schemas
from registry_auth.auth.client import AuthClient, AuthProvider
from registry_auth.auth.codes import ErrorCode
from registry_auth.auth.flow import AuthFlow
from registry_auth.auth.messages import for_social
from registry_auth.auth.results import AuthResult, ErrorDetail, is_failure
from registry_auth.config import Settings, get_settings
from registry_auth.services.statsig_client import log_auth_event

router = APIRouter(prefix="/auth", tags=["auth"])

# Status for failures that carry no provider status (transport errors)
UPSTREAM_FAILURE_STATUS = 502


@lru_cache(maxsize=1)
def get_auth_client() -> AuthClient:
    settings = get_settings()
    return AuthClient(
        settings.auth_base_url,
        timeout=settings.auth_request_timeout_seconds,
    )


async def _run_flow(
    operation: str,
    client: AuthProvider,
    action: Callable[[AuthFlow], Awaitable[AuthResult[Any]]],
    *,
    provider: str | None = None,
) -> schemas.AuthFlowRead:
    flow = AuthFlow(client)
    result = await action(flow)

    if is_failure(result):
        error = result.error
        code = error.code.value if error.code else error.raw_code
        log_auth_event(operation, succeeded=False, provider=provider, error_code=code)
        status = error.status if error.status and error.status >= 400 else None
        raise HTTPException(
            status_code=status or (400 if error.code else UPSTREAM_FAILURE_STATUS),
            detail=flow.error,
        )

    log_auth_event(operation, succeeded=True, provider=provider)
    return schemas.AuthFlowRead(
        loading_state=flow.loading_state,
        error=flow.error,
        data=result.data,
    )


@router.get("/providers", response_model=schemas.ProvidersRead)
def list_providers(settings: Settings = Depends(get_settings)) -> schemas.ProvidersRead:
    """Sign-in methods currently available; social ones need OAuth credentials."""
    return schemas.ProvidersRead(social=sorted(settings.social_providers))


@router.post("/sign-in/email", response_model=schemas.AuthFlowRead)
async def sign_in_email(
    payload: schemas.EmailSignInRequest,
    client: AuthProvider = Depends(get_auth_client),
) -> schemas.AuthFlowRead:
    return await _run_flow(
        "sign_in_email",
        client,
        lambda flow: flow.sign_in_with_email(payload.email, payload.password),
    )


@router.post("/sign-in/social", response_model=schemas.AuthFlowRead)
async def sign_in_social(
    payload: schemas.SocialSignInRequest,
    client: AuthProvider = Depends(get_auth_client),
    settings: Settings = Depends(get_settings),
) -> schemas.AuthFlowRead:
    if payload.provider not in settings.social_providers:
        log_auth_event(
            "sign_in_social",
            succeeded=False,
            provider=payload.provider,
            error_code=ErrorCode.PROVIDER_NOT_FOUND.value,
        )
        raise HTTPException(
            status_code=404,
            detail=for_social(ErrorDetail(code=ErrorCode.PROVIDER_NOT_FOUND)),
        )

    return await _run_flow(
        "sign_in_social",
        client,
        lambda flow: flow.sign_in_with_social(
            payload.provider, callback_url=payload.callback_url
        ),
        provider=payload.provider,
    )


@router.post("/sign-up/email", response_model=schemas.AuthFlowRead, status_code=201)
async def sign_up_email(
    payload: schemas.EmailSignUpRequest,
    client: AuthProvider = Depends(get_auth_client),
) -> schemas.AuthFlowRead:
    return await _run_flow(
        "sign_up_email",
        client,
        lambda flow: flow.sign_up_with_email(payload.name, payload.email, payload.password),
    )
