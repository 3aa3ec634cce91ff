# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication API endpoints.

This module provides endpoints for user authentication:
- POST /register - Create an account and its profile
- POST /login - Email/password sign in
- POST /federated - Sign in with a Google ID token
- POST /logout - Sign out
- GET /me - Current reconciled profile

The session cookie is written and cleared by the token bridge of the
request's AuthContext. Every endpoint answers with a SessionResponse; flow
failures are reported through its outcome, its notifications and the status
code, never as exceptions.

Example:
    POST /api/v1/auth/register
    Body:
        {
            "name": "Ada Lovelace",
            "email": "ada@example.com",
            "password": "secret1",
            "confirmPassword": "secret1"
        }
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from learnhub.api.dependencies import SessionScope, get_session_scope
from learnhub.domains.registration.flow import FlowOutcome, LoginFlow, RegistrationFlow
from learnhub.models.auth import (
    FederatedSignInRequest,
    LoginForm,
    OutcomeKind,
    RegistrationForm,
    SessionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_FAILURE_STATUS = {
    OutcomeKind.VALIDATION: 422,
    OutcomeKind.STORE: status.HTTP_503_SERVICE_UNAVAILABLE,
    OutcomeKind.BUSY: status.HTTP_409_CONFLICT,
}


async def _respond(
    scope: SessionScope,
    response: Response,
    outcome: OutcomeKind,
    identity_status: int = status.HTTP_400_BAD_REQUEST,
) -> SessionResponse:
    """Wait for reconciliation and build the response body.

    A successful operation whose reconciliation failed is reported with the
    reconciliation error.
    """
    auth = scope.auth
    await auth.wait_until_idle()

    if outcome == OutcomeKind.OK and auth.last_error is not None:
        scope.notifier.error(auth.last_error.user_message)
        outcome = auth.last_error.kind

    if outcome == OutcomeKind.IDENTITY:
        response.status_code = identity_status
    elif outcome in _FAILURE_STATUS:
        response.status_code = _FAILURE_STATUS[outcome]

    return SessionResponse(
        outcome=outcome,
        user=auth.user,
        authenticated=auth.is_authenticated,
        redirect_to=scope.navigator.redirect_to,
        notifications=scope.notifier.items,
    )


@router.post(
    "/register",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
async def register(
    form: RegistrationForm,
    response: Response,
    scope: SessionScope = Depends(get_session_scope),
) -> SessionResponse:
    """Validate the form, create the account and write its profile.

    On success the session cookie is set and ``redirectTo`` names the
    authenticated area.
    """
    flow = RegistrationFlow(
        scope.auth,
        scope.notifier,
        min_password_length=scope.settings.identity.min_password_length,
    )
    outcome: FlowOutcome = await flow.submit(form)
    return await _respond(scope, response, outcome.kind)


@router.post("/login", response_model=SessionResponse, summary="Sign in with email and password")
async def login(
    form: LoginForm,
    response: Response,
    scope: SessionScope = Depends(get_session_scope),
) -> SessionResponse:
    """Sign in; the profile is reconciled before the response is sent."""
    outcome = await LoginFlow(scope.auth, scope.notifier).submit(form)
    return await _respond(scope, response, outcome.kind, status.HTTP_401_UNAUTHORIZED)


@router.post("/federated", response_model=SessionResponse, summary="Sign in with Google")
async def federated_sign_in(
    data: FederatedSignInRequest,
    response: Response,
    scope: SessionScope = Depends(get_session_scope),
) -> SessionResponse:
    """Sign in with a Google ID token, creating the account on first use."""
    outcome = await LoginFlow(scope.auth, scope.notifier).continue_with_federated(data.id_token)
    return await _respond(scope, response, outcome.kind, status.HTTP_401_UNAUTHORIZED)


@router.post("/logout", response_model=SessionResponse, summary="Sign out")
async def logout(
    response: Response,
    scope: SessionScope = Depends(get_session_scope),
) -> SessionResponse:
    """Sign out and clear the session cookie."""
    await scope.auth.sign_out()
    return await _respond(scope, response, OutcomeKind.OK)


@router.get("/me", response_model=SessionResponse, summary="Current session")
async def me(
    response: Response,
    scope: SessionScope = Depends(get_session_scope),
) -> SessionResponse:
    """Return the reconciled profile for the session cookie, if any."""
    return await _respond(scope, response, OutcomeKind.OK)
