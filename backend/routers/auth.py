"""
Telegram Login Widget endpoints.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from cofound_core.config import Settings
from cofound_core.services import (
    AuthRejected,
    SessionIssueError,
    TelegramLoginService,
    WidgetAuthVerifier,
)
from cofound_core.services.widget_auth import (
    REQUIRED_FIELDS,
    decode_auth_fragment,
    normalize_widget_payload,
)

from backend.dependencies import get_login_service, get_settings, get_widget_verifier
from backend.schemas.auth import TelegramAuthPayload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


def _complete_login(
    raw: dict,
    settings: Settings,
    verifier: WidgetAuthVerifier,
    login_service: TelegramLoginService,
) -> dict:
    payload = normalize_widget_payload(raw)
    if any(field not in payload for field in REQUIRED_FIELDS):
        raise HTTPException(status_code=400, detail="Missing required Telegram auth fields")

    if not settings.telegram_configured:
        raise HTTPException(status_code=500, detail="Telegram bot not configured")

    result = verifier.authenticate(payload)
    if isinstance(result, AuthRejected):
        raise HTTPException(status_code=401, detail=result.reason)

    try:
        return login_service.login(result).to_response()
    except SessionIssueError as e:
        logger.error(f"Telegram sign-in failed for {result.telegram_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/telegram")
def telegram_login(
    payload: TelegramAuthPayload,
    settings: Settings = Depends(get_settings),
    verifier: WidgetAuthVerifier = Depends(get_widget_verifier),
    login_service: TelegramLoginService = Depends(get_login_service),
):
    """
    Verify a Telegram widget payload and hand the identity to the session layer.

    Returns a one-time token_hash the client exchanges for a session
    (verifyOtp, type=magiclink) and where to redirect afterwards.
    """
    return _complete_login(payload.model_dump(), settings, verifier, login_service)


@router.get("/telegram/callback")
def telegram_login_callback(
    request: Request,
    tgAuthResult: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    verifier: WidgetAuthVerifier = Depends(get_widget_verifier),
    login_service: TelegramLoginService = Depends(get_login_service),
):
    """
    Redirect flow: the widget sends its payload as query parameters, or as a
    `#tgAuthResult=` fragment that the page forwards as a query parameter.
    """
    if tgAuthResult:
        raw = decode_auth_fragment(tgAuthResult)
    else:
        raw = dict(request.query_params)
    return _complete_login(raw, settings, verifier, login_service)
