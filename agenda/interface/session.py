"""Signed-cookie sessions carrying the current user's id and role."""

import logging

from fastapi import HTTPException, Request, Response, status
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from agenda.core.config import constants, settings
from agenda.scheduling.snapshot import Session


logger = logging.getLogger(__name__)

serializer = URLSafeTimedSerializer(str(settings.secret_key), salt=constants.SESSION_SALT)


def issue_session(response: Response, session: Session) -> None:
    """Sign the session and store it in the session cookie."""
    token = serializer.dumps(session.model_dump(mode="json"))
    response.set_cookie(
        key=constants.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
        max_age=settings.session_max_age_seconds,
    )


def clear_session(response: Response) -> None:
    response.delete_cookie(key=constants.SESSION_COOKIE_NAME, httponly=True, samesite="strict")


def _unauthenticated(reason: str, path: str) -> HTTPException:
    logger.warning(reason, extra={"path": path})
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")


async def get_session(request: Request) -> Session:
    """FastAPI dependency returning the signed-in session or failing with 401."""
    token = request.cookies.get(constants.SESSION_COOKIE_NAME)
    if not token:
        raise _unauthenticated("session_missing_cookie", request.url.path)

    try:
        data = serializer.loads(token, max_age=settings.session_max_age_seconds)
    except (BadSignature, SignatureExpired) as err:
        raise _unauthenticated("session_tampered_or_expired", request.url.path) from err

    try:
        return Session.model_validate(data)
    except ValueError as err:
        raise _unauthenticated("session_invalid_payload", request.url.path) from err
