"""Login and session endpoints."""

import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from agenda.core.config import settings
from agenda.core.db_client import RecordNotFoundError
from agenda.domain.user import User
from agenda.interface.session import clear_session, get_session, issue_session
from agenda.scheduling.snapshot import Session
from agenda.services import user_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    password: str


@router.post("/login")
async def post_login(payload: LoginRequest, response: Response) -> Session:
    """Open a session for a team member after checking the shared password."""
    try:
        expected_password = settings.require_credential("access_password", "Access password")
    except ValueError as err:
        logger.error("login_missing_password")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Access password not configured",
        ) from err

    if not secrets.compare_digest(payload.password.encode(), expected_password.encode()):
        logger.warning("login_invalid_password", extra={"user_id": payload.user_id})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    try:
        user = await user_service.get_user(user_id=payload.user_id)
    except RecordNotFoundError as err:
        logger.warning("login_unknown_user", extra={"user_id": payload.user_id})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials") from err

    session = Session(user_id=user.id, role=user.role)
    issue_session(response, session)
    logger.info("login_success", extra={"user_id": user.id, "role": user.role})
    return session


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def post_logout(response: Response) -> None:
    clear_session(response)
    logger.info("logout_success")


@router.get("/me")
async def get_me(session: Session = Depends(get_session)) -> User:
    """Profile of the signed-in user."""
    return await user_service.get_user(user_id=session.user_id)
