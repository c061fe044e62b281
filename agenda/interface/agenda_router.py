"""Read-only agenda views: daily timeline, weekly canvas, monthly calendar."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from agenda.domain.novelty import Novelty
from agenda.interface.session import get_session
from agenda.scheduling.navigation import initial_day, next_day, prev_day
from agenda.scheduling.novelties import NoveltyMode, visible_novelties
from agenda.scheduling.placement import DayLayout, MonthLayout, WeekLayout, compose_day, compose_month, compose_week
from agenda.scheduling.snapshot import Session
from agenda.services import novelty_service, snapshot_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agenda", tags=["agenda"])


class NavigationResult(BaseModel):
    day: date


@router.get("/day/{day}")
async def get_day(day: date, session: Session = Depends(get_session)) -> DayLayout:
    """Daily timeline with work bands, shift bands and positioned task cards."""
    snapshot = await snapshot_service.load_snapshot()
    return compose_day(snapshot, day, session)


@router.get("/week/{day}")
async def get_week(
    day: date,
    user_id: str | None = Query(default=None, description="Only show this user"),
    session: Session = Depends(get_session),
) -> WeekLayout:
    """Monday-to-Friday canvas of the week containing `day`."""
    snapshot = await snapshot_service.load_snapshot()
    return compose_week(snapshot, day, session, user_filter=user_id)


@router.get("/month/{year}/{month}")
async def get_month(
    year: int,
    month: int,
    today: date | None = Query(default=None, description="Date highlighted as today"),
    _session: Session = Depends(get_session),
) -> MonthLayout:
    snapshot = await snapshot_service.load_snapshot()
    return compose_month(snapshot, year, month, today or date.today())


@router.get("/navigation/next")
async def get_next_day(
    current: date = Query(..., alias="date"),
    _session: Session = Depends(get_session),
) -> NavigationResult:
    snapshot = await snapshot_service.load_snapshot()
    return NavigationResult(day=next_day(current, snapshot))


@router.get("/navigation/prev")
async def get_prev_day(
    current: date = Query(..., alias="date"),
    _session: Session = Depends(get_session),
) -> NavigationResult:
    snapshot = await snapshot_service.load_snapshot()
    return NavigationResult(day=prev_day(current, snapshot))


@router.get("/navigation/initial")
async def get_initial_day(
    today: date | None = Query(default=None),
    _session: Session = Depends(get_session),
) -> NavigationResult:
    """Date the agenda opens on: today, or next Monday over an empty weekend."""
    snapshot = await snapshot_service.load_snapshot()
    return NavigationResult(day=initial_day(today or date.today(), snapshot))


@router.get("/novelties")
async def get_novelties(
    day: date = Query(..., alias="date"),
    mode: NoveltyMode = Query(default=NoveltyMode.DAY),
    session: Session = Depends(get_session),
) -> list[Novelty]:
    """Novelties the signed-in user has not dismissed yet."""
    novelties = await novelty_service.get_novelties()
    return visible_novelties(novelties, day, session.user_id, mode)


@router.post("/novelties/{novelty_id}/dismiss")
async def post_dismiss_novelty(novelty_id: str, session: Session = Depends(get_session)) -> Novelty:
    return await novelty_service.mark_as_viewed(novelty_id=novelty_id, user_id=session.user_id)
