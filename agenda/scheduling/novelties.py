"""Which announcements a user still has to see."""

from collections.abc import Iterable
from datetime import date, timedelta
from enum import StrEnum

from agenda.domain.novelty import Novelty
from agenda.domain.schedule import week_start


class NoveltyMode(StrEnum):
    DAY = "day"
    WEEK = "week"


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing `day`."""
    monday = week_start(day)
    return monday, monday + timedelta(days=6)


def visible_novelties(
    novelties: Iterable[Novelty],
    day: date,
    user_id: str,
    mode: NoveltyMode | str = NoveltyMode.DAY,
) -> list[Novelty]:
    """Novelties active on `day` (or its week) that `user_id` has not dismissed."""
    mode = NoveltyMode(mode)
    first, last = week_bounds(day) if mode == NoveltyMode.WEEK else (day, day)
    return [novelty for novelty in novelties if novelty.overlaps(first, last) and not novelty.viewed_by(user_id)]


def dismiss(novelty: Novelty, user_id: str) -> Novelty:
    """Mark a novelty as seen by `user_id`; dismissing twice changes nothing."""
    if novelty.viewed_by(user_id):
        return novelty
    return novelty.model_copy(update={"viewed": novelty.viewed | {user_id}})
