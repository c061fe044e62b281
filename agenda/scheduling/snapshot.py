"""Immutable inputs for the scheduling engine."""

from pydantic import BaseModel, ConfigDict, Field

from agenda.domain.event import CalendarEvent
from agenda.domain.novelty import Novelty
from agenda.domain.task import Task
from agenda.domain.user import MANAGER_ROLES, User, UserRole


class AgendaSnapshot(BaseModel):
    """All entities loaded for one compute cycle."""

    model_config = ConfigDict(frozen=True)

    users: tuple[User, ...] = ()
    tasks: tuple[Task, ...] = ()
    events: tuple[CalendarEvent, ...] = ()
    novelties: tuple[Novelty, ...] = ()

    def user(self, user_id: str) -> User | None:
        return next((user for user in self.users if user.id == user_id), None)

    def task(self, task_id: str) -> Task | None:
        return next((task for task in self.tasks if task.id == task_id), None)


class Session(BaseModel):
    """Identity of the signed-in user as far as the engine cares."""

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., description="Signed-in user ID")
    role: UserRole = Field(default=UserRole.USER, description="Signed-in user's role")

    @property
    def is_manager(self) -> bool:
        return self.role in MANAGER_ROLES
