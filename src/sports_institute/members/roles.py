"""Dashboard roles as a tagged variant.

Each role kind carries the set of actions its dashboard exposes; views ask
``role.can(action)`` instead of comparing role strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.exceptions import AuthorizationError


class RoleKind(str, Enum):
    STUDENT = "student"
    TRAINER = "trainer"
    TRAINER_STUDENT = "trainerstudent"
    INSTITUTE = "institute"
    UNKNOWN = "unknown"


class Action(str, Enum):
    VIEW_TIMETABLE = "view_timetable"
    VIEW_MY_ATTENDANCE = "view_my_attendance"
    VIEW_MY_FEES = "view_my_fees"
    CHECKIN_CHECKOUT = "checkin_checkout"
    TAKE_ATTENDANCE = "take_attendance"
    MANAGE_FEES = "manage_fees"
    VIEW_MEMBERS = "view_members"
    MANAGE_TIMETABLE = "manage_timetable"
    MANAGE_SALARIES = "manage_salaries"


ROLE_ACTIONS: dict[RoleKind, frozenset[Action]] = {
    RoleKind.STUDENT: frozenset({Action.VIEW_TIMETABLE, Action.VIEW_MY_ATTENDANCE, Action.VIEW_MY_FEES}),
    RoleKind.TRAINER: frozenset(
        {
            Action.CHECKIN_CHECKOUT,
            Action.VIEW_TIMETABLE,
            Action.VIEW_MY_ATTENDANCE,
            Action.TAKE_ATTENDANCE,
            Action.MANAGE_FEES,
        }
    ),
    RoleKind.TRAINER_STUDENT: frozenset({Action.VIEW_MY_ATTENDANCE, Action.VIEW_MY_FEES}),
    RoleKind.INSTITUTE: frozenset({Action.VIEW_MEMBERS, Action.MANAGE_TIMETABLE, Action.MANAGE_SALARIES}),
    RoleKind.UNKNOWN: frozenset(),
}


@dataclass(frozen=True)
class DashboardRole:
    kind: RoleKind
    uid: str
    institute_id: Optional[str] = None

    @property
    def actions(self) -> frozenset[Action]:
        return ROLE_ACTIONS[self.kind]

    def can(self, action: Action) -> bool:
        return action in self.actions

    def require(self, action: Action) -> None:
        if not self.can(action):
            raise AuthorizationError("You do not have permission for this action")

    def to_session(self) -> dict:
        return {"uid": self.uid, "role": self.kind.value, "institute_id": self.institute_id}

    @classmethod
    def from_session(cls, data) -> "DashboardRole":
        try:
            kind = RoleKind(data.get("role") or RoleKind.UNKNOWN.value)
        except ValueError:
            kind = RoleKind.UNKNOWN
        return cls(kind=kind, uid=str(data.get("uid") or ""), institute_id=data.get("institute_id"))
