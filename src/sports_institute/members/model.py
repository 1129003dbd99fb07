from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Account:
    """Login identity. `uid` is the stable id every profile is keyed by."""

    uid: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class Institute:
    institute_id: str
    name: str


@dataclass(frozen=True)
class Student:
    """A student enrolled at an institute."""

    student_id: str
    institute_id: str
    first_name: str
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Trainer:
    """A trainer employed by an institute, paid a monthly salary."""

    trainer_ref: str
    institute_id: str
    first_name: str
    last_name: str = ""
    monthly_salary: Decimal = Decimal("0")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class TrainerStudent:
    """A student billed directly by a trainer (monthly fee)."""

    doc_id: str
    trainer_ref: str
    student_uid: str
    first_name: str
    last_name: str = ""
    fee_amount: Decimal = Decimal("0")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
