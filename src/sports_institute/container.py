from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .billing.fee_service import FeeService
from .billing.mysql_fee_repository import MySQLFeeRepository
from .billing.mysql_salary_repository import MySQLSalaryRepository
from .billing.receipts import ReceiptNumberGenerator
from .billing.repository import FeeRepository, SalaryRepository
from .billing.salary_service import SalaryService
from .checkins.mysql_checkin_repository import MySQLCheckinRepository
from .checkins.repository import CheckinRepository
from .checkins.service import CheckinService
from .core.enums import AttendancePolicy
from .database.connection import DBConfig, DatabaseConnection
from .members.mysql_member_repository import MySQLMemberRepository
from .members.repository import MemberRepository
from .members.service import AuthService, MemberService, RoleResolver
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService


@dataclass(frozen=True)
class Container:
    members_repo: MemberRepository
    schedules_repo: ScheduleRepository
    attendance_repo: AttendanceRepository
    checkins_repo: CheckinRepository
    fees_repo: FeeRepository
    salaries_repo: SalaryRepository

    auth_service: AuthService
    role_resolver: RoleResolver
    member_service: MemberService
    schedule_service: ScheduleService
    attendance_service: AttendanceService
    checkin_service: CheckinService
    fee_service: FeeService
    salary_service: SalaryService

    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    members_repo: MemberRepository,
    schedules_repo: ScheduleRepository,
    attendance_repo: AttendanceRepository,
    checkins_repo: CheckinRepository,
    fees_repo: FeeRepository,
    salaries_repo: SalaryRepository,
    attendance_policy=AttendancePolicy.UPSERT,
    receipts: Optional[ReceiptNumberGenerator] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL or in-memory)."""
    return Container(
        conn=conn,
        members_repo=members_repo,
        schedules_repo=schedules_repo,
        attendance_repo=attendance_repo,
        checkins_repo=checkins_repo,
        fees_repo=fees_repo,
        salaries_repo=salaries_repo,
        auth_service=AuthService(members_repo),
        role_resolver=RoleResolver(members_repo),
        member_service=MemberService(members_repo),
        schedule_service=ScheduleService(schedules_repo, members_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            members_repo,
            policy=AttendancePolicy(attendance_policy),
        ),
        checkin_service=CheckinService(checkins_repo, members_repo),
        fee_service=FeeService(fees_repo, members_repo, receipts=receipts),
        salary_service=SalaryService(salaries_repo, members_repo, checkins_repo),
    )


def build_container(*, db_config: dict, attendance_policy=AttendancePolicy.UPSERT) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))

    return assemble(
        conn=conn,
        members_repo=MySQLMemberRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        checkins_repo=MySQLCheckinRepository(conn),
        fees_repo=MySQLFeeRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        attendance_policy=attendance_policy,
    )
