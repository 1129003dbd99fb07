from __future__ import annotations

from enum import Enum


class Weekday(str, Enum):
    """Timetable day codes, Monday first."""

    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"


class SlotTime(str, Enum):
    """Timetable start times."""

    T0900 = "09:00"
    T1000 = "10:00"
    T1100 = "11:00"
    T1200 = "12:00"
    T1300 = "13:00"
    T1400 = "14:00"
    T1500 = "15:00"
    T1600 = "16:00"
    T1700 = "17:00"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class AttendancePolicy(str, Enum):
    """How a repeated save for the same (student, date, category) is stored."""

    APPEND = "append"
    UPSERT = "upsert"


class FeeStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class SalaryStatus(str, Enum):
    """PENDING is never stored: it means no record exists for the month yet."""

    PENDING = "pending"
    GENERATED = "generated"
    PAID = "paid"


class PaymentMode(str, Enum):
    CASH = "Cash"
    UPI = "UPI"
    CARD = "Card"
    BANK = "Bank"
