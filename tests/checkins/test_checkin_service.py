from datetime import datetime

import pytest

from fakes import InMemoryCheckins, demo_members
from sports_institute.checkins.service import CheckinService
from sports_institute.core.exceptions import ValidationError


def _service():
    repo = InMemoryCheckins()
    return CheckinService(repo, demo_members()), repo


def test_check_in_twice_on_the_same_day_is_rejected():
    svc, repo = _service()
    svc.check_in("inst-1", "tr-1", now=datetime(2026, 10, 19, 8, 55))

    with pytest.raises(ValidationError):
        svc.check_in("inst-1", "tr-1", now=datetime(2026, 10, 19, 14, 0))
    assert len(repo.rows) == 1


def test_check_out_requires_a_check_in_and_happens_once():
    svc, _ = _service()

    with pytest.raises(ValidationError):
        svc.check_out("inst-1", "tr-1", now=datetime(2026, 10, 19, 17, 0))

    svc.check_in("inst-1", "tr-1", now=datetime(2026, 10, 19, 9, 0))
    svc.check_out("inst-1", "tr-1", now=datetime(2026, 10, 19, 17, 0))
    with pytest.raises(ValidationError):
        svc.check_out("inst-1", "tr-1", now=datetime(2026, 10, 19, 18, 0))

    history = svc.get_history_ui("tr-1")
    assert history == [{"date": "2026-10-19", "check_in": "09:00:00", "check_out": "17:00:00", "status": "Present"}]


def test_unknown_trainer_cannot_check_in():
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.check_in("inst-1", "tr-x", now=datetime(2026, 10, 19, 9, 0))
    with pytest.raises(ValidationError):
        svc.check_in("inst-2", "tr-1", now=datetime(2026, 10, 19, 9, 0))
    assert repo.rows == {}


def test_count_present_is_per_month():
    svc, _ = _service()
    svc.check_in("inst-1", "tr-1", now=datetime(2026, 9, 30, 9, 0))
    svc.check_in("inst-1", "tr-1", now=datetime(2026, 10, 1, 9, 0))
    svc.check_in("inst-1", "tr-1", now=datetime(2026, 10, 2, 9, 0))

    assert svc.count_present("inst-1", "tr-1", "2026-10") == 2
    assert svc.count_present("inst-1", "tr-1", "2026-09") == 1
    assert svc.count_present("inst-1", "tr-2", "2026-10") == 0
