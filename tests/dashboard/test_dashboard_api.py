import time

from fakes import (
    BrokenStore,
    InMemoryAttendance,
    InMemoryCheckins,
    InMemoryFees,
    InMemorySalaries,
    InMemorySchedules,
    demo_members,
)
from sports_institute.container import assemble
from sports_institute.dashboard.session import IDENTITY_KEY, LAST_SEEN_KEY
from sports_institute.main import create_app

PASSWORD = "pw-123"
# 2024-01-01 was a Monday
PAST_MONDAY = "2024-01-01"


def _client(monkeypatch, **overrides):
    monkeypatch.setenv("APP_ENV", "testing")

    members = demo_members()
    members.add_account("inst-1", "office@riverside.test", PASSWORD)
    members.add_account("tr-1", "ravi@riverside.test", PASSWORD)
    members.add_account("st-1", "asha@riverside.test", PASSWORD)
    members.add_account("ts-1", "kiran@riverside.test", PASSWORD)
    members.add_account("ghost", "ghost@riverside.test", PASSWORD)

    repos = {
        "members_repo": members,
        "schedules_repo": InMemorySchedules(),
        "attendance_repo": InMemoryAttendance(),
        "checkins_repo": InMemoryCheckins(),
        "fees_repo": InMemoryFees(),
        "salaries_repo": InMemorySalaries(),
    }
    repos.update(overrides)
    app = create_app(container=assemble(**repos))
    return app.test_client()


def _login(client, email):
    resp = client.post("/api/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200
    return resp.get_json()


def test_login_resolves_role_and_actions(monkeypatch):
    client = _client(monkeypatch)

    body = _login(client, "ravi@riverside.test")
    assert body["role"] == "trainer"
    assert "take_attendance" in body["actions"]

    me = client.get("/api/me").get_json()
    assert me["uid"] == "tr-1"
    assert me["institute_id"] == "inst-1"


def test_identity_without_profile_gets_no_actions(monkeypatch):
    client = _client(monkeypatch)

    body = _login(client, "ghost@riverside.test")
    assert body["role"] == "unknown"
    assert body["actions"] == []
    assert client.get("/api/timetable").status_code == 403


def test_wrong_password_and_missing_session(monkeypatch):
    client = _client(monkeypatch)

    resp = client.post("/api/login", json={"email": "ravi@riverside.test", "password": "nope"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "AuthenticationError"

    resp = client.get("/api/me")
    assert resp.status_code == 401
    assert resp.get_json()["redirect"] == "/"


def test_student_cannot_use_trainer_endpoints(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "asha@riverside.test")

    assert client.post("/api/trainer/checkin").status_code == 403
    assert client.get("/api/institute/salaries").status_code == 403
    assert client.get("/api/timetable").status_code == 200


def test_idle_session_is_signed_out(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "asha@riverside.test")

    with client.session_transaction() as sess:
        sess[LAST_SEEN_KEY] = time.time() - 6 * 60

    resp = client.get("/api/me")
    assert resp.status_code == 401
    assert resp.get_json()["redirect"] == "/"
    with client.session_transaction() as sess:
        assert IDENTITY_KEY not in sess

    assert client.get("/api/me").status_code == 401


def test_activity_pushes_the_idle_deadline(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "asha@riverside.test")

    with client.session_transaction() as sess:
        sess[LAST_SEEN_KEY] = time.time() - 4 * 60

    assert client.get("/api/me").status_code == 200
    with client.session_transaction() as sess:
        assert time.time() - sess[LAST_SEEN_KEY] < 60


def test_logout_clears_the_session(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "asha@riverside.test")

    assert client.post("/api/logout").get_json()["redirect"] == "/"
    assert client.get("/api/me").status_code == 401


def test_timetable_to_attendance_flow(monkeypatch):
    client = _client(monkeypatch)

    _login(client, "office@riverside.test")
    resp = client.post(
        "/api/institute/timetable",
        json={"day": "Mon", "time": "09:00", "category": "Football", "trainer_ref": "tr-1", "student_refs": ["st-1", "st-2"]},
    )
    assert resp.status_code == 200
    slot_id = resp.get_json()["slot_id"]

    resp = client.post("/api/institute/timetable", json={"day": "Mon", "time": "10:00", "category": "Football"})
    assert resp.status_code == 400
    for refs in ("st-1", ["st-1", "st-404"], {"st-1": True}):
        resp = client.post(
            "/api/institute/timetable",
            json={"day": "Mon", "time": "10:00", "category": "Football", "trainer_ref": "tr-1", "student_refs": refs},
        )
        assert resp.status_code == 400

    cell = client.get("/api/institute/timetable/slot?day=Mon&time=09:00").get_json()["slot"]
    assert cell["trainer_name"] == "Ravi"
    grid = client.get("/api/institute/timetable").get_json()["grid"]
    assert grid[0]["cells"]["Mon"]["category"] == "Football"

    client.post("/api/logout")
    _login(client, "ravi@riverside.test")

    classes = client.get(f"/api/trainer/classes?date={PAST_MONDAY}").get_json()["classes"]
    assert [c["slot_id"] for c in classes] == [slot_id]

    resp = client.post(
        f"/api/trainer/classes/{slot_id}/attendance",
        json={"date": "2999-01-04", "statuses": {"st-1": "Present"}},
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "FutureDateError"

    resp = client.post(
        f"/api/trainer/classes/{slot_id}/attendance",
        json={"date": PAST_MONDAY, "statuses": {"st-1": "Present"}},
    )
    assert resp.status_code == 200
    assert resp.get_json()["result"] == {
        "date": PAST_MONDAY,
        "category": "Football",
        "saved": 2,
        "present": 1,
        "absent": 1,
    }

    # 2024-01-02 was a Tuesday
    resp = client.post(
        f"/api/trainer/classes/{slot_id}/attendance",
        json={"date": "2024-01-02", "statuses": {"st-1": "Present"}},
    )
    assert resp.status_code == 400
    resp = client.post(
        f"/api/trainer/classes/{slot_id}/attendance",
        json={"date": PAST_MONDAY, "statuses": ["st-1"]},
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "ValidationError"

    roster = client.get(f"/api/trainer/classes/{slot_id}/attendance?date={PAST_MONDAY}").get_json()["roster"]
    by_ref = {r["student_ref"]: r for r in roster}
    assert by_ref["st-1"]["status"] == "Present"
    assert by_ref["st-1"]["summary"]["present_percent"] == 100
    assert by_ref["st-2"]["status"] == "Absent"
    assert by_ref["st-2"]["name"] == "Dev"

    client.post("/api/logout")
    _login(client, "asha@riverside.test")
    records = client.get("/api/my/attendance").get_json()["records"]
    assert [(r["date"], r["status"]) for r in records] == [(PAST_MONDAY, "Present")]
    assert len(client.get("/api/timetable").get_json()["slots"]) == 1


def test_fee_endpoints(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "ravi@riverside.test")

    students = client.get("/api/trainer/students").get_json()["students"]
    assert [s["doc_id"] for s in students] == ["ts-1"]

    payload = {"month": 10, "year": 2026, "base_fee": "2000", "discount": "200", "extra_charges": "50"}
    resp = client.post("/api/trainer/students/ts-1/fees", json=payload)
    assert resp.status_code == 201
    fee = resp.get_json()["fee"]
    assert fee["final_amount"] == "1850"
    assert fee["status"] == "pending"

    resp = client.post("/api/trainer/students/ts-1/fees", json=payload)
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "DuplicatePeriodError"

    assert client.post(f"/api/trainer/students/ts-1/fees/{fee['fee_id']}/paid").status_code == 200
    assert client.post(f"/api/trainer/students/ts-1/fees/{fee['fee_id']}/paid").status_code == 400

    history = client.get("/api/trainer/students/ts-1/fees").get_json()["fees"]
    assert [f["status"] for f in history] == ["paid"]

    client.post("/api/logout")
    _login(client, "kiran@riverside.test")
    my_fees = client.get("/api/my/fees").get_json()["fees"]
    assert [(f["month"], f["year"], f["status"]) for f in my_fees] == [(10, 2026, "paid")]


def test_fee_delete_endpoint(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "ravi@riverside.test")
    fee = client.post("/api/trainer/students/ts-1/fees", json={"month": 1, "year": 2026}).get_json()["fee"]

    assert client.delete(f"/api/trainer/students/ts-1/fees/{fee['fee_id']}").status_code == 200
    assert client.get("/api/trainer/students/ts-1/fees").get_json()["fees"] == []


def test_checkin_and_salary_endpoints(monkeypatch):
    client = _client(monkeypatch)
    _login(client, "ravi@riverside.test")

    assert client.post("/api/trainer/checkin").status_code == 200
    assert client.post("/api/trainer/checkin").status_code == 400
    assert client.post("/api/trainer/checkout").status_code == 200
    assert len(client.get("/api/trainer/checkins").get_json()["checkins"]) == 1

    client.post("/api/logout")
    _login(client, "office@riverside.test")

    board = client.get("/api/institute/salaries?month=2026-11").get_json()
    assert {r["trainer_ref"]: r["status"] for r in board["rows"]} == {"tr-1": "pending", "tr-2": "pending"}

    resp = client.post("/api/institute/salaries/tr-2/generate", json={"month": "2026-11"})
    assert resp.status_code == 200
    salary = resp.get_json()["salary"]
    assert salary["salary_key"] == "tr-2_2026-11"
    assert salary["payable_salary"] == 0
    assert salary["status"] == "generated"

    assert client.post("/api/institute/salaries/tr-2_2026-11/paid", json={"payment_mode": "UPI"}).status_code == 200
    board = client.get("/api/institute/salaries?month=2026-11&status=paid").get_json()
    assert [r["trainer_ref"] for r in board["rows"]] == ["tr-2"]

    members = client.get("/api/institute/members").get_json()
    assert len(members["students"]) == 3
    assert len(members["trainers"]) == 2


def test_store_failure_maps_to_bad_gateway(monkeypatch):
    client = _client(monkeypatch, fees_repo=BrokenStore())
    _login(client, "ravi@riverside.test")

    resp = client.post("/api/trainer/students/ts-1/fees", json={"month": 10, "year": 2026})
    assert resp.status_code == 502
    assert resp.get_json()["error"] == "RemoteOperationError"
