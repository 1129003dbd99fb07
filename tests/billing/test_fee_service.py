import random
import re
from datetime import datetime
from decimal import Decimal

import pytest

from fakes import InMemoryFees, demo_members
from sports_institute.billing.fee_service import FeeService
from sports_institute.billing.receipts import ReceiptNumberGenerator
from sports_institute.core.enums import FeeStatus, PaymentMode
from sports_institute.core.exceptions import DuplicatePeriodError, ValidationError

NOW = datetime(2026, 10, 19, 10, 30)
RECEIPT_RE = re.compile(r"^TRN-\d{4}\d{1,2}-\d{4}$")


def _service():
    repo = InMemoryFees()
    svc = FeeService(repo, demo_members(), receipts=ReceiptNumberGenerator(random.Random(7)))
    return svc, repo


def test_generate_fee_computes_final_amount_and_starts_pending():
    svc, repo = _service()

    fee = svc.generate_fee(
        "tr-1", "ts-1", month=10, year=2026, base_fee="2000", discount="200", extra_charges="50",
        payment_mode="UPI", remarks="  october  ", now=NOW,
    )

    assert fee.final_amount == Decimal("1850")
    assert fee.status == FeeStatus.PENDING
    assert fee.payment_mode == PaymentMode.UPI
    assert fee.remarks == "october"
    assert fee.student_name == "Kiran Rao"
    assert fee.student_uid == "uid-ts-1"
    assert RECEIPT_RE.match(fee.receipt_no)
    assert fee.receipt_no.startswith("TRN-202610-")
    assert repo.get(fee.fee_id).final_amount == Decimal("1850")


def test_base_fee_defaults_to_the_students_fee_amount():
    svc, _ = _service()

    fee = svc.generate_fee("tr-1", "ts-1", month=1, year=2027, now=NOW)

    assert fee.base_fee == Decimal("2000")
    assert fee.final_amount == Decimal("2000")


def test_second_fee_for_the_same_period_is_refused_without_changes():
    svc, repo = _service()
    first = svc.generate_fee("tr-1", "ts-1", month=10, year=2026, base_fee=2000, now=NOW)

    with pytest.raises(DuplicatePeriodError):
        svc.generate_fee("tr-1", "ts-1", month=10, year=2026, base_fee=3000, now=NOW)

    assert repo.creates == 1
    assert repo.get(first.fee_id) == first

    # another month is fine
    svc.generate_fee("tr-1", "ts-1", month=11, year=2026, base_fee=2000, now=NOW)
    assert repo.creates == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"month": 13, "year": 2026},
        {"month": 0, "year": 2026},
        {"month": "x", "year": 2026},
        {"month": 10, "year": 2026, "base_fee": 0},
        {"month": 10, "year": 2026, "base_fee": "abc"},
        {"month": 10, "year": 2026, "discount": -1},
        {"month": 10, "year": 2026, "extra_charges": -5},
        {"month": 10, "year": 2026, "base_fee": 1000, "discount": 1500},
        {"month": 10, "year": 2026, "payment_mode": "Cheque"},
    ],
)
def test_invalid_fee_input_is_rejected(kwargs):
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.generate_fee("tr-1", "ts-1", now=NOW, **kwargs)
    assert repo.creates == 0


def test_trainer_can_only_bill_their_own_students():
    svc, repo = _service()

    with pytest.raises(ValidationError):
        svc.generate_fee("tr-2", "ts-1", month=10, year=2026, now=NOW)
    assert repo.creates == 0


def test_mark_paid_is_one_way():
    svc, repo = _service()
    fee = svc.generate_fee("tr-1", "ts-1", month=10, year=2026, now=NOW)

    svc.mark_paid("tr-1", "ts-1", fee.fee_id, now=NOW)
    paid = repo.get(fee.fee_id)
    assert paid.status == FeeStatus.PAID
    assert paid.paid_at == NOW

    with pytest.raises(ValidationError):
        svc.mark_paid("tr-1", "ts-1", fee.fee_id, now=NOW)


def test_delete_fee_removes_it_and_frees_the_period():
    svc, repo = _service()
    fee = svc.generate_fee("tr-1", "ts-1", month=10, year=2026, now=NOW)
    svc.mark_paid("tr-1", "ts-1", fee.fee_id, now=NOW)

    svc.delete_fee("tr-1", "ts-1", fee.fee_id)

    assert repo.get(fee.fee_id) is None
    with pytest.raises(ValidationError):
        svc.delete_fee("tr-1", "ts-1", fee.fee_id)
    svc.generate_fee("tr-1", "ts-1", month=10, year=2026, now=NOW)


def test_fee_history_is_newest_period_first():
    svc, _ = _service()
    for month, year in [(11, 2025), (2, 2026), (12, 2025)]:
        svc.generate_fee("tr-1", "ts-1", month=month, year=year, now=NOW)

    periods = [(f.year, f.month) for f in svc.fee_history("tr-1", "ts-1")]
    assert periods == [(2026, 2), (2025, 12), (2025, 11)]
    assert len(svc.fees_for_member("ts-1")) == 3
    assert len(svc.fees_for_member("uid-ts-1")) == 3
    assert svc.fees_for_member("ts-2") == []


@pytest.mark.parametrize(
    "issued_at, prefix",
    [
        (datetime(2026, 3, 1), "TRN-20263-"),
        (datetime(2026, 12, 31), "TRN-202612-"),
    ],
)
def test_receipt_number_uses_unpadded_issue_month(issued_at, prefix):
    receipt = ReceiptNumberGenerator(random.Random(1)).next(issued_at)

    assert receipt.startswith(prefix)
    assert RECEIPT_RE.match(receipt)
    assert 1000 <= int(receipt.rsplit("-", 1)[1]) <= 9999
