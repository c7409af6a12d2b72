from datetime import date
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from schemas.billing import StudentBilling, PaymentRecord, clamp_payment_day


@pytest.mark.parametrize("raw, expected", [
    (None, 1),
    (0, 1),
    (1, 1),
    (15, 15),
    (31, 31),
    (45, 31),
    (-3, 1),
    ("20", 20),
])
def test_clamp_payment_day(raw, expected):
    assert clamp_payment_day(raw) == expected


def test_student_defaults():
    s = StudentBilling()
    assert s.enrollment_date is None
    assert s.tuition_fee == 0
    assert s.payment_day == 1


def test_student_from_orm_row():
    row = SimpleNamespace(id=7, enrollment_date=date(2024, 1, 10), tuition_fee=None, payment_day=0, name="ignored")
    s = StudentBilling.model_validate(row)
    assert (s.id, s.tuition_fee, s.payment_day) == (7, 0, 1)


def test_empty_enrollment_string_is_missing():
    assert StudentBilling(enrollment_date="").enrollment_date is None


def test_negative_fee_rejected():
    with pytest.raises(ValidationError):
        StudentBilling(tuition_fee=-1)


def test_malformed_date_rejected():
    with pytest.raises(ValidationError):
        PaymentRecord(student_id=1, payment_date="not-a-date")


def test_payment_from_string_date():
    p = PaymentRecord(student_id=1, payment_date="2024-02-12", amount=None)
    assert p.payment_date == date(2024, 2, 12)
    assert p.amount == 0
