"""
Billing Ledger Evaluator

Monthly tuition is owed for every calendar month from the enrollment month on.
A month counts towards arrears once its due date (payment_day clamped to the
month's length) has arrived and no payment of the student falls inside it.

Everything here is pure: callers pass the student snapshot, their payments and
"today". Nothing reads the clock or touches the database.
"""
import calendar
import datetime
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from dateutil.relativedelta import relativedelta

from schemas.billing import StudentBilling, PaymentRecord, clamp_payment_day


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


@dataclass(frozen=True, order=True)
class BillingPeriod:
    year: int
    month: int

    @classmethod
    def from_date(cls, day: datetime.date) -> "BillingPeriod":
        return cls(day.year, day.month)

    @property
    def first_day(self) -> datetime.date:
        return datetime.date(self.year, self.month, 1)

    @property
    def last_day(self) -> datetime.date:
        return datetime.date(self.year, self.month, last_day_of_month(self.year, self.month))

    @property
    def label(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"

    def due_date(self, payment_day) -> datetime.date:
        """payment_day=31 in February -> 28th (29th in a leap year)"""
        day = min(clamp_payment_day(payment_day), last_day_of_month(self.year, self.month))
        return datetime.date(self.year, self.month, day)

    def contains(self, day: datetime.date) -> bool:
        return day.year == self.year and day.month == self.month

    def shift(self, months: int) -> "BillingPeriod":
        return BillingPeriod.from_date(self.first_day + relativedelta(months=months))

    def next(self) -> "BillingPeriod":
        return self.shift(1)


def billing_periods(enrollment_date: Optional[datetime.date], through_year: int, through_month: int) -> Iterator[BillingPeriod]:
    """Every month from the enrollment month up to and including (through_year, through_month)"""
    if enrollment_date is None:
        return
    period = BillingPeriod.from_date(enrollment_date)
    limit = BillingPeriod(through_year, through_month)
    while period <= limit:
        yield period
        period = period.next()


def _own_payments(student: StudentBilling, payments: Iterable[PaymentRecord]) -> Iterator[PaymentRecord]:
    for p in payments:
        if student.id is not None and p.student_id is not None and p.student_id != student.id:
            continue
        yield p


def find_payment_for_month(student: StudentBilling, payments: Iterable[PaymentRecord], year: int, month: int) -> Optional[PaymentRecord]:
    """First payment of the student dated inside (year, month), if any"""
    period = BillingPeriod(year, month)
    for p in _own_payments(student, payments):
        if period.contains(p.payment_date):
            return p
    return None


def is_settled_for_month(student: StudentBilling, payments: Iterable[PaymentRecord], year: int, month: int) -> bool:
    # Any payment settles the month, whatever its amount
    return find_payment_for_month(student, payments, year, month) is not None


def unpaid_periods(student: StudentBilling, payments: Iterable[PaymentRecord], as_of_year: int, as_of_month: int, today: datetime.date) -> List[BillingPeriod]:
    """Due and unsettled months from enrollment through (as_of_year, as_of_month)"""
    settled = {BillingPeriod.from_date(p.payment_date) for p in _own_payments(student, payments)}
    owed = []
    for period in billing_periods(student.enrollment_date, as_of_year, as_of_month):
        if period.due_date(student.payment_day) > today:
            continue
        if period not in settled:
            owed.append(period)
    return owed


def compute_arrears(student: StudentBilling, payments: Iterable[PaymentRecord], as_of_year: int, as_of_month: int, today: datetime.date) -> int:
    """
    Cumulative unpaid tuition as of `today` for the months up to the viewed one.

    The current fee is applied to every past month, so a fee change re-prices
    old unpaid months as well.
    """
    if student.enrollment_date is None or not student.tuition_fee:
        return 0
    owed = unpaid_periods(student, payments, as_of_year, as_of_month, today)
    return len(owed) * student.tuition_fee
