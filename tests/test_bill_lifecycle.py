from datetime import date

import pytest
from factories import make_bill, make_plain, make_scheduled

from fintrack.domain.exceptions import InvalidDayOfMonth, UnsupportedVariantChange
from fintrack.domain.helpers.bill_lifecycle import (
    create_recurring,
    mark_paid,
    reset_cycle_if_past_due,
    toggle_recurrence,
)
from fintrack.domain.models import Plain, Recurring, Scheduled


def test_create_recurring_clamps_in_leap_february():
    variant = create_recurring(31, date(2024, 2, 15))
    assert variant == Recurring(day_of_month=31, next_due_date=date(2024, 2, 29), paid=False)


@pytest.mark.parametrize("day", [0, 32, -1, None, "5", True])
def test_create_recurring_rejects_bad_day(day):
    with pytest.raises(InvalidDayOfMonth):
        create_recurring(day, date(2024, 2, 15))


def test_mark_paid_advances_with_clamp():
    bill = make_bill(31, date(2024, 1, 31))
    mark_paid(bill, date(2024, 1, 30))
    assert bill.variant.paid is True
    assert bill.variant.next_due_date == date(2024, 2, 29)

    mark_paid(bill, date(2024, 2, 28))
    assert bill.variant.next_due_date == date(2024, 3, 31)
    assert bill.variant.paid is True


def test_mark_paid_twelve_times_keeps_day_fifteen():
    bill = make_bill(15, date(2024, 6, 1))
    bill.variant = create_recurring(15, date(2024, 6, 1))
    assert bill.variant.next_due_date == date(2024, 6, 15)

    seen = []
    for _ in range(12):
        mark_paid(bill, date(2024, 6, 1))
        seen.append(bill.variant.next_due_date)

    assert all(d.day == 15 for d in seen)
    assert seen[0] == date(2024, 7, 15)
    assert seen[-1] == date(2025, 6, 15)


def test_mark_paid_does_not_catch_up_to_today():
    bill = make_bill(5, date(2024, 1, 5))
    mark_paid(bill, date(2024, 6, 1))
    assert bill.variant.next_due_date == date(2024, 2, 5)


def test_mark_paid_leaves_non_recurring_untouched():
    plain = make_plain()
    scheduled = make_scheduled(date(2024, 3, 1))
    mark_paid(plain, date(2024, 3, 2))
    mark_paid(scheduled, date(2024, 3, 2))
    assert plain.variant == Plain()
    assert scheduled.variant == Scheduled(date(2024, 3, 1))


def test_enable_recurrence_on_plain():
    transaction = make_plain()
    toggle_recurrence(transaction, True, 20, date(2024, 6, 10))
    assert transaction.variant == Recurring(20, date(2024, 6, 20), False)


def test_enable_recurrence_requires_day():
    transaction = make_plain()
    with pytest.raises(InvalidDayOfMonth):
        toggle_recurrence(transaction, True, None, date(2024, 6, 10))
    with pytest.raises(InvalidDayOfMonth):
        toggle_recurrence(transaction, True, 40, date(2024, 6, 10))
    assert transaction.variant == Plain()


def test_disable_recurrence_clears_paid_state():
    bill = make_bill(10, date(2024, 7, 10), paid=True)
    toggle_recurrence(bill, False, None, date(2024, 6, 20))
    assert bill.variant == Plain()
    assert not bill.is_recurring


def test_same_day_recomputes_due_date_and_keeps_paid():
    bill = make_bill(20, date(2024, 2, 20))
    toggle_recurrence(bill, True, 20, date(2024, 6, 1))
    assert bill.variant == Recurring(20, date(2024, 6, 20), False)

    paid = make_bill(10, date(2024, 7, 10), paid=True)
    toggle_recurrence(paid, True, 10, date(2024, 6, 20))
    assert paid.variant == Recurring(10, date(2024, 7, 10), True)


def test_new_day_moves_due_date_and_keeps_paid():
    bill = make_bill(10, date(2024, 7, 10), paid=True)
    toggle_recurrence(bill, True, 25, date(2024, 6, 20))
    assert bill.variant == Recurring(25, date(2024, 6, 25), True)


def test_changing_day_validates_new_day():
    bill = make_bill(10, date(2024, 7, 10))
    with pytest.raises(InvalidDayOfMonth):
        toggle_recurrence(bill, True, 0, date(2024, 6, 20))
    assert bill.variant == Recurring(10, date(2024, 7, 10), False)


def test_scheduled_cannot_become_recurring():
    scheduled = make_scheduled(date(2024, 3, 1))
    with pytest.raises(UnsupportedVariantChange):
        toggle_recurrence(scheduled, True, 5, date(2024, 2, 1))
    toggle_recurrence(scheduled, False, None, date(2024, 2, 1))
    assert scheduled.variant == Scheduled(date(2024, 3, 1))


def test_reset_snaps_to_reference_month():
    bill = make_bill(31, date(2024, 1, 31), paid=True)
    assert reset_cycle_if_past_due(bill, date(2024, 2, 15)) is True
    assert bill.variant.paid is False
    assert bill.variant.next_due_date == date(2024, 2, 29)


def test_reset_is_idempotent_once_current():
    bill = make_bill(31, date(2024, 1, 31), paid=True)
    reset_cycle_if_past_due(bill, date(2024, 2, 15))
    before = Recurring(bill.variant.day_of_month, bill.variant.next_due_date, bill.variant.paid)

    assert reset_cycle_if_past_due(bill, date(2024, 2, 15)) is False
    assert bill.variant == before


def test_reset_skips_bills_due_today_or_later():
    due_today = make_bill(15, date(2024, 2, 15), paid=True)
    assert reset_cycle_if_past_due(due_today, date(2024, 2, 15)) is False
    assert due_today.variant.paid is True


def test_reset_uses_same_month_not_next_month():
    # Several months behind: lands on this month's day even if that is still earlier
    bill = make_bill(10, date(2024, 1, 10))
    assert reset_cycle_if_past_due(bill, date(2024, 3, 20)) is True
    assert bill.variant.next_due_date == date(2024, 3, 10)


def test_reset_ignores_non_recurring():
    assert reset_cycle_if_past_due(make_plain(), date(2024, 3, 20)) is False
    assert reset_cycle_if_past_due(make_scheduled(date(2024, 1, 1)), date(2024, 3, 20)) is False
