"""Integration tests for the order form session."""

from datetime import datetime

import pytest

from supply_orders.application.order_form import OrderFormSession
from supply_orders.domain.exceptions import DraftRejectedError
from supply_orders.domain.model.catalog import Category
from supply_orders.domain.model.draft import Draft
from supply_orders.domain.service.draft_validation import IssueKind
from tests.fakes import FakeDraftRepository, FakeOrderRepository

NOW = datetime(2025, 6, 1, 9, 30, 0)


def _setup(saved: Draft | None = None):
    order_repo = FakeOrderRepository(now=NOW)
    draft_repo = FakeDraftRepository(saved)
    session = OrderFormSession(order_repo, draft_repo, clock=lambda: NOW)
    return session, order_repo, draft_repo


def _fill_row(session: OrderFormSession, category=Category.VEGETABLE, product="무", qty="2"):
    row = session.add_row(category)
    if product:
        session.choose_product(row.id, product)
    if qty:
        session.enter_quantity(row.id, qty)
    return row


class TestOpening:

    def test_no_saved_draft_starts_fresh(self):
        session, _, _ = _setup()
        assert session.open() is False
        assert session.draft.date == "2025-06-01"
        assert session.draft.items == []

    def test_saved_draft_offered_and_resumed(self):
        saved = Draft(branch="5번 지점", date="2025-05-20", note="급함")
        session, _, _ = _setup(saved)
        assert session.open() is True
        session.resume_draft()
        assert session.draft.branch == "5번 지점"
        assert session.draft.note == "급함"

    def test_declining_saved_draft_discards_it(self):
        session, _, draft_repo = _setup(Draft(branch="5번 지점"))
        session.open()
        session.discard_draft()
        assert not draft_repo.exists()
        assert session.draft.branch == ""

    def test_leave_saves_current_draft(self):
        session, _, draft_repo = _setup()
        session.open()
        session.set_branch("2번 지점")
        _fill_row(session)
        session.leave()
        assert draft_repo.save_count == 1
        assert draft_repo.load().branch == "2번 지점"
        assert len(draft_repo.load().items) == 1


class TestEditing:

    def test_quantity_sanitized_for_catalog_rows(self):
        session, _, _ = _setup()
        row = _fill_row(session, qty="3개")
        assert session.draft.row(row.id).quantity == "3"

    def test_observers_notified(self):
        session, _, _ = _setup()
        seen = []
        session.subscribe(lambda d: seen.append(len(d.items)))
        _fill_row(session)
        assert seen == [1, 1, 1]


class TestSubmitting:

    def test_successful_submit_resets_form(self):
        session, order_repo, draft_repo = _setup(Draft(branch="9번 지점"))
        session.set_branch("1번 지점")
        _fill_row(session)
        record = session.submit()
        assert order_repo.load_all() == [record]
        assert not draft_repo.exists()
        assert session.draft.items == []
        assert session.draft.branch == ""

    def test_missing_product_marks_product_row(self):
        session, _, _ = _setup()
        session.set_branch("1번 지점")
        _fill_row(session, qty="")
        bad = _fill_row(session, product="")
        with pytest.raises(DraftRejectedError) as exc_info:
            session.submit()
        assert exc_info.value.issue.kind is IssueKind.MISSING_PRODUCT
        assert session.focus.product_error_row == bad.id
        assert session.focus.quantity_error_row is None

    def test_missing_quantity_marks_quantity_row(self):
        session, _, _ = _setup()
        session.set_branch("1번 지점")
        first = _fill_row(session, qty="")
        assert session.check().kind is IssueKind.MISSING_QUANTITY
        assert session.focus.quantity_error_row == first.id

    def test_non_numeric_other_row_is_accepted(self):
        session, _, _ = _setup()
        session.set_branch("1번 지점")
        _fill_row(session, Category.OTHER, "종이컵", "2박스")
        assert session.check() is None

    def test_corrective_edit_clears_marker_only_for_same_row(self):
        session, _, _ = _setup()
        session.set_branch("1번 지점")
        bad = _fill_row(session, qty="")
        other = _fill_row(session)
        session.check()
        assert session.focus.quantity_error_row == bad.id

        session.enter_quantity(other.id, "5")
        assert session.focus.quantity_error_row == bad.id

        session.enter_quantity(bad.id, "abc")  # sanitized to empty
        assert session.focus.quantity_error_row == bad.id

        session.enter_quantity(bad.id, "7")
        assert session.focus.quantity_error_row is None

    def test_product_choice_clears_product_marker(self):
        session, _, _ = _setup()
        session.set_branch("1번 지점")
        bad = _fill_row(session, product="")
        session.check()
        session.choose_product(bad.id, "오이")
        assert session.focus.product_error_row is None

    def test_success_clears_markers(self):
        session, _, _ = _setup()
        session.set_branch("1번 지점")
        row = _fill_row(session, product="")
        session.check()
        session.focus.mark_invalid_quantity(row.id)
        session.choose_product(row.id, "무")
        assert session.check() is None
        assert session.focus.quantity_error_row is None
        assert session.focus.product_error_row is None

    def test_header_errors_leave_markers_alone(self):
        session, _, _ = _setup()
        row = _fill_row(session, qty="")
        session.focus.mark_invalid_quantity(row.id)
        assert session.check().kind is IssueKind.MISSING_BRANCH
        assert session.focus.quantity_error_row == row.id
