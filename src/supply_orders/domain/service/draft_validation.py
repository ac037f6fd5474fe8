"""Submission checks for a draft.

The checks run in a fixed order and the first failure wins:

1. a branch must be chosen,
2. at least one row must exist,
3. every row must name a product (checked for *all* rows first),
4. every row must carry a quantity; catalog categories accept digits only.

A missing product anywhere is therefore reported before any quantity
problem, even one on an earlier row.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from supply_orders.domain.model.draft import Draft


class IssueKind(Enum):
    MISSING_BRANCH = "MissingBranch"
    EMPTY_ORDER = "EmptyOrder"
    MISSING_PRODUCT = "MissingProduct"
    MISSING_QUANTITY = "MissingQuantity"
    NON_NUMERIC_QUANTITY = "NonNumericQuantity"


_MESSAGES = {
    IssueKind.MISSING_BRANCH: "지점을 선택해주세요.",
    IssueKind.EMPTY_ORDER: "주문목록에 품목을 추가해주세요.",
    IssueKind.MISSING_PRODUCT: "품명이 선택되지 않은 품목이 있습니다.",
    IssueKind.MISSING_QUANTITY: "수량 입력이 누락 되었습니다",
    IssueKind.NON_NUMERIC_QUANTITY: "야채/양념/소스의 수량은 숫자만 입력할 수 있습니다.",
}


@dataclass(frozen=True)
class ValidationIssue:
    """The first rule a draft breaks, and the row that breaks it (if any)."""

    kind: IssueKind
    row_id: str | None = None

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]

    @property
    def is_product_issue(self) -> bool:
        return self.kind is IssueKind.MISSING_PRODUCT

    @property
    def is_quantity_issue(self) -> bool:
        return self.kind in (IssueKind.MISSING_QUANTITY, IssueKind.NON_NUMERIC_QUANTITY)


_NON_DIGIT = re.compile(r"[^0-9]")


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


def validate_draft(draft: Draft) -> ValidationIssue | None:
    """Return the first failing rule, or ``None`` if the draft can be submitted."""
    if not draft.branch:
        return ValidationIssue(IssueKind.MISSING_BRANCH)

    if not draft.items:
        return ValidationIssue(IssueKind.EMPTY_ORDER)

    for row in draft.items:
        if _is_blank(row.product):
            return ValidationIssue(IssueKind.MISSING_PRODUCT, row.id)

    for row in draft.items:
        if _is_blank(row.quantity):
            return ValidationIssue(IssueKind.MISSING_QUANTITY, row.id)
        if not row.category.is_free_text and _NON_DIGIT.search(row.quantity):
            return ValidationIssue(IssueKind.NON_NUMERIC_QUANTITY, row.id)

    return None
