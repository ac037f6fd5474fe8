"""Order history queries: filter, group by date, order branches naturally.

Everything here is pure: the same inputs always produce the same view,
and no input is modified.

Dates are zero-padded ``YYYY-MM-DD`` strings, so plain string comparison
gives calendar order.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Iterator

from supply_orders.domain.model.order import OrderRecord, creation_time

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class DateGroup:
    """All matching orders for one business date.

    ``orders`` is ordered by branch (natural order), then by creation time.
    """

    date: str
    orders: tuple[OrderRecord, ...]

    def entries(self) -> Iterator[tuple[OrderRecord, bool]]:
        """Yield ``(order, is_supplementary)``.

        The first order of a branch on a date is the regular order; every
        later one for the same branch is a supplementary order.
        """
        previous_branch: str | None = None
        for order in self.orders:
            yield order, order.branch == previous_branch
            previous_branch = order.branch

    def branches(self) -> list[str]:
        seen: list[str] = []
        for order in self.orders:
            if order.branch not in seen:
                seen.append(order.branch)
        return seen


# --- Natural branch order -----------------------------------------------------


def leading_int(label: str) -> int | None:
    """Integer prefix of a branch label ("10번 지점" -> 10), or None."""
    match = _LEADING_INT.match(label)
    if match is None:
        return None
    return int(match.group(1))


def _script_rank(char: str) -> int:
    category = unicodedata.category(char)
    if category == "Nd":
        return 1
    if not category.startswith("L"):
        return 0
    name = unicodedata.name(char, "")
    if name.startswith("HANGUL"):
        return 2
    if name.startswith("CJK"):
        return 3
    return 4


def _collation_key(label: str) -> tuple:
    """Sort key following Korean collation rules.

    Compared level by level: script and base letter first (symbols, digits,
    Hangul, Han, then other scripts), then accents, then case with
    lowercase ahead of uppercase.
    """
    text = unicodedata.normalize("NFC", label)
    letters, accents, case = [], [], []
    for char in text:
        decomposed = unicodedata.normalize("NFD", char)
        base = "".join(c for c in decomposed if not unicodedata.combining(c)) or char
        letters.append((_script_rank(char), base.casefold()))
        accents.append(decomposed.casefold())
        case.append(char != char.lower())
    return letters, accents, case


def compare_branches(a: str, b: str) -> int:
    """Numbered branches sort by number and ahead of unnumbered ones."""
    na, nb = leading_int(a), leading_int(b)
    if na is not None and nb is not None:
        return (na > nb) - (na < nb)
    if na is not None:
        return -1
    if nb is not None:
        return 1
    ka, kb = _collation_key(a), _collation_key(b)
    if ka != kb:
        return -1 if ka < kb else 1
    return (a > b) - (a < b)


def sort_branches(labels: Iterable[str]) -> list[str]:
    return sorted(labels, key=cmp_to_key(compare_branches))


# --- Query --------------------------------------------------------------------


def matches(
    order: OrderRecord,
    branch: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> bool:
    if branch and order.branch != branch:
        return False
    if date_from and order.date < date_from:
        return False
    if date_to and order.date > date_to:
        return False
    return True


def _creation_key(order: OrderRecord) -> tuple[int, float]:
    created = creation_time(order)
    # Orders without a usable creation time go last, in input order
    if created is None:
        return (1, 0.0)
    return (0, created)


def build_history(
    orders: Iterable[OrderRecord],
    branch: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
    descending: bool = True,
) -> list[DateGroup]:
    """Filter *orders* and arrange them for the history view.

    Steps:
    1. Keep orders matching the branch and the inclusive date range.
    2. Bucket by business date (exact string).
    3. Order buckets by date, newest first when *descending*.
    4. Inside a bucket, order branches naturally, then orders of the same
       branch by creation time, oldest first.
    """
    buckets: dict[str, list[OrderRecord]] = {}
    for order in orders:
        if matches(order, branch, date_from, date_to):
            buckets.setdefault(order.date, []).append(order)

    dates = sorted(buckets, reverse=descending)

    groups: list[DateGroup] = []
    for day in dates:
        by_branch: dict[str, list[OrderRecord]] = {}
        for order in buckets[day]:
            by_branch.setdefault(order.branch, []).append(order)

        arranged: list[OrderRecord] = []
        for label in sort_branches(by_branch):
            arranged.extend(sorted(by_branch[label], key=_creation_key))
        groups.append(DateGroup(date=day, orders=tuple(arranged)))

    return groups
