"""Static supply catalog: categories, allowed products and their units.

The catalog is fixed at build time.  Categories are persisted by their
Korean value so stored orders stay readable by branch staff.
"""

from __future__ import annotations

from enum import Enum

from supply_orders.domain.exceptions import ValidationError


class Category(Enum):
    VEGETABLE = "야채"
    SEASONING = "양념"
    SAUCE = "소스"
    OTHER = "기타"

    @property
    def is_free_text(self) -> bool:
        """Miscellaneous rows take any product name and any quantity text."""
        return self is Category.OTHER

    @staticmethod
    def parse(value: str) -> Category:
        """Accept either the stored value ("야채") or the member name ("vegetable")."""
        raw = (value or "").strip()
        for category in Category:
            if raw == category.value or raw.upper() == category.name:
                return category
        raise ValidationError(f"Unknown category: {value!r}")


# Display order for order forms and history cards
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.VEGETABLE,
    Category.SEASONING,
    Category.SAUCE,
    Category.OTHER,
)

BRANCHES: tuple[str, ...] = tuple(f"{n}번 지점" for n in range(1, 15))

PRODUCT_UNITS: dict[str, str] = {
    "무": "박스",
    "절임무": "박스",
    "배추": "포기",
    "오이": "박스",
    "양파": "망",
    "파": "단",
    "대파": "단",
    "마늘": "망",
    "당근": "박스",
    "양배추": "통",
    "마늘양념": "통",
    "고추장양념": "통",
    "간마늘": "kg",
    "생강양념": "통",
    "간장소스": "통",
    "된장양념": "통",
    "초고추장": "통",
    "와사비소스": "통",
}

_PRODUCTS: dict[Category, tuple[str, ...]] = {
    Category.VEGETABLE: tuple(
        sorted(["무", "절임무", "배추", "오이", "양파", "파", "대파", "마늘", "당근", "양배추"])
    ),
    Category.SEASONING: tuple(sorted(["마늘양념", "고추장양념", "간마늘", "생강양념"])),
    Category.SAUCE: tuple(sorted(["간장소스", "된장양념", "초고추장", "와사비소스"])),
    Category.OTHER: (),
}


def products_for(category: Category) -> list[str]:
    """Products selectable for *category*; empty for free-text categories."""
    return list(_PRODUCTS[category])


def unit_for(product: str) -> str:
    return PRODUCT_UNITS.get(product, "")


def display_label(category: Category) -> str:
    if category is Category.OTHER:
        return "잡화(기타)"
    return category.value
