"""
client/app/categories.py

Category slug → icon asset.

The icon is resolved once when the category table is loaded; rendering code
only reads CategoryInfo.icon.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from client.app.schemas import CategoryRead

logger = logging.getLogger(__name__)


class Category(str, Enum):
    BARBER = "barber"
    CAFES = "cafes"
    BEAUTY = "beauty"
    WELLNESS = "wellness"
    SPORTS = "sports"
    SERVICES = "services"


# icon name (as stored by the API) → glyph shown on buttons
ICON_ASSETS = {
    "scissors": "✂️",
    "coffee": "☕",
    "sparkles": "✨",
    "activity": "🧘",
    "globe": "⚽",
    "wrench": "🔧",
}

DEFAULT_ICON = "coffee"


@dataclass(frozen=True)
class CategoryInfo:
    id: str
    slug: str
    name: str
    name_en: str
    description: str
    icon: str

    def title(self, lang: str) -> str:
        return self.name_en if lang == "en" else self.name


_DEFAULT_ROWS = [
    ("1", Category.BARBER, "Berber", "Barber", "Profesionalno šišanje", "scissors"),
    ("2", Category.CAFES, "Kafići", "Cafes", "Rezervišite stolove", "coffee"),
    ("3", Category.BEAUTY, "Ljepota", "Beauty", "Saloni & spa", "sparkles"),
    ("4", Category.WELLNESS, "Wellness", "Wellness", "Um i tijelo", "activity"),
    ("5", Category.SPORTS, "Sport", "Sports", "Tereni i treninzi", "globe"),
    ("6", Category.SERVICES, "Usluge", "Services", "Kućne popravke", "wrench"),
]


def icon_asset(icon: str) -> str:
    asset = ICON_ASSETS.get(icon)
    if asset is None:
        logger.warning(f"Unknown category icon {icon!r}, using {DEFAULT_ICON}")
        return ICON_ASSETS[DEFAULT_ICON]
    return asset


def load_categories(rows: Iterable[CategoryRead]) -> list[CategoryInfo]:
    """Resolve API categories to CategoryInfo with their icon asset."""
    return [
        CategoryInfo(
            id=row.id,
            slug=row.slug,
            name=row.name,
            name_en=row.name_en,
            description=row.description or "",
            icon=icon_asset(row.icon),
        )
        for row in rows
    ]


def default_categories() -> list[CategoryInfo]:
    """Static table shown when the API has no categories."""
    return load_categories(
        CategoryRead(id=id_, slug=cat.value, name=name, name_en=name_en, description=desc, icon=icon)
        for id_, cat, name, name_en, desc, icon in _DEFAULT_ROWS
    )
