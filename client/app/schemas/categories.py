# client/app/schemas/categories.py

from typing import Optional

from ._base import ApiModel


class CategoryRead(ApiModel):
    id: str
    name: str
    name_en: str
    slug: str
    description: Optional[str] = None
    icon: str
    gradient: Optional[str] = None
