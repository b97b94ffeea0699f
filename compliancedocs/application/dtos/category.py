"""DTOs for the category catalog."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class SubcategoryData:
    name: str
    description: str = ""


@dataclass(frozen=True)
class CategoryResult:
    """Category read-model with its subcategories in display order."""

    id: str
    name: str
    description: str
    subcategories: list[SubcategoryData] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_subcategory(self, name: str) -> bool:
        return any(s.name == name for s in self.subcategories)
