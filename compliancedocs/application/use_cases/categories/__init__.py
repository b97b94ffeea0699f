"""Category catalog use cases."""

from compliancedocs.application.use_cases.categories.category_operations import (
    CategoryService,
)

__all__ = ["CategoryService"]
