"""Document use cases: commands and queries."""

from compliancedocs.application.use_cases.documents.document_operations import (
    DocumentCommandService,
    DocumentQueryService,
    parse_sort,
    parse_tags,
)

__all__ = [
    "DocumentCommandService",
    "DocumentQueryService",
    "parse_sort",
    "parse_tags",
]
