"""FastAPI dependencies (composition root).

Routes depend only on these providers; settings are resolved here and
passed into services as plain values.
"""

from compliancedocs.api.dependencies.auth import (
    CurrentIdentity,
    get_access_guard,
    get_credential_service,
    get_current_identity,
    require_permission,
)
from compliancedocs.api.dependencies.catalog import (
    get_category_reader,
    get_category_service,
)
from compliancedocs.api.dependencies.document import (
    get_document_command_service,
    get_document_query_service,
    get_file_store,
)

__all__ = [
    "CurrentIdentity",
    "get_access_guard",
    "get_category_reader",
    "get_category_service",
    "get_credential_service",
    "get_current_identity",
    "get_document_command_service",
    "get_document_query_service",
    "get_file_store",
    "require_permission",
]
