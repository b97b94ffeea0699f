"""Shared utilities: UTC datetimes and id generators."""

from compliancedocs.shared.utils.datetime import days_from_now, ensure_utc, utc_now
from compliancedocs.shared.utils.generators import generate_cuid, generate_storage_name

__all__ = [
    "days_from_now",
    "ensure_utc",
    "generate_cuid",
    "generate_storage_name",
    "utc_now",
]
