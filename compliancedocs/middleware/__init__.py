"""HTTP middleware: request size limit, request ID / access log, security headers.

Applied in main app; order matters (last added = outermost).
"""

from compliancedocs.middleware.request_id import RequestIDMiddleware
from compliancedocs.middleware.request_size_limit import RequestSizeLimitMiddleware
from compliancedocs.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
]
