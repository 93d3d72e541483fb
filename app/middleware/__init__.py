"""HTTP middleware: request ID (bound to logging context).

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
