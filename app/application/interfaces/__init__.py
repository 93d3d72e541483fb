"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import IAuthorRepository
from app.application.interfaces.services import (
    IAuthorSerializer,
    IAuthorValidator,
)

__all__ = [
    "IAuthorRepository",
    "IAuthorSerializer",
    "IAuthorValidator",
]
