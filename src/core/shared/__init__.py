"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Result (desfecho tipado dos Use Cases)
- Interfaces (Ports) transversais
- Base classes para Domain Events
"""

from .exceptions import (
    DomainException,
    ValidationError,
    RepositoryError,
    UniqueViolationError,
)
from .events import DomainEvent
from .interfaces import UnitOfWork, EventPublisher
from .result import Result

__all__ = [
    "DomainException",
    "ValidationError",
    "RepositoryError",
    "UniqueViolationError",
    "DomainEvent",
    "UnitOfWork",
    "EventPublisher",
    "Result",
]
