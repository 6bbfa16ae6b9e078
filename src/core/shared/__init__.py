"""
Shared Domain Components.

Contém componentes compartilhados entre todos os domínios:
- Exceções de domínio
- Interfaces (Ports)
- Base classes para Domain Events
- Repositório genérico em memória (testes)
"""

from .exceptions import (
    AuthenticationError,
    BusinessRuleViolationError,
    DomainException,
    DuplicateRecordError,
    EntityNotFoundError,
    PermissionDeniedError,
    RepositoryError,
    SchemaMismatchError,
    ValidationError,
)
from .events import DomainEvent
from .interfaces import EventPublisher, Repository, UnitOfWork

__all__ = [
    "DomainException",
    "ValidationError",
    "EntityNotFoundError",
    "BusinessRuleViolationError",
    "AuthenticationError",
    "PermissionDeniedError",
    "RepositoryError",
    "SchemaMismatchError",
    "DuplicateRecordError",
    "DomainEvent",
    "EventPublisher",
    "Repository",
    "UnitOfWork",
]
