"""
Unit of Work - Implementações.

Gerencia a transação de um caso de uso e publica eventos de domínio
somente após o commit.

Implementações:
- DjangoUnitOfWork: transaction.atomic() do Django (backend store)
- NonTransactionalUnitOfWork: sem transação (backend REST, cada
  chamada HTTP é atômica por si)
- InMemoryUnitOfWork: testes
"""

from typing import List, Optional
import logging

from django.db import transaction

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class PublishingUnitOfWork(UnitOfWork):
    """
    Base com publicação de eventos pós-commit.

    Falha ao publicar não desfaz o que já foi gravado; o erro é
    registrado no log.
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None):
        super().__init__()
        self._event_publisher = event_publisher
        self._committed = False
        self._rolled_back = False

    def _publish_events(self) -> None:
        for event in self._events:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )
            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception:
                    logger.exception(f"Failed to publish event {event.event_type}")
        self.clear_events()

    @property
    def is_committed(self) -> bool:
        return self._committed

    @property
    def is_rolled_back(self) -> bool:
        return self._rolled_back


class DjangoUnitOfWork(PublishingUnitOfWork):
    """
    Implementação Django do Unit of Work.

    Abre um bloco transaction.atomic() ao entrar no contexto. Dentro
    de uma transação já aberta (testes, requests ATOMIC_REQUESTS) o
    bloco vira savepoint.

    Example:
        with DjangoUnitOfWork(publisher) as uow:
            repo.create(campos)
            uow.publish_event(MyEvent(...))
        # Commit automático + eventos publicados
    """

    def __init__(
        self,
        event_publisher: Optional[EventPublisher] = None,
        using: Optional[str] = None,
    ):
        super().__init__(event_publisher)
        self._using = using
        self._atomic = None

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Raises:
            DatabaseError: Se o commit falhar (eventos descartados)
        """
        if self._atomic is not None:
            atomic, self._atomic = self._atomic, None
            try:
                atomic.__exit__(None, None, None)
            except Exception:
                self._rolled_back = True
                self.clear_events()
                raise
            logger.debug("Transaction committed")

        self._committed = True
        if self._events:
            self._publish_events()

    def rollback(self) -> None:
        if self._atomic is not None:
            atomic, self._atomic = self._atomic, None
            transaction.set_rollback(True, using=self._using)
            atomic.__exit__(None, None, None)
            logger.debug("Transaction rolled back")

        self._rolled_back = True
        self.clear_events()


class NonTransactionalUnitOfWork(PublishingUnitOfWork):
    """Unit of Work do backend REST: só coordena eventos."""

    def _begin_transaction(self) -> None:
        self._committed = False
        self._rolled_back = False

    def commit(self) -> None:
        self._committed = True
        if self._events:
            self._publish_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Não persiste nada - apenas simula comportamento
    para testes unitários sem banco de dados.

    Example:
        uow = InMemoryUnitOfWork()
        with uow:
            uow.publish_event(event)

        assert uow.committed
        assert len(uow.published_events) == 1
    """

    def __init__(self):
        super().__init__()
        self._committed = False
        self._rolled_back = False
        self._published_events: List[DomainEvent] = []

    def _begin_transaction(self) -> None:
        pass

    def commit(self) -> None:
        self._committed = True
        self._published_events.extend(self._events)
        self.clear_events()

    def rollback(self) -> None:
        self._rolled_back = True
        self.clear_events()

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events

    def reset(self) -> None:
        """Reset para próximo teste."""
        self._committed = False
        self._rolled_back = False
        self._published_events.clear()
        self.clear_events()
