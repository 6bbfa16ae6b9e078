"""
Interfaces (Ports) - Contratos entre Core e Adapters.

Este módulo define as interfaces que os Adapters devem implementar.
São os "Ports" da Arquitetura Hexagonal.

Tipos de Ports:
- Driven Ports (lado direito): Repository, UnitOfWork, EventPublisher
- Driving Ports (lado esquerdo): Definidos nos Use Cases

Princípio: Core define interfaces; Adapters implementam.
O fluxo de dependência sempre aponta para o Core.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Protocol, TypeVar

from .events import DomainEvent


T = TypeVar("T")


class UnitOfWork(ABC):
    """
    Unit of Work - Coordena transações atômicas.

    Garante que as operações de persistência de um caso de uso
    sejam executadas como uma única unidade e que eventos só
    sejam publicados após o commit.

    Pattern: Context Manager
        with uow:
            repo.create(campos)
            uow.publish_event(event)
        # Commit automático ao sair sem erro
        # Rollback automático se exceção
    """

    def __init__(self):
        self._events: List[DomainEvent] = []

    def __enter__(self) -> "UnitOfWork":
        self._begin_transaction()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False  # Não suprime exceções

    @abstractmethod
    def _begin_transaction(self) -> None:
        """Inicia uma nova transação no backend."""
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Persiste as mudanças e publica eventos.

        Ordem de execução:
        1. Commit da transação no backend
        2. Publicação de eventos enfileirados
        3. Limpeza de estado interno
        """
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Desfaz as mudanças e descarta eventos enfileirados."""
        raise NotImplementedError

    def publish_event(self, event: DomainEvent) -> None:
        """
        Enfileira evento para publicação após commit.

        Args:
            event: Evento de domínio a ser publicado
        """
        self._events.append(event)

    def collect_events(self) -> List[DomainEvent]:
        """Retorna eventos enfileirados (para testing/debugging)."""
        return list(self._events)

    def clear_events(self) -> None:
        self._events.clear()


class Repository(Protocol, Generic[T]):
    """
    Interface genérica de persistência por recurso.

    Mesmo contrato para o banco (Django ORM) e para a API REST
    de fallback. Escritas recebem dicionários de campos (patch
    parcial) e devolvem a entidade resultante.

    Type Parameters:
        T: Tipo da entidade gerenciada pelo repositório
    """

    def list_all(self) -> List[T]:
        """
        Lista registros, mais recentes primeiro.

        Raises:
            RepositoryError: Se o backend falhar
        """
        ...

    def get_by_id(self, entity_id: str) -> Optional[T]:
        """Busca por ID; None se não existir."""
        ...

    def create(self, campos: Dict[str, Any]) -> T:
        """
        Insere registro.

        Raises:
            DuplicateRecordError: Se violar chave natural única
            SchemaMismatchError: Se algum campo não existir no backend
        """
        ...

    def update(self, entity_id: str, campos: Dict[str, Any]) -> T:
        """
        Atualiza parcialmente o registro.

        Raises:
            EntityNotFoundError: Se registro não existe
            SchemaMismatchError: Se algum campo não existir no backend
        """
        ...

    def delete(self, entity_id: str) -> None:
        """
        Remove registro.

        Raises:
            EntityNotFoundError: Se registro não existe
        """
        ...


class EventPublisher(ABC):
    """
    Interface para publicação de eventos.

    Adapters implementam para integrar com log local ou Celery.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError

    def publish_batch(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)


UoW = UnitOfWork
