"""
Event Publishers - Publicadores de Eventos de Domínio.

Responsável por entregar eventos aos handlers.
Implementações:
- LoggingEventPublisher: Loga e executa os handlers no próprio processo (modo sync)
- CeleryEventPublisher: Publica via Celery (modo celery)
- InMemoryEventPublisher: Para testes

Padrão Observer/Pub-Sub para desacoplamento.
"""

from typing import Callable, Dict, List
import json
import logging

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


class LoggingEventPublisher(EventPublisher):
    """
    Publisher síncrono.

    Loga o evento e, com `executar_handlers`, roda os handlers de
    domínio no próprio processo (sem broker). Handlers extras podem
    ser registrados com `register_handler`.
    """

    def __init__(self, log_level: int = logging.INFO, executar_handlers: bool = True):
        self._log_level = log_level
        self._executar_handlers = executar_handlers
        self._handlers: Dict[str, List[Handler]] = {}

    def publish(self, event: DomainEvent) -> None:
        event_data = event.to_dict()

        logger.log(
            self._log_level,
            f"[EVENT] {event.event_type} | "
            f"aggregate={event.aggregate_id} | "
            f"data={json.dumps(event_data, default=str)}"
        )

        if self._executar_handlers:
            from src.adapters.django_app.events.handlers import processar_evento
            processar_evento(event.event_type, event_data)

        self._dispatch_to_handlers(event)

    def register_handler(self, event_type: str, handler: Handler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def _dispatch_to_handlers(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(event.event_type, []):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Erro em handler para {event.event_type}")


class CeleryEventPublisher(EventPublisher):
    """
    Publisher que envia eventos para Celery.

    Usado em produção para processamento assíncrono.
    """

    def __init__(self, also_log: bool = True):
        self._also_log = also_log

    def publish(self, event: DomainEvent) -> None:
        """
        Raises:
            kombu.exceptions.OperationalError: Se o broker estiver indisponível
        """
        if self._also_log:
            logger.info(
                f"[EVENT->CELERY] {event.event_type} | "
                f"aggregate={event.aggregate_id}"
            )

        from src.adapters.django_app.events.handlers import dispatch_domain_event
        dispatch_domain_event.delay(event.event_type, event.to_dict())


class InMemoryEventPublisher(EventPublisher):
    """
    Publisher em memória para testes.

    Armazena eventos publicados para verificação em testes.
    """

    def __init__(self):
        self._published_events: List[DomainEvent] = []

    def publish(self, event: DomainEvent) -> None:
        self._published_events.append(event)

    @property
    def published_events(self) -> List[DomainEvent]:
        return self._published_events.copy()

    def clear(self) -> None:
        self._published_events.clear()

    def get_events_by_type(self, event_type: str) -> List[DomainEvent]:
        return [e for e in self._published_events if e.event_type == event_type]
