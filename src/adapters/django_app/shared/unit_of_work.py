"""
Unit of Work - Implementação Django.

Gerencia a transação atômica de um Use Case, garantindo que
escritas e eventos reflitam o mesmo desfecho.

Responsabilidades:
- Abrir/fechar bloco transaction.atomic()
- Commit/Rollback coordenado
- Publicar eventos somente após commit bem-sucedido

Observação:
    O bloco atômico vira savepoint quando já existe uma transação
    aberta (ex.: testes com pytest-django), então o mesmo código
    funciona dentro e fora de transações externas.
"""

from typing import List, Optional
import logging

from django.db import transaction

from src.core.shared.events import DomainEvent
from src.core.shared.interfaces import EventPublisher, UnitOfWork

logger = logging.getLogger(__name__)


class DjangoUnitOfWork(UnitOfWork):
    """
    Implementação Django do Unit of Work.

    Eventos ficam retidos até o commit. Em rollback são descartados.
    A instância é reutilizável: cada `with` abre uma nova transação.

    Example:
        with DjangoUnitOfWork(event_publisher) as uow:
            repo.create(pessoa)
            uow.publish_event(PessoaCadastradaEvent(...))
        # Commit automático + eventos publicados

    Example com rollback:
        with DjangoUnitOfWork() as uow:
            repo.create(pessoa)
            raise Exception("Erro!")
        # Rollback automático, eventos descartados
    """

    def __init__(self, event_publisher: Optional[EventPublisher] = None, using: Optional[str] = None):
        """
        Inicializa Unit of Work.

        Args:
            event_publisher: Publicador de eventos (Celery, logging, memória)
            using: Alias do banco (padrão: 'default')
        """
        super().__init__()
        self._event_publisher = event_publisher
        self._using = using
        self._atomic = None

    def _begin_transaction(self) -> None:
        self.clear_events()
        self._atomic = transaction.atomic(using=self._using)
        self._atomic.__enter__()
        logger.debug("Transaction started")

    def commit(self) -> None:
        """
        Fecha o bloco atômico e publica os eventos retidos.

        Raises:
            Exception: Se o commit do banco falhar (eventos descartados)
        """
        if self._atomic is None:
            return

        atomic, self._atomic = self._atomic, None
        try:
            atomic.__exit__(None, None, None)
        except Exception as e:
            logger.error(f"Commit failed: {e}")
            self.clear_events()
            raise

        logger.debug("Transaction committed")
        self._publish_events()

    def rollback(self) -> None:
        """Desfaz as escritas do bloco e descarta eventos."""
        self.clear_events()
        if self._atomic is None:
            return

        atomic, self._atomic = self._atomic, None
        transaction.set_rollback(True, using=self._using)
        atomic.__exit__(None, None, None)
        logger.debug("Transaction rolled back")

    def _publish_events(self) -> None:
        """
        Publica eventos para handlers assíncronos.

        Falha de publicação não desfaz o commit: o erro é logado.
        """
        events = self.collect_events()
        self.clear_events()

        for event in events:
            logger.info(
                f"Publishing event: {event.event_type} "
                f"for aggregate {event.aggregate_id}"
            )
            if self._event_publisher:
                try:
                    self._event_publisher.publish(event)
                except Exception as e:
                    logger.error(f"Failed to publish event: {e}")


class InMemoryUnitOfWork(UnitOfWork):
    """
    Unit of Work em memória para testes.

    Não persiste nada - apenas registra commits, rollbacks
    e eventos publicados.

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
        """Retorna eventos que foram 'publicados'."""
        return self._published_events
