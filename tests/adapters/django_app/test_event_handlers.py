"""
Testes para publishers e handlers de eventos.

As tasks Celery são chamadas diretamente (execução síncrona);
as chamadas `.delay` encadeadas são substituídas por mocks.
"""

from unittest.mock import Mock, patch

import pytest

from src.adapters.django_app.events import handlers
from src.adapters.django_app.events.publishers import (
    CeleryEventPublisher,
    InMemoryEventPublisher,
    LoggingEventPublisher,
    get_event_publisher,
)
from src.core.persons.events import (
    PessoaAtualizadaEvent,
    PessoaCadastradaEvent,
    PessoaInativadaEvent,
    RecuperacaoSenhaSolicitadaEvent,
    SenhaAlteradaEvent,
)


HANDLERS_MODULE = 'src.adapters.django_app.events.handlers'


# =============================================================================
# Publishers
# =============================================================================

class TestGetEventPublisher:

    @pytest.mark.parametrize("mode,esperado", [
        ("celery", CeleryEventPublisher),
        ("memory", InMemoryEventPublisher),
        ("MEMORY", InMemoryEventPublisher),
        ("logging", LoggingEventPublisher),
        (None, LoggingEventPublisher),
        ("desconhecido", LoggingEventPublisher),
    ])
    def test_modo(self, mode, esperado):
        assert isinstance(get_event_publisher(mode), esperado)


class TestInMemoryEventPublisher:

    def test_registra_e_filtra(self):
        publisher = InMemoryEventPublisher()
        publisher.publish(PessoaCadastradaEvent(aggregate_id="p-1"))
        publisher.publish(PessoaInativadaEvent(aggregate_id="p-1"))

        assert len(publisher.published_events) == 2
        assert len(publisher.get_events_by_type("PessoaInativadaEvent")) == 1

        publisher.clear()
        assert publisher.published_events == []


class TestLoggingEventPublisher:

    def test_handler_local_recebe_evento(self):
        publisher = LoggingEventPublisher()
        recebidos = []
        publisher.register_handler("SenhaAlteradaEvent", recebidos.append)

        evento = SenhaAlteradaEvent(aggregate_id="p-1", email="ana@cif.com")
        publisher.publish(evento)

        assert recebidos == [evento]

    def test_erro_no_handler_nao_propaga(self):
        publisher = LoggingEventPublisher()
        publisher.register_handler("SenhaAlteradaEvent", Mock(side_effect=RuntimeError))

        publisher.publish(SenhaAlteradaEvent(aggregate_id="p-1"))


class TestCeleryEventPublisher:

    def test_envia_para_dispatcher(self):
        with patch(f'{HANDLERS_MODULE}.dispatch_domain_event') as dispatcher:
            CeleryEventPublisher(also_log=False).publish(
                PessoaCadastradaEvent(aggregate_id="p-1", email="ana@cif.com")
            )

        event_type, event_data = dispatcher.delay.call_args[0]
        assert event_type == "PessoaCadastradaEvent"
        assert event_data["aggregate_id"] == "p-1"

    def test_broker_fora_nao_propaga(self):
        with patch(f'{HANDLERS_MODULE}.dispatch_domain_event') as dispatcher:
            dispatcher.delay.side_effect = ConnectionError("broker fora")

            CeleryEventPublisher().publish(PessoaCadastradaEvent(aggregate_id="p-1"))


class TestPayloadSemSenha:

    def test_evento_cadastro_nao_carrega_senha(self):
        data = PessoaCadastradaEvent(aggregate_id="p-1", email="ana@cif.com").to_dict()

        assert "senha" not in data
        assert "senha_hash" not in data


# =============================================================================
# Dispatcher
# =============================================================================

class TestDispatchDomainEvent:

    def test_roteia_para_handler(self):
        handler = Mock()
        with patch.dict(handlers.EVENT_HANDLERS, {'PessoaCadastradaEvent': handler}):
            handlers.dispatch_domain_event('PessoaCadastradaEvent', {'aggregate_id': 'p-1'})

        handler.delay.assert_called_once_with({'aggregate_id': 'p-1'})

    def test_evento_desconhecido_e_ignorado(self):
        handlers.dispatch_domain_event('EventoInexistente', {})

    def test_todos_os_eventos_de_pessoa_tem_handler(self):
        assert set(handlers.EVENT_HANDLERS) == {
            'PessoaCadastradaEvent',
            'PessoaAtualizadaEvent',
            'SenhaAlteradaEvent',
            'RecuperacaoSenhaSolicitadaEvent',
            'PessoaInativadaEvent',
            'PessoaReativadaEvent',
        }

    def test_atualizacao_vai_para_auditoria(self):
        evento = PessoaAtualizadaEvent(aggregate_id='p-1')

        with patch.object(handlers.handle_status_pessoa_alterado, 'delay') as delay:
            handlers.dispatch_domain_event(evento.event_type, evento.to_dict())

        delay.assert_called_once_with(evento.to_dict())


# =============================================================================
# Handlers
# =============================================================================

class TestHandlers:

    def test_cadastro_envia_boas_vindas_e_avisa_terapeuta(self):
        evento = PessoaCadastradaEvent(
            aggregate_id='p-1',
            papel='Paciente',
            email='joao@cif.com',
            terapeuta_id='t-1',
        )

        with patch(f'{HANDLERS_MODULE}.notify_user') as notify_user, \
                patch(f'{HANDLERS_MODULE}.notify_therapist') as notify_therapist:
            handlers.handle_pessoa_cadastrada(evento.to_dict())

        assert notify_user.delay.call_args.kwargs['email'] == 'joao@cif.com'
        notify_therapist.delay.assert_called_once_with(terapeuta_id='t-1', paciente_id='p-1')

    def test_cadastro_sem_terapeuta(self):
        evento = PessoaCadastradaEvent(aggregate_id='t-1', papel='Terapeuta', email='ana@cif.com')

        with patch(f'{HANDLERS_MODULE}.notify_user'), \
                patch(f'{HANDLERS_MODULE}.notify_therapist') as notify_therapist:
            handlers.handle_pessoa_cadastrada(evento.to_dict())

        notify_therapist.delay.assert_not_called()

    def test_recuperacao_nao_envia_senha(self):
        evento = RecuperacaoSenhaSolicitadaEvent(aggregate_id='p-1', email='ana@cif.com')

        with patch(f'{HANDLERS_MODULE}.notify_user') as notify_user:
            handlers.handle_recuperacao_senha_solicitada(evento.to_dict())

        kwargs = notify_user.delay.call_args.kwargs
        assert kwargs['email'] == 'ana@cif.com'
        assert kwargs['subject'] == "Recuperação de senha"

    def test_senha_alterada_sem_email_nao_notifica(self):
        with patch(f'{HANDLERS_MODULE}.notify_user') as notify_user:
            handlers.handle_senha_alterada({'aggregate_id': 'p-1'})

        notify_user.delay.assert_not_called()


class TestNotifications:

    def test_notify_user_envia_email(self, mailoutbox):
        handlers.notify_user(
            email='ana@cif.com',
            subject='Assunto',
            message='Corpo',
        )

        assert len(mailoutbox) == 1
        assert mailoutbox[0].to == ['ana@cif.com']
        assert mailoutbox[0].from_email == 'nao-responda@cif.local'

    @pytest.mark.django_db
    def test_notify_therapist(self, person_model_factory):
        terapeuta = person_model_factory()

        with patch(f'{HANDLERS_MODULE}.notify_user') as notify_user:
            handlers.notify_therapist(terapeuta_id=terapeuta.id, paciente_id='p-1')

        assert notify_user.delay.call_args.kwargs['email'] == 'ana@cif.com'

    @pytest.mark.django_db
    def test_notify_therapist_inexistente(self):
        with patch(f'{HANDLERS_MODULE}.notify_user') as notify_user:
            handlers.notify_therapist(terapeuta_id='nao-existe', paciente_id='p-1')

        notify_user.delay.assert_not_called()
