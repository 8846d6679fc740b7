"""
Testes de Integração End-to-End.

Testes que validam o fluxo completo da aplicação:
- Request HTTP → View → Use Case → Repository → Database
- Use Case → Unit of Work → Event Publisher

Usa o container real (Django ORM + hasher do Django), com o
publisher em memória definido por EVENT_PUBLISHER_MODE.
"""

import json

import pytest
from django.test import Client

from src.adapters.django_app.events.publishers import InMemoryEventPublisher
from src.adapters.django_app.persons.models import PersonModel
from src.config.container import get_container, reset_container


CPF_TERAPEUTA = "52998224725"
CPF_PACIENTE = "11144477735"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def container():
    """Container global recriado a cada teste."""
    reset_container()
    yield get_container()
    reset_container()


@pytest.fixture
def client(container):
    return Client()


@pytest.fixture
def event_publisher(container):
    publisher = container.event_publisher()
    assert isinstance(publisher, InMemoryEventPublisher)
    return publisher


def register(client, **data):
    return client.post(
        '/v1/person/register',
        data=json.dumps(data),
        content_type='application/json',
    )


@pytest.fixture
def terapeuta(client):
    response = register(
        client,
        cpf=CPF_TERAPEUTA,
        email='ana@cif.com',
        nome='Ana Souza',
        papel='TERAPEUTA',
        senha='abc123',
    )
    assert response.status_code == 201
    return response.json()['data']


# =============================================================================
# Ciclo de vida da pessoa
# =============================================================================

@pytest.mark.django_db
class TestPersonLifecycleIntegration:
    """Jornada completa sobre o banco."""

    def test_cadastro_grava_hash_e_publica_evento(self, client, terapeuta, event_publisher):
        model = PersonModel.objects.get(pk=terapeuta['id'])

        assert model.senha
        assert model.senha != 'abc123'
        assert [e.event_type for e in event_publisher.published_events] == [
            'PessoaCadastradaEvent'
        ]

    def test_paciente_vinculado_aparece_na_lista_do_terapeuta(self, client, terapeuta):
        response = register(
            client,
            cpf=CPF_PACIENTE,
            email='joao@cif.com',
            nome='João Lima',
            papel='PACIENTE',
            terapeuta_id=terapeuta['id'],
        )
        assert response.status_code == 201

        response = client.get(f"/v1/person/findPatientsByTherapist/{terapeuta['id']}")

        pacientes = response.json()['data']
        assert len(pacientes) == 1
        assert pacientes[0]['terapeuta']['id'] == terapeuta['id']

    def test_troca_de_senha_e_login(self, client, terapeuta):
        response = client.put(
            f'/v1/person/updatePassword/{CPF_TERAPEUTA}',
            HTTP_PASSWORD='nova123',
        )
        assert response.status_code == 200

        antiga = client.get('/v1/person/login', HTTP_USERLOGIN=CPF_TERAPEUTA, HTTP_PASSWORD='abc123')
        nova = client.get('/v1/person/login', HTTP_USERLOGIN=CPF_TERAPEUTA, HTTP_PASSWORD='nova123')

        assert antiga.status_code == 401
        assert nova.status_code == 200

    def test_inativacao_bloqueia_login_e_reativacao_libera(self, client, terapeuta):
        assert client.delete(f"/v1/person/delete/{terapeuta['id']}").status_code == 204
        assert PersonModel.objects.filter(pk=terapeuta['id']).exists()

        bloqueado = client.get('/v1/person/login', HTTP_USERLOGIN='ana@cif.com', HTTP_PASSWORD='abc123')
        assert bloqueado.status_code == 401

        assert client.put(f"/v1/person/reactivatePerson/{terapeuta['id']}").status_code == 200

        liberado = client.get('/v1/person/login', HTTP_USERLOGIN='ana@cif.com', HTTP_PASSWORD='abc123')
        assert liberado.status_code == 200

    def test_recuperacao_de_senha_publica_evento_sem_senha(self, client, terapeuta, event_publisher):
        response = client.get(f'/v1/person/forgotPassword/{CPF_TERAPEUTA}')

        assert response.status_code == 200
        eventos = event_publisher.get_events_by_type('RecuperacaoSenhaSolicitadaEvent')
        assert len(eventos) == 1
        assert 'abc123' not in json.dumps(eventos[0].to_dict(), default=str)


@pytest.mark.django_db
class TestConflitosIntegration:
    """Unicidade garantida pelo banco."""

    def test_email_duplicado(self, client, terapeuta):
        response = register(
            client,
            cpf=CPF_PACIENTE,
            email='ANA@cif.com',
            nome='Outra Ana',
        )

        assert response.status_code == 403
        assert response.json()['meta']['code'] == 'EMAIL_ALREADY_REGISTERED'
        assert PersonModel.objects.count() == 1

    def test_falha_nao_publica_evento(self, client, terapeuta, event_publisher):
        register(
            client,
            cpf=CPF_TERAPEUTA,
            email='outra@cif.com',
            nome='Outra',
            papel='TERAPEUTA',
        )

        assert len(event_publisher.published_events) == 1
