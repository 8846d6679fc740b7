"""
Testes para a API JSON do domínio de Pessoas.

Testa:
- Roteamento /v1/person/*
- Tradução de Result → status HTTP
- Headers de login e troca de senha
- Integração com Container DI (doubles em memória)
"""

import json
from unittest.mock import Mock

import pytest
from dependency_injector import providers
from django.test import Client, RequestFactory

from src.adapters.django_app.persons import api_views
from src.core.persons.errors import PersonError
from src.core.shared.result import Result


CPF_TERAPEUTA = "52998224725"
CPF_PACIENTE = "11144477735"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """Django test client."""
    return Client()


@pytest.fixture
def rf():
    return RequestFactory()


def post_json(client, url, data):
    return client.post(url, data=json.dumps(data), content_type='application/json')


def put_json(client, url, data, **extra):
    return client.put(url, data=json.dumps(data), content_type='application/json', **extra)


@pytest.fixture
def terapeuta(client, api_container):
    response = post_json(client, '/v1/person/register', {
        'cpf': '529.982.247-25',
        'email': 'ana@cif.com',
        'nome': 'Ana Souza',
        'papel': 'TERAPEUTA',
        'senha': 'abc123',
    })
    assert response.status_code == 201
    return response.json()['data']


@pytest.fixture
def paciente(client, api_container, terapeuta):
    response = post_json(client, '/v1/person/register', {
        'cpf': CPF_PACIENTE,
        'email': 'joao@cif.com',
        'name': 'João Lima',
        'role': 'patient',
        'password': 'xyz789',
        'therapistId': terapeuta['id'],
    })
    assert response.status_code == 201
    return response.json()['data']


# =============================================================================
# Cadastro
# =============================================================================

class TestRegister:
    """POST /v1/person/register"""

    def test_cadastro_sucesso(self, terapeuta):
        assert terapeuta['cpf'] == CPF_TERAPEUTA
        assert terapeuta['papel'] == 'Terapeuta'
        assert 'senha' not in terapeuta

    def test_chaves_em_ingles(self, paciente, terapeuta):
        assert paciente['nome'] == 'João Lima'
        assert paciente['papel'] == 'Paciente'
        assert paciente['terapeuta']['id'] == terapeuta['id']

    def test_cpf_invalido_403(self, client, api_container):
        response = post_json(client, '/v1/person/register', {
            'cpf': '123.456.789-00',
            'email': 'x@cif.com',
            'nome': 'X',
        })

        assert response.status_code == 403
        body = response.json()
        assert body['success'] is False
        assert body['meta']['code'] == 'INVALID_CPF'
        assert api_container.person_repository().count() == 0

    def test_cpf_duplicado_403(self, client, terapeuta):
        response = post_json(client, '/v1/person/register', {
            'cpf': CPF_TERAPEUTA,
            'email': 'outra@cif.com',
            'nome': 'Outra',
            'papel': 'TERAPEUTA',
        })

        assert response.status_code == 403
        assert response.json()['meta']['code'] == 'CPF_ALREADY_REGISTERED'

    def test_terapeuta_inexistente_422(self, client, api_container):
        response = post_json(client, '/v1/person/register', {
            'cpf': CPF_PACIENTE,
            'email': 'joao@cif.com',
            'nome': 'João',
            'terapeuta_id': 'nao-existe',
        })

        assert response.status_code == 422
        assert response.json()['meta']['code'] == 'THERAPIST_NOT_FOUND'

    def test_json_malformado_400(self, client, api_container):
        response = client.post(
            '/v1/person/register',
            data='{cpf:',
            content_type='application/json',
        )

        assert response.status_code == 400
        assert response.json()['success'] is False


# =============================================================================
# Consultas
# =============================================================================

class TestConsultas:
    """Listagens e buscas."""

    def test_listar_pacientes(self, client, paciente):
        response = client.get('/v1/person/listAllPatient')

        assert response.status_code == 200
        assert [p['id'] for p in response.json()['data']] == [paciente['id']]

    def test_listar_terapeutas(self, client, terapeuta, paciente):
        response = client.get('/v1/person/listAllTherapist')

        assert [p['id'] for p in response.json()['data']] == [terapeuta['id']]

    def test_pacientes_por_terapeuta(self, client, terapeuta, paciente):
        response = client.get(f"/v1/person/findPatientsByTherapist/{terapeuta['id']}")

        assert response.status_code == 200
        assert response.json()['data'][0]['id'] == paciente['id']

    def test_pacientes_por_terapeuta_vazio(self, client, terapeuta):
        response = client.get(f"/v1/person/findPatientsByTherapist/{terapeuta['id']}")

        assert response.status_code == 200
        assert response.json()['data'] == []

    def test_find_by_id(self, client, terapeuta):
        response = client.get(f"/v1/person/findById/{terapeuta['id']}")

        assert response.status_code == 200
        assert response.json()['data']['email'] == 'ana@cif.com'

    def test_find_by_id_inexistente_404(self, client, api_container):
        response = client.get('/v1/person/findById/nao-existe')

        assert response.status_code == 404

    def test_find_by_cpf(self, client, terapeuta):
        response = client.get('/v1/person/findbycpf/529.982.247-25')

        assert response.status_code == 200
        assert response.json()['data']['id'] == terapeuta['id']


# =============================================================================
# Alterações
# =============================================================================

class TestAlteracoes:
    """Atualização, senha, inativação e reativação."""

    def test_update_person(self, client, terapeuta):
        response = put_json(client, f"/v1/person/updatePerson/{terapeuta['id']}", {
            'id': 'ignorado',
            'cpf': CPF_TERAPEUTA,
            'email': 'ana.souza@cif.com',
            'nome': 'Ana S.',
            'papel': 'TERAPEUTA',
        })

        assert response.status_code == 200
        data = response.json()['data']
        assert data['id'] == terapeuta['id']
        assert data['email'] == 'ana.souza@cif.com'

    def test_update_person_cpf_invalido(self, client, terapeuta):
        response = put_json(client, f"/v1/person/updatePerson/{terapeuta['id']}", {
            'cpf': '11111111111',
            'email': 'ana@cif.com',
            'nome': 'Ana',
        })

        assert response.status_code == 403

    def test_update_person_mantem_inativo(self, client, terapeuta):
        """Sem `ativo` no corpo, a atualização não reativa a pessoa."""
        assert client.delete(f"/v1/person/delete/{terapeuta['id']}").status_code == 204

        response = put_json(client, f"/v1/person/updatePerson/{terapeuta['id']}", {
            'cpf': CPF_TERAPEUTA,
            'email': 'ana@cif.com',
            'nome': 'Ana Souza',
            'papel': 'TERAPEUTA',
        })

        assert response.status_code == 200
        assert response.json()['data']['ativo'] is False

    def test_update_person_ativo_texto_false(self, client, terapeuta):
        response = put_json(client, f"/v1/person/updatePerson/{terapeuta['id']}", {
            'cpf': CPF_TERAPEUTA,
            'email': 'ana@cif.com',
            'nome': 'Ana Souza',
            'papel': 'TERAPEUTA',
            'ativo': 'false',
        })

        assert response.status_code == 200
        assert response.json()['data']['ativo'] is False

    @pytest.mark.parametrize("valor", ['talvez', 0, [True]])
    def test_update_person_ativo_invalido_400(self, client, terapeuta, valor):
        response = put_json(client, f"/v1/person/updatePerson/{terapeuta['id']}", {
            'cpf': CPF_TERAPEUTA,
            'email': 'ana@cif.com',
            'nome': 'Ana Souza',
            'papel': 'TERAPEUTA',
            'ativo': valor,
        })

        assert response.status_code == 400
        detalhe = client.get(f"/v1/person/findById/{terapeuta['id']}")
        assert detalhe.json()['data']['ativo'] is True

    def test_update_person_terapeuta_inexistente_422(self, client, paciente):
        response = put_json(client, f"/v1/person/updatePerson/{paciente['id']}", {
            'cpf': CPF_PACIENTE,
            'email': 'joao@cif.com',
            'nome': 'João Lima',
            'papel': 'PACIENTE',
            'terapeuta_id': 'nao-existe',
        })

        assert response.status_code == 422
        assert response.json()['meta']['code'] == 'THERAPIST_NOT_FOUND'

    def test_update_password_corpo_nao_textual_400(self, client, terapeuta):
        response = put_json(client, f'/v1/person/updatePassword/{CPF_TERAPEUTA}', {
            'senha': 1234567,
        })

        assert response.status_code == 400
        assert response.json()['meta']['code'] == 'INVALID_PASSWORD'

    def test_update_password_header(self, client, terapeuta):
        response = client.put(
            f'/v1/person/updatePassword/{CPF_TERAPEUTA}',
            HTTP_PASSWORD='nova123',
        )

        assert response.status_code == 200

        login = client.get(
            '/v1/person/login',
            HTTP_USERLOGIN=CPF_TERAPEUTA,
            HTTP_PASSWORD='nova123',
        )
        assert login.status_code == 200

    def test_update_password_curta_400(self, client, terapeuta):
        response = client.put(
            f'/v1/person/updatePassword/{CPF_TERAPEUTA}',
            HTTP_PASSWORD='abc',
        )

        assert response.status_code == 400
        assert response.json()['meta']['code'] == 'INVALID_PASSWORD'

    def test_forgot_password_nao_devolve_senha(self, client, terapeuta):
        response = client.get(f'/v1/person/forgotPassword/{CPF_TERAPEUTA}')

        assert response.status_code == 200
        assert 'abc123' not in response.content.decode()

    def test_delete_e_reactivate(self, client, terapeuta):
        response = client.delete(f"/v1/person/delete/{terapeuta['id']}")
        assert response.status_code == 204

        detalhe = client.get(f"/v1/person/findById/{terapeuta['id']}")
        assert detalhe.json()['data']['ativo'] is False

        response = client.put(f"/v1/person/reactivatePerson/{terapeuta['id']}")
        assert response.status_code == 200
        assert response.json()['data']['ativo'] is True

    def test_delete_inexistente_404(self, client, api_container):
        response = client.delete('/v1/person/delete/nao-existe')

        assert response.status_code == 404


# =============================================================================
# Login
# =============================================================================

class TestLogin:
    """GET /v1/person/login"""

    def test_login_por_email(self, client, terapeuta):
        response = client.get(
            '/v1/person/login',
            HTTP_USERLOGIN='ana@cif.com',
            HTTP_PASSWORD='abc123',
        )

        assert response.status_code == 200
        assert response.json()['data']['id'] == terapeuta['id']

    def test_login_senha_errada_401(self, client, terapeuta):
        response = client.get(
            '/v1/person/login',
            HTTP_USERLOGIN=CPF_TERAPEUTA,
            HTTP_PASSWORD='errada1',
        )

        assert response.status_code == 401

    def test_login_sem_headers_401(self, client, api_container):
        response = client.get('/v1/person/login')

        assert response.status_code == 401


# =============================================================================
# BaseAPIView
# =============================================================================

class TestBaseAPIView:
    """Tradução de desfechos e erros inesperados."""

    @pytest.mark.parametrize("erro,status", [
        (PersonError.INVALID_CPF, 403),
        (PersonError.INVALID_PASSWORD, 400),
        (PersonError.THERAPIST_NOT_FOUND, 422),
        (PersonError.EMAIL_ALREADY_REGISTERED, 403),
        (PersonError.PERSON_NOT_FOUND, 404),
        (PersonError.UNAUTHORIZED, 401),
        (PersonError.STORE_UNAVAILABLE, 500),
    ])
    def test_status_por_erro(self, erro, status):
        response = api_views.BaseAPIView().result_response(Result.fail(erro, "falhou"))

        assert response.status_code == status
        assert json.loads(response.content)['error'] == "falhou"

    def test_erro_inesperado_500(self, rf, api_container):
        service = Mock()
        service.execute.side_effect = RuntimeError("boom")
        api_container.listar_pacientes_service.override(providers.Object(service))

        view = api_views.ListPatientsAPIView.as_view()
        response = view(rf.get('/v1/person/listAllPatient'))

        assert response.status_code == 500
        assert json.loads(response.content)['error'] == "Erro interno do servidor"
