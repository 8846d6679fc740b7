"""
API Views JSON para o domínio de Pessoas.

RESTful API consumida pelos frontends da clínica.

Endpoints (prefixo /v1/person/):
- POST   register                       - Cadastrar pessoa
- GET    listAllPatient                 - Listar pacientes
- GET    listAllTherapist               - Listar terapeutas
- GET    findPatientsByTherapist/<id>   - Pacientes de um terapeuta
- GET    findById/<id>                  - Obter pessoa
- GET    findbycpf/<cpf>                - Obter pessoa por CPF
- PUT    updatePerson/<id>              - Atualizar dados cadastrais
- PUT    updatePassword/<cpf>           - Trocar senha (header `password`)
- GET    forgotPassword/<cpf>           - Solicitar recuperação de senha
- DELETE delete/<id>                    - Inativar (exclusão lógica)
- PUT    reactivatePerson/<id>          - Reativar
- GET    login                          - Verificar credenciais
                                          (headers `userLogin` e `password`)

Formato:
- Entrada: JSON (chaves em português ou em inglês)
- Saída: JSON com estrutura {success, data/error, meta}
"""

from typing import Any, Dict, Optional
import json
import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from src.core.persons.dtos import AtualizarPessoaInputDTO, CadastrarPessoaInputDTO
from src.core.persons.errors import PersonError
from src.core.shared.result import Result
from src.config.container import get_container

logger = logging.getLogger(__name__)


# Tradução de desfechos do Core para status HTTP
ERROR_STATUS = {
    PersonError.INVALID_CPF: 403,
    PersonError.INVALID_PASSWORD: 400,
    PersonError.THERAPIST_NOT_FOUND: 422,
    PersonError.CPF_ALREADY_REGISTERED: 403,
    PersonError.EMAIL_ALREADY_REGISTERED: 403,
    PersonError.PERSON_NOT_FOUND: 404,
    PersonError.UNAUTHORIZED: 401,
    PersonError.REGISTRATION_FAILED: 500,
    PersonError.UPDATE_FAILED: 500,
    PersonError.STORE_UNAVAILABLE: 500,
}


# =============================================================================
# Helpers
# =============================================================================

def json_response(success: bool, data: Any = None, error: str = None,
                  status: int = 200, meta: Dict = None) -> JsonResponse:
    """
    Cria resposta JSON padronizada.

    Args:
        success: Se operação foi bem sucedida
        data: Dados da resposta
        error: Mensagem de erro (se aplicável)
        status: HTTP status code
        meta: Metadados adicionais

    Returns:
        JsonResponse formatada
    """
    response = {'success': success}

    if data is not None:
        response['data'] = data

    if error is not None:
        response['error'] = error

    if meta is not None:
        response['meta'] = meta

    return JsonResponse(response, status=status)


def parse_json_body(request: HttpRequest) -> Dict:
    """
    Parseia body JSON do request.

    Raises:
        ValueError: Se JSON inválido ou não for um objeto
    """
    if not request.body:
        return {}

    try:
        data = json.loads(request.body)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON inválido: {e}")

    if not isinstance(data, dict):
        raise ValueError("O corpo da requisição deve ser um objeto JSON")
    return data


def pick(data: Dict, *keys: str, default: Any = None) -> Any:
    """Retorna o primeiro valor presente entre as chaves informadas."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


TRUE_VALUES = ('true', '1', 'sim', 'yes')
FALSE_VALUES = ('false', '0', 'nao', 'não', 'no')


def parse_bool(value: Any) -> Optional[bool]:
    """
    Converte o valor de uma flag booleana vinda do JSON.

    None é preservado (campo ausente). Raises ValueError para
    qualquer valor que não seja booleano ou uma das strings aceitas.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
    raise ValueError(f"Valor inválido para ativo: {value}")


def serialize(value: Any) -> Any:
    if isinstance(value, list):
        return [item.to_dict() for item in value]
    if value is None:
        return None
    return value.to_dict()


# =============================================================================
# Base API View
# =============================================================================

@method_decorator(csrf_exempt, name='dispatch')
class BaseAPIView(View):
    """
    View base para APIs JSON.

    Fornece:
    - Parsing de JSON
    - Acesso aos services do container DI
    - Tradução de Result → resposta HTTP
    """

    success_status = 200

    def get_container(self):
        """Retorna container de DI."""
        return get_container()

    def get_service(self, service_name: str):
        """Obtém service do container."""
        return getattr(self.get_container(), service_name)()

    def parse_body(self, request: HttpRequest) -> Dict:
        return parse_json_body(request)

    def result_response(self, result: Result, status: Optional[int] = None) -> JsonResponse:
        """
        Converte Result do Use Case em JsonResponse.

        Falhas usam a tabela ERROR_STATUS; o código do erro
        vai em meta.code.
        """
        if result.is_ok:
            return json_response(
                success=True,
                data=serialize(result.value),
                status=status or self.success_status,
            )

        return json_response(
            success=False,
            error=result.message or result.error.value,
            status=ERROR_STATUS.get(result.error, 500),
            meta={'code': result.error.value},
        )

    def handle_exception(self, e: Exception) -> JsonResponse:
        """
        Trata exceções que escapam da view.

        ValueError vem do parsing do corpo (400); o resto é 500.
        """
        if isinstance(e, ValueError):
            return json_response(success=False, error=str(e), status=400)

        logger.exception(f"Erro inesperado na API: {e}")
        return json_response(
            success=False,
            error="Erro interno do servidor",
            status=500
        )


# =============================================================================
# Person API Views
# =============================================================================

class RegisterPersonAPIView(BaseAPIView):
    """POST /v1/person/register - Cadastra paciente ou terapeuta."""

    success_status = 201

    def post(self, request: HttpRequest) -> JsonResponse:
        """
        Body JSON:
        - cpf: CPF (obrigatório, com ou sem pontuação)
        - email / nome (name): obrigatórios
        - papel (role): PACIENTE | TERAPEUTA (default PACIENTE)
        - senha (password): senha inicial (opcional)
        - terapeuta_id (therapistId): terapeuta responsável (pacientes)
        """
        try:
            data = self.parse_body(request)

            input_dto = CadastrarPessoaInputDTO(
                cpf=pick(data, 'cpf'),
                email=pick(data, 'email', default=''),
                nome=pick(data, 'nome', 'name', default=''),
                papel=pick(data, 'papel', 'role', default='PACIENTE'),
                senha=pick(data, 'senha', 'password'),
                terapeuta_id=pick(data, 'terapeuta_id', 'therapistId'),
            )

            result = self.get_service('cadastrar_pessoa_service').execute(input_dto)
            return self.result_response(result)

        except Exception as e:
            return self.handle_exception(e)


class ListPatientsAPIView(BaseAPIView):
    """GET /v1/person/listAllPatient"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            result = self.get_service('listar_pacientes_service').execute()
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class ListTherapistsAPIView(BaseAPIView):
    """GET /v1/person/listAllTherapist"""

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            result = self.get_service('listar_terapeutas_service').execute()
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class PatientsByTherapistAPIView(BaseAPIView):
    """
    GET /v1/person/findPatientsByTherapist/<id>

    Terapeuta sem pacientes devolve lista vazia (200).
    """

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            result = self.get_service('listar_pacientes_por_terapeuta_service').execute(pk)
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class PersonDetailAPIView(BaseAPIView):
    """GET /v1/person/findById/<id>"""

    def get(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            result = self.get_service('obter_pessoa_service').execute(pk)
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class PersonByCpfAPIView(BaseAPIView):
    """GET /v1/person/findbycpf/<cpf>"""

    def get(self, request: HttpRequest, cpf: str) -> JsonResponse:
        try:
            result = self.get_service('buscar_pessoa_por_cpf_service').execute(cpf)
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class UpdatePersonAPIView(BaseAPIView):
    """
    PUT /v1/person/updatePerson/<id>

    O id da rota prevalece sobre qualquer id no corpo.
    Senha enviada no corpo é ignorada (use updatePassword).
    """

    def put(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            data = self.parse_body(request)

            input_dto = AtualizarPessoaInputDTO(
                cpf=pick(data, 'cpf'),
                email=pick(data, 'email', default=''),
                nome=pick(data, 'nome', 'name', default=''),
                papel=pick(data, 'papel', 'role', default='PACIENTE'),
                ativo=parse_bool(pick(data, 'ativo', 'active')),
                terapeuta_id=pick(data, 'terapeuta_id', 'therapistId'),
            )

            result = self.get_service('atualizar_pessoa_service').execute(pk, input_dto)
            return self.result_response(result)

        except Exception as e:
            return self.handle_exception(e)


class UpdatePasswordAPIView(BaseAPIView):
    """
    PUT /v1/person/updatePassword/<cpf>

    Nova senha no header `password` (ou `senha`/`password` no corpo).
    """

    def put(self, request: HttpRequest, cpf: str) -> JsonResponse:
        try:
            senha = request.headers.get('password')
            if senha is None:
                senha = pick(self.parse_body(request), 'senha', 'password', default='')

            result = self.get_service('atualizar_senha_service').execute(senha, cpf)
            return self.result_response(result)

        except Exception as e:
            return self.handle_exception(e)


class ForgotPasswordAPIView(BaseAPIView):
    """
    GET /v1/person/forgotPassword/<cpf>

    Apenas registra o pedido; as instruções seguem por e-mail.
    A senha nunca é devolvida.
    """

    def get(self, request: HttpRequest, cpf: str) -> JsonResponse:
        try:
            result = self.get_service('solicitar_recuperacao_senha_service').execute(cpf)
            if result.is_ok:
                return json_response(
                    success=True,
                    data={'message': 'Instruções enviadas para o e-mail cadastrado'},
                )
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class DeletePersonAPIView(BaseAPIView):
    """DELETE /v1/person/delete/<id> - Exclusão lógica (204)."""

    def delete(self, request: HttpRequest, pk: str) -> HttpResponse:
        try:
            result = self.get_service('inativar_pessoa_service').execute(pk)
            if result.is_ok:
                return HttpResponse(status=204)
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class ReactivatePersonAPIView(BaseAPIView):
    """PUT /v1/person/reactivatePerson/<id>"""

    def put(self, request: HttpRequest, pk: str) -> JsonResponse:
        try:
            result = self.get_service('reativar_pessoa_service').execute(pk)
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)


class LoginAPIView(BaseAPIView):
    """
    GET /v1/person/login

    Headers:
    - userLogin: CPF ou e-mail
    - password: senha
    """

    def get(self, request: HttpRequest) -> JsonResponse:
        try:
            result = self.get_service('login_service').execute(
                request.headers.get('userLogin', ''),
                request.headers.get('password', ''),
            )
            return self.result_response(result)
        except Exception as e:
            return self.handle_exception(e)
