"""
Use Cases (Application Services) do Domínio de Pessoas.

Este módulo contém os casos de uso da aplicação, que orquestram
validação, chamadas ao repositório e classificação de desfechos.

Use Cases implementados:
- CadastrarPessoaService: Cadastra paciente ou terapeuta
- AtualizarPessoaService: Atualiza dados cadastrais
- AtualizarSenhaService: Troca a senha a partir do CPF
- ObterPessoaService: Busca por id
- BuscarPessoaPorCpfService: Busca por CPF
- ListarPacientesService / ListarTerapeutasService: Listagens por papel
- ListarPacientesPorTerapeutaService: Pacientes de um terapeuta
- InativarPessoaService / ReativarPessoaService: Exclusão lógica
- LoginService: Verificação de credenciais
- SolicitarRecuperacaoSenhaService: Pedido de recuperação de senha

Princípios:
- Um Use Case = Uma operação de negócio
- Dependências injetadas (DI)
- Todo desfecho é um Result; nenhuma exceção escapa
- Uma única tentativa de escrita por chamada, sem retentativas
"""

from typing import List
import logging

from src.core.shared.exceptions import UniqueViolationError, ValidationError
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.result import Result

from .cpf import is_valid_cpf, mask_cpf, normalize_cpf
from .dtos import AtualizarPessoaInputDTO, CadastrarPessoaInputDTO, PersonOutputDTO
from .entities import PersonEntity, PersonRole
from .errors import PersonError
from .events import (
    PessoaAtualizadaEvent,
    PessoaCadastradaEvent,
    PessoaInativadaEvent,
    PessoaReativadaEvent,
    RecuperacaoSenhaSolicitadaEvent,
    SenhaAlteradaEvent,
)
from .ports import PasswordHasher, PersonRepository

logger = logging.getLogger(__name__)

INVALID_CPF_MESSAGE = "Informe um CPF válido"
NOT_FOUND_MESSAGE = "Pessoa não encontrada"


def _to_output_list(pessoas: List[PersonEntity]) -> List[PersonOutputDTO]:
    return [PersonOutputDTO.from_entity(p) for p in pessoas]


class CadastrarPessoaService:
    """
    Use Case: Cadastrar uma nova pessoa.

    Fluxo:
    1. Validar CPF (falha rápida, sem tocar o repositório)
    2. Montar entidade a partir do DTO
    3. Paciente com terapeuta: resolver terapeuta por id
    4. Persistir via repositório (uma única tentativa)
    5. Classificar violação de unicidade pelo campo informado
    6. Disparar evento PessoaCadastrada

    Example:
        service = CadastrarPessoaService(pessoa_repo, uow, password_hasher)
        result = service.execute(CadastrarPessoaInputDTO(
            cpf="529.982.247-25",
            email="terapeuta@cif.com",
            nome="Ana Souza",
            papel="TERAPEUTA",
            senha="abc123",
        ))
        if result.is_ok:
            print(result.value.id)
    """

    def __init__(
        self,
        pessoa_repo: PersonRepository,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
    ):
        """
        Inicializa service com dependências injetadas.

        Args:
            pessoa_repo: Repositório de pessoas
            uow: Unit of Work para transação atômica
            password_hasher: Hasher da senha inicial
        """
        self.pessoa_repo = pessoa_repo
        self.uow = uow
        self.password_hasher = password_hasher

    def execute(self, input_dto: CadastrarPessoaInputDTO) -> Result[PersonOutputDTO]:
        """
        Executa cadastro de pessoa.

        Returns:
            Result com PersonOutputDTO, ou falha com um de:
            INVALID_CPF, THERAPIST_NOT_FOUND, CPF_ALREADY_REGISTERED,
            EMAIL_ALREADY_REGISTERED, REGISTRATION_FAILED
        """
        logger.info("Cadastro de pessoa iniciado")

        if not input_dto.cpf or not is_valid_cpf(input_dto.cpf):
            logger.warning("Cadastro rejeitado: CPF inválido")
            return Result.fail(PersonError.INVALID_CPF, INVALID_CPF_MESSAGE)

        if input_dto.senha is not None and not isinstance(input_dto.senha, str):
            logger.warning("Cadastro rejeitado: senha não textual")
            return Result.fail(PersonError.REGISTRATION_FAILED, "Senha deve ser texto")

        try:
            pessoa = PersonEntity.criar(
                cpf=input_dto.cpf,
                email=input_dto.email,
                nome=input_dto.nome,
                papel=PersonRole.from_string(input_dto.papel),
                senha_hash=self.password_hasher.hash(input_dto.senha) if input_dto.senha else "",
                terapeuta_id=input_dto.terapeuta_id,
            )
        except (ValueError, ValidationError) as e:
            logger.warning(f"Cadastro rejeitado: {e}")
            return Result.fail(PersonError.REGISTRATION_FAILED, str(e))

        try:
            with self.uow:
                if pessoa.eh_paciente and pessoa.terapeuta_id:
                    terapeuta = self.pessoa_repo.get_by_id(pessoa.terapeuta_id)
                    if terapeuta is None or not terapeuta.eh_terapeuta:
                        logger.warning(
                            f"Terapeuta {pessoa.terapeuta_id} não encontrado para cadastro"
                        )
                        return Result.fail(
                            PersonError.THERAPIST_NOT_FOUND,
                            f"Terapeuta {pessoa.terapeuta_id} não encontrado",
                        )
                    pessoa.vincular_terapeuta(terapeuta)

                criada = self.pessoa_repo.create(pessoa)

                self.uow.publish_event(
                    PessoaCadastradaEvent(
                        aggregate_id=criada.id,
                        papel=criada.papel.value,
                        email=criada.email,
                        terapeuta_id=criada.terapeuta_id,
                    )
                )
        except UniqueViolationError as e:
            logger.warning(f"Cadastro rejeitado, chave duplicada: {e.field}")
            if e.field == "cpf":
                return Result.fail(PersonError.CPF_ALREADY_REGISTERED, "CPF já cadastrado")
            return Result.fail(PersonError.EMAIL_ALREADY_REGISTERED, "E-mail já cadastrado")
        except Exception as e:
            logger.error(f"Não foi possível cadastrar a pessoa: {e}")
            return Result.fail(
                PersonError.REGISTRATION_FAILED,
                "Não foi possível cadastrar a pessoa",
            )

        logger.info(f"Pessoa cadastrada: {criada.id} ({mask_cpf(criada.cpf)})")
        return Result.ok(PersonOutputDTO.from_entity(criada))


class AtualizarPessoaService:
    """
    Use Case: Atualizar dados cadastrais.

    O id da rota prevalece sobre qualquer id enviado no corpo.
    A senha nunca é alterada por este Use Case.

    Sem `ativo` na entrada, o status gravado é mantido. Quando o
    status muda, o evento de inativação/reativação é publicado
    junto com o de atualização.
    """

    def __init__(self, pessoa_repo: PersonRepository, uow: UnitOfWork):
        self.pessoa_repo = pessoa_repo
        self.uow = uow

    def execute(
        self,
        pessoa_id: str,
        input_dto: AtualizarPessoaInputDTO,
    ) -> Result[PersonOutputDTO]:
        """
        Executa atualização.

        Returns:
            Result com PersonOutputDTO, ou falha com INVALID_CPF,
            PERSON_NOT_FOUND, THERAPIST_NOT_FOUND ou UPDATE_FAILED
        """
        logger.info(f"Atualização da pessoa {pessoa_id} iniciada")

        if not input_dto.cpf or not is_valid_cpf(input_dto.cpf):
            logger.warning("Atualização rejeitada: CPF inválido")
            return Result.fail(PersonError.INVALID_CPF, INVALID_CPF_MESSAGE)

        if input_dto.ativo is not None and not isinstance(input_dto.ativo, bool):
            return Result.fail(PersonError.UPDATE_FAILED, "Ativo deve ser booleano")

        try:
            pessoa = PersonEntity.criar(
                cpf=input_dto.cpf,
                email=input_dto.email,
                nome=input_dto.nome,
                papel=PersonRole.from_string(input_dto.papel),
                terapeuta_id=input_dto.terapeuta_id,
            )
        except (ValueError, ValidationError) as e:
            logger.warning(f"Atualização rejeitada: {e}")
            return Result.fail(PersonError.UPDATE_FAILED, str(e))

        pessoa.id = pessoa_id

        try:
            with self.uow:
                existente = self.pessoa_repo.get_by_id(pessoa_id)
                if existente is None:
                    return Result.fail(PersonError.PERSON_NOT_FOUND, NOT_FOUND_MESSAGE)

                if pessoa.eh_paciente and pessoa.terapeuta_id:
                    terapeuta = self.pessoa_repo.get_by_id(pessoa.terapeuta_id)
                    if terapeuta is None or not terapeuta.eh_terapeuta:
                        logger.warning(
                            f"Terapeuta {pessoa.terapeuta_id} não encontrado para atualização"
                        )
                        return Result.fail(
                            PersonError.THERAPIST_NOT_FOUND,
                            f"Terapeuta {pessoa.terapeuta_id} não encontrado",
                        )
                    pessoa.vincular_terapeuta(terapeuta)

                if input_dto.ativo is None:
                    pessoa.ativo = existente.ativo
                else:
                    pessoa.ativo = input_dto.ativo

                atualizada = self.pessoa_repo.update(pessoa_id, pessoa)
                if atualizada is None:
                    return Result.fail(PersonError.PERSON_NOT_FOUND, NOT_FOUND_MESSAGE)

                self.uow.publish_event(
                    PessoaAtualizadaEvent(aggregate_id=pessoa_id, email=atualizada.email)
                )
                if atualizada.ativo != existente.ativo:
                    evento = PessoaReativadaEvent if atualizada.ativo else PessoaInativadaEvent
                    self.uow.publish_event(evento(aggregate_id=pessoa_id))
        except Exception as e:
            logger.error(f"Não foi possível atualizar a pessoa {pessoa_id}: {e}")
            return Result.fail(PersonError.UPDATE_FAILED, "Não foi possível atualizar a pessoa")

        return Result.ok(PersonOutputDTO.from_entity(atualizada))


class AtualizarSenhaService:
    """
    Use Case: Trocar a senha da pessoa identificada pelo CPF.

    Política de senha: não vazia, entre 6 e 8 caracteres.
    """

    def __init__(
        self,
        pessoa_repo: PersonRepository,
        uow: UnitOfWork,
        password_hasher: PasswordHasher,
    ):
        self.pessoa_repo = pessoa_repo
        self.uow = uow
        self.password_hasher = password_hasher

    def execute(self, senha: str, cpf: str) -> Result[PersonOutputDTO]:
        """
        Returns:
            Result com PersonOutputDTO, ou falha com
            INVALID_PASSWORD, PERSON_NOT_FOUND ou UPDATE_FAILED
        """
        logger.info("Atualização de senha iniciada")

        if not senha:
            return Result.fail(PersonError.INVALID_PASSWORD, "A senha não pode ser vazia")

        if not PersonEntity.senha_valida(senha):
            return Result.fail(
                PersonError.INVALID_PASSWORD,
                f"A senha deve ter entre {PersonEntity.SENHA_MIN_LENGTH} "
                f"e {PersonEntity.SENHA_MAX_LENGTH} caracteres",
            )

        try:
            with self.uow:
                pessoa = self.pessoa_repo.get_by_cpf(normalize_cpf(cpf))
                if pessoa is None:
                    return Result.fail(
                        PersonError.PERSON_NOT_FOUND,
                        f"Nenhuma pessoa com CPF {mask_cpf(cpf)}",
                    )

                atualizada = self.pessoa_repo.update_password(
                    pessoa.id, self.password_hasher.hash(senha)
                )
                if atualizada is None:
                    return Result.fail(PersonError.PERSON_NOT_FOUND, NOT_FOUND_MESSAGE)

                self.uow.publish_event(
                    SenhaAlteradaEvent(aggregate_id=atualizada.id, email=atualizada.email)
                )
        except Exception as e:
            logger.error(f"Não foi possível atualizar a senha: {e}")
            return Result.fail(PersonError.UPDATE_FAILED, "Não foi possível atualizar a senha")

        return Result.ok(PersonOutputDTO.from_entity(atualizada))


class ObterPessoaService:
    """
    Use Case: Obter pessoa por id.

    Não usa UoW pois é operação de leitura.
    """

    def __init__(self, pessoa_repo: PersonRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, pessoa_id: str) -> Result[PersonOutputDTO]:
        try:
            pessoa = self.pessoa_repo.get_by_id(pessoa_id)
        except Exception as e:
            logger.error(f"Erro ao buscar pessoa {pessoa_id}: {e}")
            return Result.fail(PersonError.STORE_UNAVAILABLE, "Erro ao buscar pessoa")

        if pessoa is None:
            return Result.fail(PersonError.PERSON_NOT_FOUND, NOT_FOUND_MESSAGE)

        return Result.ok(PersonOutputDTO.from_entity(pessoa))


class BuscarPessoaPorCpfService:
    """
    Use Case: Obter pessoa por CPF.

    CPF inválido é rejeitado antes de qualquer acesso ao repositório.
    """

    def __init__(self, pessoa_repo: PersonRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, cpf: str) -> Result[PersonOutputDTO]:
        if not is_valid_cpf(cpf):
            return Result.fail(PersonError.INVALID_CPF, INVALID_CPF_MESSAGE)

        try:
            pessoa = self.pessoa_repo.get_by_cpf(normalize_cpf(cpf))
        except Exception as e:
            logger.error(f"Erro ao buscar pessoa por CPF: {e}")
            return Result.fail(PersonError.STORE_UNAVAILABLE, "Erro ao buscar pessoa por CPF")

        if pessoa is None:
            return Result.fail(
                PersonError.PERSON_NOT_FOUND,
                f"Nenhuma pessoa com CPF {mask_cpf(cpf)}",
            )

        return Result.ok(PersonOutputDTO.from_entity(pessoa))


class ListarPacientesService:
    """Use Case: Listar todos os pacientes."""

    def __init__(self, pessoa_repo: PersonRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self) -> Result[List[PersonOutputDTO]]:
        try:
            return Result.ok(_to_output_list(self.pessoa_repo.list_patients()))
        except Exception as e:
            logger.error(f"Erro ao listar pacientes: {e}")
            return Result.fail(
                PersonError.STORE_UNAVAILABLE,
                "Não foi possível obter a lista de pacientes",
            )


class ListarTerapeutasService:
    """Use Case: Listar todos os terapeutas."""

    def __init__(self, pessoa_repo: PersonRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self) -> Result[List[PersonOutputDTO]]:
        try:
            return Result.ok(_to_output_list(self.pessoa_repo.list_therapists()))
        except Exception as e:
            logger.error(f"Erro ao listar terapeutas: {e}")
            return Result.fail(
                PersonError.STORE_UNAVAILABLE,
                "Não foi possível obter a lista de terapeutas",
            )


class ListarPacientesPorTerapeutaService:
    """
    Use Case: Listar pacientes vinculados a um terapeuta.

    Terapeuta sem pacientes (ou inexistente) resulta em lista vazia.
    """

    def __init__(self, pessoa_repo: PersonRepository):
        self.pessoa_repo = pessoa_repo

    def execute(self, terapeuta_id: str) -> Result[List[PersonOutputDTO]]:
        try:
            pacientes = self.pessoa_repo.list_patients_by_therapist(terapeuta_id)
        except Exception as e:
            logger.error(f"Erro ao listar pacientes do terapeuta {terapeuta_id}: {e}")
            return Result.fail(
                PersonError.STORE_UNAVAILABLE,
                "Não foi possível obter os pacientes do terapeuta",
            )
        return Result.ok(_to_output_list(pacientes))


class InativarPessoaService:
    """Use Case: Exclusão lógica de uma pessoa."""

    def __init__(self, pessoa_repo: PersonRepository, uow: UnitOfWork):
        self.pessoa_repo = pessoa_repo
        self.uow = uow

    def execute(self, pessoa_id: str) -> Result[PersonOutputDTO]:
        try:
            with self.uow:
                pessoa = self.pessoa_repo.set_active(pessoa_id, False)
                if pessoa is None:
                    return Result.fail(PersonError.PERSON_NOT_FOUND, NOT_FOUND_MESSAGE)
                self.uow.publish_event(PessoaInativadaEvent(aggregate_id=pessoa_id))
        except Exception as e:
            logger.error(f"Não foi possível inativar a pessoa {pessoa_id}: {e}")
            return Result.fail(PersonError.STORE_UNAVAILABLE, "Não foi possível inativar a pessoa")

        logger.info(f"Pessoa inativada: {pessoa_id}")
        return Result.ok(PersonOutputDTO.from_entity(pessoa))


class ReativarPessoaService:
    """Use Case: Reativar pessoa inativa."""

    def __init__(self, pessoa_repo: PersonRepository, uow: UnitOfWork):
        self.pessoa_repo = pessoa_repo
        self.uow = uow

    def execute(self, pessoa_id: str) -> Result[PersonOutputDTO]:
        try:
            with self.uow:
                pessoa = self.pessoa_repo.set_active(pessoa_id, True)
                if pessoa is None:
                    return Result.fail(PersonError.PERSON_NOT_FOUND, NOT_FOUND_MESSAGE)
                self.uow.publish_event(PessoaReativadaEvent(aggregate_id=pessoa_id))
        except Exception as e:
            logger.error(f"Não foi possível reativar a pessoa {pessoa_id}: {e}")
            return Result.fail(PersonError.STORE_UNAVAILABLE, "Não foi possível reativar a pessoa")

        logger.info(f"Pessoa reativada: {pessoa_id}")
        return Result.ok(PersonOutputDTO.from_entity(pessoa))


class LoginService:
    """
    Use Case: Verificar credenciais.

    O login pode ser o CPF (com ou sem pontuação) ou o e-mail.
    Pessoas inativas não autenticam. A mensagem de falha é a
    mesma para login inexistente e senha incorreta.
    """

    UNAUTHORIZED_MESSAGE = "Usuário ou senha incorretos"

    def __init__(self, pessoa_repo: PersonRepository, password_hasher: PasswordHasher):
        self.pessoa_repo = pessoa_repo
        self.password_hasher = password_hasher

    def execute(self, user_login: str, senha: str) -> Result[PersonOutputDTO]:
        if not isinstance(user_login, str) or not isinstance(senha, str):
            return Result.fail(PersonError.UNAUTHORIZED, self.UNAUTHORIZED_MESSAGE)
        if not user_login or not senha:
            return Result.fail(PersonError.UNAUTHORIZED, self.UNAUTHORIZED_MESSAGE)

        try:
            if is_valid_cpf(user_login):
                pessoa = self.pessoa_repo.get_by_cpf(normalize_cpf(user_login))
            else:
                pessoa = self.pessoa_repo.get_by_email(user_login)
        except Exception as e:
            logger.error(f"Erro ao validar login: {e}")
            return Result.fail(
                PersonError.STORE_UNAVAILABLE,
                "Erro ao validar usuário e senha",
            )

        if pessoa is None or not pessoa.ativo or not pessoa.senha:
            logger.warning("Login recusado")
            return Result.fail(PersonError.UNAUTHORIZED, self.UNAUTHORIZED_MESSAGE)

        if not self.password_hasher.verify(senha, pessoa.senha):
            logger.warning(f"Login recusado para {pessoa.id}")
            return Result.fail(PersonError.UNAUTHORIZED, self.UNAUTHORIZED_MESSAGE)

        return Result.ok(PersonOutputDTO.from_entity(pessoa))


class SolicitarRecuperacaoSenhaService:
    """
    Use Case: Solicitar recuperação de senha.

    Apenas registra o pedido (evento); o handler assíncrono envia
    as instruções ao e-mail cadastrado. A senha nunca é devolvida.
    """

    def __init__(self, pessoa_repo: PersonRepository, uow: UnitOfWork):
        self.pessoa_repo = pessoa_repo
        self.uow = uow

    def execute(self, cpf: str) -> Result[None]:
        logger.info("Recuperação de senha solicitada")

        if not is_valid_cpf(cpf):
            return Result.fail(PersonError.INVALID_CPF, INVALID_CPF_MESSAGE)

        try:
            with self.uow:
                pessoa = self.pessoa_repo.get_by_cpf(normalize_cpf(cpf))
                if pessoa is None:
                    return Result.fail(
                        PersonError.PERSON_NOT_FOUND,
                        f"Nenhuma pessoa com CPF {mask_cpf(cpf)}",
                    )
                self.uow.publish_event(
                    RecuperacaoSenhaSolicitadaEvent(aggregate_id=pessoa.id, email=pessoa.email)
                )
        except Exception as e:
            logger.error(f"Erro ao solicitar recuperação de senha: {e}")
            return Result.fail(
                PersonError.STORE_UNAVAILABLE,
                "Não foi possível solicitar a recuperação de senha",
            )

        return Result.ok()
