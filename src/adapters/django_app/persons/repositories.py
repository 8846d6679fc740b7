"""
Repositórios Django para persistência de Pessoas.

Implementam as interfaces (Ports) definidas no Core.
São DRIVEN ADAPTERS - acionados pelo Core em resposta a operações.

Responsabilidades:
- Implementar PersonRepository protocol
- Mapear entities para models e vice-versa
- Traduzir erros do banco para exceções de domínio
- Otimizar queries (select_related no terapeuta)

Tradução de erros:
- IntegrityError em cpf/email → UniqueViolationError(field=...)
- Qualquer outro DatabaseError → RepositoryError
"""

from contextlib import contextmanager
from dataclasses import replace
from typing import List, Optional
import logging
import uuid

from django.db import DatabaseError, IntegrityError, transaction

from src.core.persons.cpf import mask_cpf
from src.core.persons.entities import PersonEntity, PersonRole
from src.core.shared.exceptions import RepositoryError, UniqueViolationError

from .mappers import PersonMapper
from .models import PersonModel

logger = logging.getLogger(__name__)


@contextmanager
def _database_errors(operacao: str):
    """Converte DatabaseError em RepositoryError."""
    try:
        yield
    except (RepositoryError, UniqueViolationError):
        raise
    except DatabaseError as e:
        logger.error(f"Erro de banco em {operacao}: {e}")
        raise RepositoryError(f"Falha ao {operacao}: {e}") from e


class DjangoPersonRepository:
    """
    Implementação Django do PersonRepository.

    Implementa a interface definida em src/core/persons/ports.py,
    usando Django ORM para persistência.

    Example:
        repo = DjangoPersonRepository()

        pessoa = repo.create(pessoa_entity)
        encontrada = repo.get_by_cpf("52998224725")
        pacientes = repo.list_patients_by_therapist(terapeuta.id)
    """

    def __init__(self):
        self._mapper = PersonMapper()

    def _queryset(self):
        return PersonModel.objects.select_related('terapeuta')

    def create(self, pessoa: PersonEntity) -> PersonEntity:
        """
        Insere nova pessoa (uma única tentativa).

        Raises:
            UniqueViolationError: cpf ou email já cadastrados
            RepositoryError: demais falhas de banco
        """
        pessoa_id = pessoa.id or str(uuid.uuid4())
        model = self._mapper.to_model(replace(pessoa, id=pessoa_id))

        logger.debug(f"Creating person {pessoa_id} ({mask_cpf(pessoa.cpf)})")

        with _database_errors("cadastrar pessoa"):
            try:
                with transaction.atomic():
                    model.save(force_insert=True)
            except IntegrityError as e:
                self._raise_unique_violation(pessoa, ignore_id=None, cause=e)

            logger.info(f"Person created: {pessoa_id}")
            return self._mapper.to_entity(self._queryset().get(pk=pessoa_id))

    def update(self, pessoa_id: str, pessoa: PersonEntity) -> Optional[PersonEntity]:
        """
        Atualiza dados cadastrais. Senha e criado_em são preservados.

        Returns:
            Entidade atualizada ou None se o id não existir
        """
        with _database_errors("atualizar pessoa"):
            model = PersonModel.objects.filter(pk=pessoa_id).first()
            if model is None:
                logger.debug(f"Person not found for update: {pessoa_id}")
                return None

            self._mapper.update_model(model, pessoa)
            try:
                with transaction.atomic():
                    model.save()
            except IntegrityError as e:
                self._raise_unique_violation(pessoa, ignore_id=pessoa_id, cause=e)

            logger.info(f"Person updated: {pessoa_id}")
            return self.get_by_id(pessoa_id)

    def update_password(self, pessoa_id: str, senha_hash: str) -> Optional[PersonEntity]:
        with _database_errors("atualizar senha"):
            model = PersonModel.objects.filter(pk=pessoa_id).first()
            if model is None:
                return None
            model.senha = senha_hash
            model.save(update_fields=['senha', 'atualizado_em'])
            return self.get_by_id(pessoa_id)

    def get_by_id(self, pessoa_id: str) -> Optional[PersonEntity]:
        with _database_errors("buscar pessoa"):
            model = self._queryset().filter(pk=pessoa_id).first()
            return self._mapper.to_entity(model) if model else None

    def get_by_cpf(self, cpf: str) -> Optional[PersonEntity]:
        with _database_errors("buscar pessoa por CPF"):
            model = self._queryset().filter(cpf=cpf).first()
            return self._mapper.to_entity(model) if model else None

    def get_by_email(self, email: str) -> Optional[PersonEntity]:
        with _database_errors("buscar pessoa por e-mail"):
            model = self._queryset().filter(email__iexact=(email or '').strip()).first()
            return self._mapper.to_entity(model) if model else None

    def list_patients(self) -> List[PersonEntity]:
        with _database_errors("listar pacientes"):
            models = self._queryset().filter(papel=PersonRole.PACIENTE.value)
            return self._mapper.to_entity_list(models)

    def list_therapists(self) -> List[PersonEntity]:
        with _database_errors("listar terapeutas"):
            models = self._queryset().filter(papel=PersonRole.TERAPEUTA.value)
            return self._mapper.to_entity_list(models)

    def list_patients_by_therapist(self, terapeuta_id: str) -> List[PersonEntity]:
        with _database_errors("listar pacientes do terapeuta"):
            models = self._queryset().filter(
                papel=PersonRole.PACIENTE.value,
                terapeuta_id=terapeuta_id,
            )
            return self._mapper.to_entity_list(models)

    def set_active(self, pessoa_id: str, ativo: bool) -> Optional[PersonEntity]:
        """
        Liga/desliga a flag de atividade.

        Returns:
            Entidade atualizada ou None se o id não existir
        """
        with _database_errors("alterar status da pessoa"):
            model = PersonModel.objects.filter(pk=pessoa_id).first()
            if model is None:
                return None
            model.ativo = ativo
            model.save(update_fields=['ativo', 'atualizado_em'])
            logger.info(f"Person {pessoa_id} ativo={ativo}")
            return self.get_by_id(pessoa_id)

    def _raise_unique_violation(
        self,
        pessoa: PersonEntity,
        ignore_id: Optional[str],
        cause: IntegrityError,
    ) -> None:
        """
        Descobre qual coluna única já contém o valor e lança
        UniqueViolationError com o campo correspondente.

        Raises:
            UniqueViolationError: se cpf ou email já existem
            RepositoryError: se a violação não for de unicidade
        """
        others = PersonModel.objects.all()
        if ignore_id is not None:
            others = others.exclude(pk=ignore_id)

        if others.filter(cpf=pessoa.cpf).exists():
            raise UniqueViolationError("CPF já cadastrado", field="cpf") from cause
        if others.filter(email=pessoa.email).exists():
            raise UniqueViolationError("E-mail já cadastrado", field="email") from cause

        raise RepositoryError(f"Violação de integridade: {cause}") from cause
