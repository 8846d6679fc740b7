"""
Ports (Interfaces) do Domínio de Pessoas.

Define os contratos que os Adapters de infraestrutura devem implementar:
- PersonRepository: Persistência e consulta de pessoas
- PasswordHasher: Geração e verificação de hash de senha

Princípio:
    Core define interfaces → Adapters implementam
    Dependências sempre apontam para o Core

Example:
    # No Adapter (Django)
    class DjangoPersonRepository:
        def create(self, pessoa: PersonEntity) -> PersonEntity:
            model = PersonMapper.to_model(pessoa)
            model.save()
"""

from dataclasses import replace
from typing import Dict, List, Optional, Protocol, runtime_checkable
import hashlib
import hmac
import uuid

from src.core.shared.exceptions import UniqueViolationError

from .entities import PersonEntity, PersonRole


@runtime_checkable
class PersonRepository(Protocol):
    """
    Interface para persistência de Pessoas.

    Implementações:
    - DjangoPersonRepository (PostgreSQL via ORM)
    - InMemoryPersonRepository (para testes)

    Contrato de erros:
    - create/update lançam UniqueViolationError(field="cpf"|"email")
      quando uma restrição de unicidade é violada
    - qualquer falha de infraestrutura lança RepositoryError
    - ausência de registro é sinalizada com None, nunca com exceção
    """

    def create(self, pessoa: PersonEntity) -> PersonEntity:
        """
        Insere nova pessoa e atribui o id.

        Args:
            pessoa: Entidade a ser persistida

        Returns:
            Entidade persistida (com id)

        Raises:
            UniqueViolationError: Se cpf ou email já cadastrados
            RepositoryError: Se falha na persistência
        """
        ...

    def update(self, pessoa_id: str, pessoa: PersonEntity) -> Optional[PersonEntity]:
        """
        Substitui os dados cadastrais da pessoa.

        O hash da senha e a data de criação do registro
        existente são preservados.

        Returns:
            Entidade atualizada ou None se não existir
        """
        ...

    def update_password(self, pessoa_id: str, senha_hash: str) -> Optional[PersonEntity]:
        """Grava novo hash de senha. None se não existir."""
        ...

    def get_by_id(self, pessoa_id: str) -> Optional[PersonEntity]:
        ...

    def get_by_cpf(self, cpf: str) -> Optional[PersonEntity]:
        """Busca por CPF normalizado (somente dígitos)."""
        ...

    def get_by_email(self, email: str) -> Optional[PersonEntity]:
        ...

    def list_patients(self) -> List[PersonEntity]:
        ...

    def list_therapists(self) -> List[PersonEntity]:
        ...

    def list_patients_by_therapist(self, terapeuta_id: str) -> List[PersonEntity]:
        ...

    def set_active(self, pessoa_id: str, ativo: bool) -> Optional[PersonEntity]:
        """
        Liga/desliga a flag de atividade (exclusão lógica).

        Returns:
            Entidade atualizada ou None se não existir
        """
        ...


@runtime_checkable
class PasswordHasher(Protocol):
    """
    Interface para credenciais.

    O Core nunca conhece o algoritmo: apenas pede o hash
    e a verificação.
    """

    def hash(self, raw_password: str) -> str:
        ...

    def verify(self, raw_password: str, hashed: str) -> bool:
        ...


class InMemoryPersonRepository:
    """
    Implementação em memória do PersonRepository.

    Útil para:
    - Testes unitários
    - Prototipagem

    Não usar em produção!

    Reproduz as restrições de unicidade de cpf e email do banco
    e resolve o terapeuta dos pacientes nas leituras.
    """

    def __init__(self):
        self._pessoas: Dict[str, PersonEntity] = {}

    def create(self, pessoa: PersonEntity) -> PersonEntity:
        self._check_unique(pessoa)
        stored = replace(pessoa, id=pessoa.id or str(uuid.uuid4()), terapeuta=None)
        self._pessoas[stored.id] = stored
        return self._resolve(stored)

    def update(self, pessoa_id: str, pessoa: PersonEntity) -> Optional[PersonEntity]:
        existing = self._pessoas.get(pessoa_id)
        if existing is None:
            return None
        self._check_unique(pessoa, ignore_id=pessoa_id)
        stored = replace(
            pessoa,
            id=pessoa_id,
            senha=existing.senha,
            criado_em=existing.criado_em,
            terapeuta=None,
        )
        self._pessoas[pessoa_id] = stored
        return self._resolve(stored)

    def update_password(self, pessoa_id: str, senha_hash: str) -> Optional[PersonEntity]:
        existing = self._pessoas.get(pessoa_id)
        if existing is None:
            return None
        existing.alterar_senha(senha_hash)
        return self._resolve(existing)

    def get_by_id(self, pessoa_id: str) -> Optional[PersonEntity]:
        pessoa = self._pessoas.get(pessoa_id)
        return self._resolve(pessoa) if pessoa else None

    def get_by_cpf(self, cpf: str) -> Optional[PersonEntity]:
        return self._find(lambda p: p.cpf == cpf)

    def get_by_email(self, email: str) -> Optional[PersonEntity]:
        email = (email or "").strip().lower()
        return self._find(lambda p: p.email == email)

    def list_patients(self) -> List[PersonEntity]:
        return self._filter(lambda p: p.papel == PersonRole.PACIENTE)

    def list_therapists(self) -> List[PersonEntity]:
        return self._filter(lambda p: p.papel == PersonRole.TERAPEUTA)

    def list_patients_by_therapist(self, terapeuta_id: str) -> List[PersonEntity]:
        return self._filter(
            lambda p: p.papel == PersonRole.PACIENTE and p.terapeuta_id == terapeuta_id
        )

    def set_active(self, pessoa_id: str, ativo: bool) -> Optional[PersonEntity]:
        existing = self._pessoas.get(pessoa_id)
        if existing is None:
            return None
        if ativo:
            existing.reativar()
        else:
            existing.inativar()
        return self._resolve(existing)

    def count(self) -> int:
        return len(self._pessoas)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._pessoas.clear()

    def _check_unique(self, pessoa: PersonEntity, ignore_id: Optional[str] = None) -> None:
        for other in self._pessoas.values():
            if other.id == ignore_id:
                continue
            if other.cpf == pessoa.cpf:
                raise UniqueViolationError("CPF já cadastrado", field="cpf")
            if other.email == pessoa.email:
                raise UniqueViolationError("E-mail já cadastrado", field="email")

    def _find(self, predicate) -> Optional[PersonEntity]:
        for pessoa in self._pessoas.values():
            if predicate(pessoa):
                return self._resolve(pessoa)
        return None

    def _filter(self, predicate) -> List[PersonEntity]:
        return [self._resolve(p) for p in self._pessoas.values() if predicate(p)]

    def _resolve(self, pessoa: PersonEntity) -> PersonEntity:
        terapeuta = None
        if pessoa.terapeuta_id:
            terapeuta = self._pessoas.get(pessoa.terapeuta_id)
        return replace(pessoa, terapeuta=terapeuta)


class InMemoryPasswordHasher:
    """
    Hasher simples (SHA-256 com salt fixo) para testes e prototipagem.

    Não usar em produção! O adapter Django usa os hashers do framework.
    """

    def __init__(self, salt: str = "cif-tests"):
        self._salt = salt

    def hash(self, raw_password: str) -> str:
        digest = hashlib.sha256(f"{self._salt}:{raw_password}".encode("utf-8")).hexdigest()
        return f"sha256${digest}"

    def verify(self, raw_password: str, hashed: str) -> bool:
        return hmac.compare_digest(self.hash(raw_password), hashed or "")
