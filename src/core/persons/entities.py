"""
Entidades do Domínio de Pessoas.

Este módulo define as entidades de domínio que representam
as pessoas atendidas pela clínica: pacientes e terapeutas.

Entidades:
- PersonEntity: Agregado principal (identidade da pessoa)
- PersonRole: Papel da pessoa (Terapeuta | Paciente)

Regras de Negócio Encapsuladas:
- CPF armazenado sempre normalizado (somente dígitos)
- Paciente referencia no máximo um terapeuta (referência não-proprietária)
- Inativação é exclusão lógica (registro mantido, flag desligada)
- Política de tamanho de senha
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from src.core.shared.exceptions import ValidationError

from .cpf import normalize_cpf


class PersonRole(Enum):
    """Papel de uma pessoa no cadastro."""

    TERAPEUTA = "Terapeuta"
    PACIENTE = "Paciente"

    @classmethod
    def from_string(cls, value: str) -> "PersonRole":
        """
        Converte string para enum.

        Aceita o nome ("PACIENTE"), o valor ("Paciente") ou o
        equivalente em inglês usado por clientes antigos ("patient").

        Raises:
            ValueError: Se valor inválido
        """
        if not isinstance(value, str):
            raise ValueError(f"Papel inválido: {value}")

        aliases = {"THERAPIST": cls.TERAPEUTA, "PATIENT": cls.PACIENTE}
        key = value.strip().upper()

        if key in aliases:
            return aliases[key]

        try:
            return cls[key]
        except KeyError:
            pass

        for role in cls:
            if role.value.lower() == value.strip().lower():
                return role

        raise ValueError(f"Papel inválido: {value}")


@dataclass
class PersonEntity:
    """
    Entidade de Domínio: Pessoa.

    Invariantes:
    - cpf identifica no máximo uma pessoa (ativa ou inativa)
    - email é único entre todas as pessoas
    - terapeuta só é definido para pacientes e sempre aponta
      para uma pessoa existente no momento do cadastro
    - senha guarda apenas o hash produzido pelo PasswordHasher

    Attributes:
        id: Identificador atribuído pelo repositório (None até persistir)
        cpf: CPF normalizado (11 dígitos)
        email: E-mail único
        nome: Nome completo
        papel: Terapeuta ou Paciente
        senha: Hash da senha (nunca exposto em DTOs)
        ativo: Flag de exclusão lógica
        terapeuta_id: ID do terapeuta responsável (pacientes)
        terapeuta: Terapeuta resolvido (referência, não pertence ao paciente)
    """

    id: Optional[str] = None
    cpf: str = ""
    email: str = ""
    nome: str = ""
    papel: PersonRole = PersonRole.PACIENTE
    senha: str = field(default="", repr=False)
    ativo: bool = True
    terapeuta_id: Optional[str] = None
    terapeuta: Optional["PersonEntity"] = field(default=None, repr=False)
    criado_em: datetime = field(default_factory=datetime.now)
    atualizado_em: datetime = field(default_factory=datetime.now)

    # Política de senha herdada do sistema legado (ver DESIGN.md)
    SENHA_MIN_LENGTH = 6
    SENHA_MAX_LENGTH = 8

    @classmethod
    def criar(
        cls,
        cpf: str,
        email: str,
        nome: str,
        papel: PersonRole,
        senha_hash: str = "",
        terapeuta_id: Optional[str] = None,
    ) -> "PersonEntity":
        """
        Factory method para criar pessoa com validações.

        O CPF já deve ter sido validado pelo Use Case; aqui ele
        é apenas normalizado.

        Args:
            cpf: CPF (com ou sem pontuação)
            email: E-mail
            nome: Nome completo
            papel: Papel da pessoa
            senha_hash: Hash da senha inicial (opcional)
            terapeuta_id: ID do terapeuta (somente pacientes)

        Returns:
            Nova instância de PersonEntity (ainda sem id)

        Raises:
            ValidationError: Se nome/email vazios ou terapeuta em não-paciente
        """
        cls._validar_obrigatorio(nome, "nome")
        cls._validar_obrigatorio(email, "email")

        if terapeuta_id is not None and not isinstance(terapeuta_id, str):
            raise ValidationError("Terapeuta_id deve ser texto", field="terapeuta_id")

        if terapeuta_id and papel != PersonRole.PACIENTE:
            raise ValidationError(
                "Somente pacientes podem ter terapeuta",
                field="terapeuta_id"
            )

        return cls(
            cpf=normalize_cpf(cpf),
            email=email.strip().lower(),
            nome=nome.strip(),
            papel=papel,
            senha=senha_hash,
            terapeuta_id=terapeuta_id or None,
        )

    @staticmethod
    def _validar_obrigatorio(valor: Optional[str], campo: str) -> None:
        if valor is not None and not isinstance(valor, str):
            raise ValidationError(f"{campo.capitalize()} deve ser texto", field=campo)
        if not valor or not valor.strip():
            raise ValidationError(f"{campo.capitalize()} é obrigatório", field=campo)

    @classmethod
    def senha_valida(cls, senha: Optional[str]) -> bool:
        """Verifica a política de tamanho da senha (6 a 8 caracteres)."""
        if not isinstance(senha, str) or not senha:
            return False
        return cls.SENHA_MIN_LENGTH <= len(senha) <= cls.SENHA_MAX_LENGTH

    def vincular_terapeuta(self, terapeuta: "PersonEntity") -> None:
        """
        Vincula o paciente ao terapeuta resolvido.

        Raises:
            ValidationError: Se esta pessoa não é paciente
        """
        if not self.eh_paciente:
            raise ValidationError(
                "Somente pacientes podem ter terapeuta",
                field="terapeuta_id"
            )
        self.terapeuta = terapeuta
        self.terapeuta_id = terapeuta.id
        self._atualizar_timestamp()

    def alterar_senha(self, senha_hash: str) -> None:
        """Substitui o hash da senha."""
        self.senha = senha_hash
        self._atualizar_timestamp()

    def inativar(self) -> None:
        """Exclusão lógica: mantém o registro e desliga a flag."""
        self.ativo = False
        self._atualizar_timestamp()

    def reativar(self) -> None:
        self.ativo = True
        self._atualizar_timestamp()

    def _atualizar_timestamp(self) -> None:
        self.atualizado_em = datetime.now()

    @property
    def eh_paciente(self) -> bool:
        return self.papel == PersonRole.PACIENTE

    @property
    def eh_terapeuta(self) -> bool:
        return self.papel == PersonRole.TERAPEUTA

    def __eq__(self, other: object) -> bool:
        """Comparação por ID (identidade de entidade)."""
        if not isinstance(other, PersonEntity):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id) if self.id is not None else id(self)
