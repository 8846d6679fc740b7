"""
Data Transfer Objects (DTOs) do Domínio de Pessoas.

DTOs são estruturas simples para transportar dados entre camadas,
evitando vazamento de modelos internos (entidades) para camadas externas.

Tipos de DTOs:
- Input DTOs: Recebem dados de entrada (da API)
- Output DTOs: Formatam dados para resposta (sem hash de senha)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .cpf import format_cpf
from .entities import PersonEntity


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CadastrarPessoaInputDTO:
    """
    DTO de entrada para cadastrar pessoa.

    Imutável (frozen=True) para garantir que dados
    recebidos não sejam alterados acidentalmente.

    Attributes:
        cpf: CPF informado (pode conter pontuação)
        email: E-mail
        nome: Nome completo
        papel: Papel ("PACIENTE" | "TERAPEUTA")
        senha: Senha em texto puro (hasheada pelo Use Case)
        terapeuta_id: ID do terapeuta responsável (somente pacientes)
    """

    cpf: Optional[str]
    email: str
    nome: str
    papel: str = "PACIENTE"
    senha: Optional[str] = field(default=None, repr=False)
    terapeuta_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Converte para dicionário (sem a senha)."""
        return {
            "cpf": self.cpf,
            "email": self.email,
            "nome": self.nome,
            "papel": self.papel,
            "terapeuta_id": self.terapeuta_id,
        }


@dataclass(frozen=True)
class AtualizarPessoaInputDTO:
    """
    DTO de entrada para atualizar pessoa.

    O id da rota é passado separadamente ao Use Case e
    prevalece sobre qualquer id enviado no corpo.

    Attributes:
        cpf: CPF (revalidado na atualização)
        email: E-mail
        nome: Nome completo
        papel: Papel
        ativo: Flag de atividade (None mantém a gravada)
        terapeuta_id: ID do terapeuta responsável
    """

    cpf: Optional[str]
    email: str
    nome: str
    papel: str = "PACIENTE"
    ativo: Optional[bool] = None
    terapeuta_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "cpf": self.cpf,
            "email": self.email,
            "nome": self.nome,
            "papel": self.papel,
            "ativo": self.ativo,
            "terapeuta_id": self.terapeuta_id,
        }


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TerapeutaResumoDTO:
    """Resumo do terapeuta embutido no DTO do paciente."""

    id: str
    nome: str
    email: str

    @classmethod
    def from_entity(cls, entity: PersonEntity) -> "TerapeutaResumoDTO":
        return cls(id=entity.id, nome=entity.nome, email=entity.email)

    def to_dict(self) -> dict:
        return {"id": self.id, "nome": self.nome, "email": self.email}


@dataclass
class PersonOutputDTO:
    """
    DTO de saída com dados da pessoa.

    Nunca contém a senha nem o hash.

    Attributes:
        id: Identificador único
        cpf: CPF normalizado
        cpf_formatado: CPF no formato 000.000.000-00
        email: E-mail
        nome: Nome completo
        papel: Valor do enum ("Paciente" | "Terapeuta")
        ativo: Flag de atividade
        terapeuta_id: ID do terapeuta (pacientes)
        terapeuta: Resumo do terapeuta, quando resolvido
        criado_em: Data/hora de criação
        atualizado_em: Data/hora da última atualização
    """

    id: str
    cpf: str
    cpf_formatado: str
    email: str
    nome: str
    papel: str
    ativo: bool
    terapeuta_id: Optional[str]
    criado_em: datetime
    atualizado_em: datetime
    terapeuta: Optional[TerapeutaResumoDTO] = None

    @classmethod
    def from_entity(cls, entity: PersonEntity) -> "PersonOutputDTO":
        """
        Factory method para converter entidade em DTO.

        Args:
            entity: Entidade PersonEntity

        Returns:
            DTO com dados públicos da entidade
        """
        terapeuta = None
        if entity.terapeuta is not None:
            terapeuta = TerapeutaResumoDTO.from_entity(entity.terapeuta)

        return cls(
            id=entity.id,
            cpf=entity.cpf,
            cpf_formatado=format_cpf(entity.cpf),
            email=entity.email,
            nome=entity.nome,
            papel=entity.papel.value,
            ativo=entity.ativo,
            terapeuta_id=entity.terapeuta_id,
            criado_em=entity.criado_em,
            atualizado_em=entity.atualizado_em,
            terapeuta=terapeuta,
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "id": self.id,
            "cpf": self.cpf,
            "cpf_formatado": self.cpf_formatado,
            "email": self.email,
            "nome": self.nome,
            "papel": self.papel,
            "ativo": self.ativo,
            "terapeuta_id": self.terapeuta_id,
            "terapeuta": self.terapeuta.to_dict() if self.terapeuta else None,
            "criado_em": self.criado_em.isoformat(),
            "atualizado_em": self.atualizado_em.isoformat(),
        }
