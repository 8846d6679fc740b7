"""
Domain Events do Domínio de Pessoas.

Eventos:
- PessoaCadastradaEvent: Nova pessoa cadastrada
- PessoaAtualizadaEvent: Dados cadastrais alterados
- SenhaAlteradaEvent: Senha substituída
- PessoaInativadaEvent: Exclusão lógica
- PessoaReativadaEvent: Pessoa reativada
- RecuperacaoSenhaSolicitadaEvent: Pedido de recuperação de senha

Nenhum evento carrega senha ou hash de senha.

Uso:
    with uow:
        pessoa = repo.create(pessoa)
        uow.publish_event(PessoaCadastradaEvent(aggregate_id=pessoa.id, ...))
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from src.core.shared.events import DomainEvent


@dataclass
class PessoaEvent(DomainEvent):
    """Base dos eventos do agregado Pessoa."""

    @property
    def aggregate_type(self) -> str:
        return "Pessoa"


@dataclass
class PessoaCadastradaEvent(PessoaEvent):
    """
    Evento: Pessoa foi cadastrada.

    Handlers típicos:
    - Enviar e-mail de boas-vindas
    - Notificar terapeuta sobre novo paciente

    Attributes:
        papel: Valor do papel ("Paciente" | "Terapeuta")
        email: E-mail cadastrado
        terapeuta_id: Terapeuta vinculado (pacientes)
    """

    papel: str = ""
    email: str = ""
    terapeuta_id: Optional[str] = None

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            "papel": self.papel,
            "email": self.email,
            "terapeuta_id": self.terapeuta_id,
        }


@dataclass
class PessoaAtualizadaEvent(PessoaEvent):
    """Evento: Dados cadastrais foram alterados."""

    email: str = ""


@dataclass
class SenhaAlteradaEvent(PessoaEvent):
    """Evento: Senha foi alterada (handler avisa o titular por e-mail)."""

    email: str = ""


@dataclass
class PessoaInativadaEvent(PessoaEvent):
    """Evento: Pessoa foi inativada (exclusão lógica)."""


@dataclass
class PessoaReativadaEvent(PessoaEvent):
    """Evento: Pessoa inativa foi reativada."""


@dataclass
class RecuperacaoSenhaSolicitadaEvent(PessoaEvent):
    """
    Evento: Titular pediu recuperação de senha.

    O handler envia as instruções para o e-mail cadastrado.
    A senha nunca é devolvida pela API nem incluída no evento.
    """

    email: str = ""
