"""
Domínio de Pessoas - Cadastro de Pacientes e Terapeutas.

Este módulo contém toda a lógica de negócio relacionada ao cadastro
de pessoas da clínica, incluindo:
- Entidades (PersonEntity, PersonRole)
- Validação de CPF
- Use Cases (Cadastrar, Atualizar, Listar, Inativar, Login...)
- Domain Events (PessoaCadastrada, SenhaAlterada...)
- DTOs (Input/Output Data Transfer Objects)
- Ports (Interfaces para repositório e hasher de senha)

Características do Domínio:
- CPF validado antes de qualquer acesso ao repositório
- Unicidade de CPF e e-mail garantida pelo repositório
- Paciente vinculado opcionalmente a um terapeuta existente
- Todo desfecho de Use Case é um Result tipado
"""

from .cpf import is_valid_cpf, normalize_cpf, format_cpf, mask_cpf
from .entities import PersonEntity, PersonRole
from .errors import PersonError
from .events import (
    PessoaCadastradaEvent,
    PessoaAtualizadaEvent,
    SenhaAlteradaEvent,
    PessoaInativadaEvent,
    PessoaReativadaEvent,
    RecuperacaoSenhaSolicitadaEvent,
)
from .dtos import (
    CadastrarPessoaInputDTO,
    AtualizarPessoaInputDTO,
    PersonOutputDTO,
    TerapeutaResumoDTO,
)
from .ports import PersonRepository, PasswordHasher
from .use_cases import (
    CadastrarPessoaService,
    AtualizarPessoaService,
    AtualizarSenhaService,
    ObterPessoaService,
    BuscarPessoaPorCpfService,
    ListarPacientesService,
    ListarTerapeutasService,
    ListarPacientesPorTerapeutaService,
    InativarPessoaService,
    ReativarPessoaService,
    LoginService,
    SolicitarRecuperacaoSenhaService,
)

__all__ = [
    # CPF
    "is_valid_cpf",
    "normalize_cpf",
    "format_cpf",
    "mask_cpf",
    # Entities
    "PersonEntity",
    "PersonRole",
    "PersonError",
    # Events
    "PessoaCadastradaEvent",
    "PessoaAtualizadaEvent",
    "SenhaAlteradaEvent",
    "PessoaInativadaEvent",
    "PessoaReativadaEvent",
    "RecuperacaoSenhaSolicitadaEvent",
    # DTOs
    "CadastrarPessoaInputDTO",
    "AtualizarPessoaInputDTO",
    "PersonOutputDTO",
    "TerapeutaResumoDTO",
    # Ports
    "PersonRepository",
    "PasswordHasher",
    # Use Cases
    "CadastrarPessoaService",
    "AtualizarPessoaService",
    "AtualizarSenhaService",
    "ObterPessoaService",
    "BuscarPessoaPorCpfService",
    "ListarPacientesService",
    "ListarTerapeutasService",
    "ListarPacientesPorTerapeutaService",
    "InativarPessoaService",
    "ReativarPessoaService",
    "LoginService",
    "SolicitarRecuperacaoSenhaService",
]
