"""
Dependency Injection Container.

Configura e gerencia todas as dependências da aplicação.
Usa dependency-injector para lazy-loading e injeção explícita.

Padrões:
- Singleton: Uma instância para toda app (repositório, hasher, publisher)
- Factory: Nova instância por chamada (services, UoW)

Ambientes:
- Container: Django ORM + hashers do Django + publisher por settings
- build_testing_container(): mesmas services sobre doubles em memória
"""

from typing import Optional

from dependency_injector import containers, providers

from src.adapters.django_app.events.publishers import (
    InMemoryEventPublisher,
    get_event_publisher,
)
from src.adapters.django_app.shared.unit_of_work import DjangoUnitOfWork, InMemoryUnitOfWork
from src.core.persons import use_cases
from src.core.persons.ports import InMemoryPasswordHasher, InMemoryPersonRepository


def _django_person_repository():
    # Import tardio: models exigem o registry de apps pronto
    from src.adapters.django_app.persons.repositories import DjangoPersonRepository
    return DjangoPersonRepository()


def _django_password_hasher():
    from src.adapters.django_app.persons.hashers import DjangoPasswordHasher
    return DjangoPasswordHasher()


class Container(containers.DeclarativeContainer):
    """
    Container principal de Dependency Injection.

    Organização:
    - Configuration: settings do Django
    - Infrastructure: publisher de eventos, hasher
    - Repositories: Persistência
    - Unit of Work: Transações
    - Services: Use Cases

    Example:
        container = get_container()
        service = container.cadastrar_pessoa_service()
        result = service.execute(input_dto)
    """

    config = providers.Configuration()

    # =========================================================================
    # Infrastructure
    # =========================================================================

    event_publisher = providers.Singleton(
        get_event_publisher,
        mode=config.event_publisher_mode,
    )

    password_hasher = providers.Singleton(_django_password_hasher)

    # =========================================================================
    # Repositories
    # =========================================================================

    person_repository = providers.Singleton(_django_person_repository)

    # =========================================================================
    # Unit of Work (nova instância por operação)
    # =========================================================================

    unit_of_work = providers.Factory(
        DjangoUnitOfWork,
        event_publisher=event_publisher,
    )

    # =========================================================================
    # Services / Use Cases
    # =========================================================================

    cadastrar_pessoa_service = providers.Factory(
        use_cases.CadastrarPessoaService,
        pessoa_repo=person_repository,
        uow=unit_of_work,
        password_hasher=password_hasher,
    )

    atualizar_pessoa_service = providers.Factory(
        use_cases.AtualizarPessoaService,
        pessoa_repo=person_repository,
        uow=unit_of_work,
    )

    atualizar_senha_service = providers.Factory(
        use_cases.AtualizarSenhaService,
        pessoa_repo=person_repository,
        uow=unit_of_work,
        password_hasher=password_hasher,
    )

    # Leitura (sem UoW)
    obter_pessoa_service = providers.Factory(
        use_cases.ObterPessoaService,
        pessoa_repo=person_repository,
    )

    buscar_pessoa_por_cpf_service = providers.Factory(
        use_cases.BuscarPessoaPorCpfService,
        pessoa_repo=person_repository,
    )

    listar_pacientes_service = providers.Factory(
        use_cases.ListarPacientesService,
        pessoa_repo=person_repository,
    )

    listar_terapeutas_service = providers.Factory(
        use_cases.ListarTerapeutasService,
        pessoa_repo=person_repository,
    )

    listar_pacientes_por_terapeuta_service = providers.Factory(
        use_cases.ListarPacientesPorTerapeutaService,
        pessoa_repo=person_repository,
    )

    inativar_pessoa_service = providers.Factory(
        use_cases.InativarPessoaService,
        pessoa_repo=person_repository,
        uow=unit_of_work,
    )

    reativar_pessoa_service = providers.Factory(
        use_cases.ReativarPessoaService,
        pessoa_repo=person_repository,
        uow=unit_of_work,
    )

    login_service = providers.Factory(
        use_cases.LoginService,
        pessoa_repo=person_repository,
        password_hasher=password_hasher,
    )

    solicitar_recuperacao_senha_service = providers.Factory(
        use_cases.SolicitarRecuperacaoSenhaService,
        pessoa_repo=person_repository,
        uow=unit_of_work,
    )


# =============================================================================
# Container Global (Singleton)
# =============================================================================

_container: Optional[Container] = None


def get_container() -> Container:
    """
    Retorna instância global do container.

    Cria se não existir (lazy initialization), lendo
    EVENT_PUBLISHER_MODE das settings do Django.
    """
    global _container

    if _container is None:
        from django.conf import settings

        _container = Container()
        _container.config.event_publisher_mode.from_value(
            getattr(settings, 'EVENT_PUBLISHER_MODE', 'logging')
        )

    return _container


def reset_container() -> None:
    """Reset do container (para testes)."""
    global _container
    _container = None


# =============================================================================
# Testing Container
# =============================================================================

def build_testing_container() -> Container:
    """
    Container para testes com implementações InMemory.

    Os overrides valem para todas as services que dependem
    dos providers substituídos.

    Example:
        container = build_testing_container()
        service = container.cadastrar_pessoa_service()
        repo = container.person_repository()
    """
    container = Container()
    container.person_repository.override(providers.Singleton(InMemoryPersonRepository))
    container.password_hasher.override(providers.Singleton(InMemoryPasswordHasher))
    container.event_publisher.override(providers.Singleton(InMemoryEventPublisher))
    container.unit_of_work.override(providers.Factory(InMemoryUnitOfWork))
    return container
