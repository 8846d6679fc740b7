"""
Configurações globais do Pytest para o serviço de Pessoas.

Este arquivo é carregado automaticamente pelo pytest e fornece:
- Django settings para testes (SQLite em memória)
- Markers e opção --run-integration
- Fixtures compartilhadas (CPFs válidos, doubles em memória)
"""

import sys
from pathlib import Path

import pytest

# Raiz do projeto no path para imports `src.*`
project_root_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_root_path))


# CPFs com dígitos verificadores válidos
CPF_TERAPEUTA = "52998224725"
CPF_PACIENTE = "11144477735"
CPF_OUTRO = "12345678909"


def pytest_configure(config):
    """Configura markers e Django antes dos testes."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )

    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            SECRET_KEY='test-secret-key',
            DATABASES={
                'default': {
                    'ENGINE': 'django.db.backends.sqlite3',
                    'NAME': ':memory:',
                }
            },
            INSTALLED_APPS=[
                'django.contrib.admin',
                'django.contrib.contenttypes',
                'django.contrib.auth',
                'django.contrib.sessions',
                'django.contrib.messages',
                'src.adapters.django_app.persons.apps.PersonsConfig',
            ],
            ROOT_URLCONF='src.config.urls',
            MIDDLEWARE=[],
            APPEND_SLASH=False,
            DEFAULT_AUTO_FIELD='django.db.models.BigAutoField',
            USE_TZ=True,
            TIME_ZONE='America/Sao_Paulo',
            PASSWORD_HASHERS=[
                'django.contrib.auth.hashers.MD5PasswordHasher',
            ],
            EMAIL_BACKEND='django.core.mail.backends.locmem.EmailBackend',
            DEFAULT_FROM_EMAIL='nao-responda@cif.local',
            EVENT_PUBLISHER_MODE='memory',
            CELERY_TASK_ALWAYS_EAGER=True,
        )
        django.setup()


def pytest_collection_modifyitems(config, items):
    """Pula testes de integração sem --run-integration."""
    if config.getoption("--run-integration", default=False):
        return

    skip_integration = pytest.mark.skip(reason="Integration tests require --run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def pytest_addoption(parser):
    """Adiciona opções de linha de comando."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests",
    )


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return project_root_path


@pytest.fixture
def cpf_terapeuta():
    return CPF_TERAPEUTA


@pytest.fixture
def cpf_paciente():
    return CPF_PACIENTE


@pytest.fixture
def inmemory_person_repo():
    """Repositório em memória para testes unitários."""
    from src.core.persons.ports import InMemoryPersonRepository
    return InMemoryPersonRepository()


@pytest.fixture
def inmemory_hasher():
    from src.core.persons.ports import InMemoryPasswordHasher
    return InMemoryPasswordHasher()


@pytest.fixture
def inmemory_uow():
    """Unit of Work em memória para testes unitários."""
    from src.adapters.django_app.shared.unit_of_work import InMemoryUnitOfWork
    return InMemoryUnitOfWork()
