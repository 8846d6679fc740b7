"""
Fixtures para testes do adapter Django.

O Django já é configurado em tests/conftest.py (SQLite em memória);
aqui ficam apenas fixtures de models e containers.
"""

import uuid

import pytest


@pytest.fixture
def person_model_factory():
    """Factory para criar PersonModel diretamente no banco."""
    from src.adapters.django_app.persons.models import PersonModel

    def create_person(**kwargs):
        defaults = {
            'id': str(uuid.uuid4()),
            'cpf': '52998224725',
            'email': 'ana@cif.com',
            'nome': 'Ana Souza',
            'papel': 'Terapeuta',
        }
        defaults.update(kwargs)
        return PersonModel.objects.create(**defaults)

    return create_person


@pytest.fixture
def testing_container():
    """Container com doubles em memória."""
    from src.config.container import build_testing_container
    return build_testing_container()


@pytest.fixture
def api_container(testing_container):
    """Substitui o container global usado pelas API views."""
    from unittest.mock import patch

    with patch(
        'src.adapters.django_app.persons.api_views.get_container',
        return_value=testing_container,
    ):
        yield testing_container
