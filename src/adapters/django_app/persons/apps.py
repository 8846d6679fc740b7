"""
Configuração do Django App para Pessoas.
"""

from django.apps import AppConfig


class PersonsConfig(AppConfig):
    """Configuração do app Pessoas (pacientes e terapeutas)."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'src.adapters.django_app.persons'
    label = 'persons'
    verbose_name = 'Cadastro de Pessoas'
