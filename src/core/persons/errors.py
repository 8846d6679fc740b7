"""
Taxonomia de desfechos de erro do domínio de Pessoas.

Cada Use Case devolve Result.fail(PersonError.X, mensagem).
A camada HTTP traduz cada código em um status de resposta.
Nenhum destes erros é re-tentável dentro do Core.
"""

from enum import Enum


class PersonError(Enum):
    """Códigos de erro devolvidos pelos Use Cases de pessoas."""

    INVALID_CPF = "INVALID_CPF"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    THERAPIST_NOT_FOUND = "THERAPIST_NOT_FOUND"
    CPF_ALREADY_REGISTERED = "CPF_ALREADY_REGISTERED"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    PERSON_NOT_FOUND = "PERSON_NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    REGISTRATION_FAILED = "REGISTRATION_FAILED"
    UPDATE_FAILED = "UPDATE_FAILED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
