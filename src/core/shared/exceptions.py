"""
Exceções de Domínio do CIF Person Service.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    └── RepositoryError (falha do repositório/banco)
        └── UniqueViolationError (chave única duplicada)

Fronteira:
    Exceções atravessam apenas a fronteira Adapter → Core.
    Os Use Cases as capturam e devolvem um Result tipado;
    nenhuma exceção escapa do Core para a camada HTTP.
"""

from typing import Optional


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            repo.create(pessoa)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        """Serializa exceção para dicionário (útil para APIs)."""
        return {
            "error": self.code,
            "message": self.message,
        }


class ValidationError(DomainException):
    """
    Erro de validação de dados de entrada.

    Lançada pelas entidades quando dados fornecidos não atendem
    aos requisitos mínimos (ex: nome vazio, papel desconhecido).

    Example:
        if not nome.strip():
            raise ValidationError("Nome é obrigatório", field="nome")
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class RepositoryError(DomainException):
    """
    Falha de infraestrutura ao acessar o repositório.

    Lançada pelos adapters de persistência (banco indisponível,
    timeout, erro de integridade não classificado).
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message, code or "REPOSITORY_ERROR")


class UniqueViolationError(RepositoryError):
    """
    Violação de restrição de unicidade.

    O adapter informa o campo violado de forma estruturada,
    para que o Core classifique o conflito sem inspecionar
    a mensagem de erro do banco.

    Example:
        raise UniqueViolationError("CPF já cadastrado", field="cpf")
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message, "UNIQUE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result
