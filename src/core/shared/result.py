"""
Result - Desfecho tipado dos Use Cases.

Cada Use Case devolve um Result: sucesso com valor, ou falha com
um código de erro específico (Enum do domínio) e mensagem.
Assim a camada HTTP é obrigada a tratar cada desfecho e nenhuma
exceção escapa do Core.

Example:
    result = service.execute(input_dto)
    if result.is_ok:
        return json_response(True, data=result.value.to_dict())
    return json_response(False, error=result.error.value, status=...)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Resultado discriminado de uma operação.

    Attributes:
        value: Valor de sucesso (None para operações sem retorno)
        error: Código de erro (None em caso de sucesso)
        message: Mensagem legível associada ao erro
    """

    value: Optional[T] = None
    error: Optional[Enum] = None
    message: str = ""

    @classmethod
    def ok(cls, value: Optional[T] = None) -> "Result[T]":
        """Cria resultado de sucesso."""
        return cls(value=value)

    @classmethod
    def fail(cls, error: Enum, message: str = "") -> "Result[T]":
        """Cria resultado de falha."""
        return cls(error=error, message=message)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """
        Retorna o valor de sucesso.

        Raises:
            ValueError: Se o resultado é uma falha
        """
        if self.error is not None:
            raise ValueError(f"Result em falha: {self.error.value} - {self.message}")
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """Serializa o desfecho (o valor precisa expor to_dict se não for primitivo)."""
        if self.is_ok:
            value = self.value
            if hasattr(value, "to_dict"):
                value = value.to_dict()
            return {"success": True, "data": value}
        return {
            "success": False,
            "error": self.error.value,
            "message": self.message,
        }
