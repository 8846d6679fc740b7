"""
Validação de CPF (Cadastro de Pessoas Físicas).

O CPF tem 11 dígitos, sendo os dois últimos dígitos verificadores
calculados a partir dos nove primeiros:

    1º DV: soma(d1..d9 * pesos 10..2) % 11 → 0 se resto < 2, senão 11 - resto
    2º DV: soma(d1..d10 * pesos 11..2) % 11 → mesma regra

Sequências de dígitos repetidos ("00000000000", "11111111111", ...)
satisfazem o cálculo mas são inválidas.

Funções puras e totais: nunca lançam exceção.
"""

CPF_LENGTH = 11


def normalize_cpf(candidate) -> str:
    """
    Remove a formatação do CPF, mantendo apenas os dígitos.

    Args:
        candidate: CPF com ou sem pontuação ("529.982.247-25")

    Returns:
        Somente dígitos ("52998224725"), ou "" se não for string
    """
    if not isinstance(candidate, str):
        return ""
    return "".join(char for char in candidate if char in "0123456789")


def _check_digit(digits: str) -> int:
    weight = len(digits) + 1
    total = sum(int(digit) * (weight - index) for index, digit in enumerate(digits))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(candidate) -> bool:
    """
    Valida CPF pelo algoritmo dos dígitos verificadores.

    Args:
        candidate: Qualquer valor; strings podem conter pontuação

    Returns:
        True somente se normalizar para 11 dígitos válidos

    Example:
        >>> is_valid_cpf("529.982.247-25")
        True
        >>> is_valid_cpf("00000000000")
        False
    """
    digits = normalize_cpf(candidate)

    if len(digits) != CPF_LENGTH or digits == digits[0] * CPF_LENGTH:
        return False

    first = _check_digit(digits[:9])
    if first != int(digits[9]):
        return False

    second = _check_digit(digits[:10])
    return second == int(digits[10])


def format_cpf(cpf: str) -> str:
    """
    Formata CPF normalizado como 000.000.000-00.

    Valores que não têm 11 dígitos são devolvidos sem alteração.
    """
    digits = normalize_cpf(cpf)
    if len(digits) != CPF_LENGTH:
        return cpf
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def mask_cpf(cpf: str) -> str:
    """Mascara o CPF para logs (***.***.*47-25)."""
    digits = normalize_cpf(cpf)
    if len(digits) != CPF_LENGTH:
        return "***"
    return f"***.***.*{digits[7:9]}-{digits[9:]}"
