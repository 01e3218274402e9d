"""
Erros dos serviços do painel.

Todos carregam uma mensagem legível para exibir ao usuário.
"""
from typing import List, Optional


class ServiceError(Exception):
    """Erro base dos serviços."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Entrada inválida (formato ou faixa de valores)."""

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidStateError(ServiceError):
    """Operação tentada no estado errado (ex.: fechar caixa sem caixa aberto)."""


class PersistenceFailure(ServiceError):
    """Falha (ou tempo esgotado) ao gravar ou ler no banco."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class RecordNotFoundError(ServiceError):
    """Registro inexistente na tabela."""

    def __init__(self, table: str, record_id):
        super().__init__(f"Registro não encontrado: {table}/{record_id}")
        self.table = table
        self.record_id = record_id
