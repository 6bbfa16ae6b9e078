"""
Exceções de Domínio do Help Desk.

Este módulo define exceções específicas do domínio que permitem
comunicar erros de forma clara e tipada entre as camadas.

Hierarquia:
    DomainException (base)
    ├── ValidationError (validação de entrada)
    ├── EntityNotFoundError (entidade não existe)
    ├── BusinessRuleViolationError (regra de negócio violada)
    ├── AuthenticationError (credenciais inválidas)
    ├── PermissionDeniedError (operação não permitida ao perfil)
    └── RepositoryError (falha do backend de persistência)
        ├── SchemaMismatchError (coluna inexistente no backend)
        └── DuplicateRecordError (chave natural duplicada)
"""

from typing import Optional, Sequence


class DomainException(Exception):
    """
    Exceção base para todos os erros de domínio.

    Todas as exceções específicas do domínio devem herdar desta classe.
    Isso permite capturar qualquer erro de domínio de forma genérica.

    Example:
        try:
            service.execute(input_dto)
        except DomainException as e:
            logger.error(f"Erro de domínio: {e}")
    """

    def __init__(self, message: str, code: str = None):
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

    Lançada antes de qualquer escrita quando os dados fornecidos
    não atendem aos requisitos mínimos (campo obrigatório ausente,
    patrimônio duplicado, quantidade inválida).

    Example:
        if not nome.strip():
            raise ValidationError("Nome é obrigatório", field="nome")
    """

    def __init__(self, message: str, field: str = None):
        self.field = field
        code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(message, code)

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.field:
            result["field"] = self.field
        return result


class EntityNotFoundError(DomainException):
    """
    Entidade não encontrada no repositório.

    Example:
        chamado = repo.get_by_id(chamado_id)
        if not chamado:
            raise EntityNotFoundError(f"Chamado {chamado_id} não encontrado")
    """

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(message, "ENTITY_NOT_FOUND")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.entity_type:
            result["entity_type"] = self.entity_type
        if self.entity_id:
            result["entity_id"] = self.entity_id
        return result


class BusinessRuleViolationError(DomainException):
    """Violação de regra de negócio estabelecida no domínio."""

    def __init__(self, message: str, rule: str = None):
        self.rule = rule
        super().__init__(message, "BUSINESS_RULE_VIOLATION")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.rule:
            result["rule"] = self.rule
        return result


class AuthenticationError(DomainException):
    """Usuário ou senha não conferem com o diretório de usuários."""

    def __init__(self, message: str = "usuário ou senha incorretos."):
        super().__init__(message, "AUTHENTICATION_FAILED")


class PermissionDeniedError(DomainException):
    """
    Perfil da sessão não pode executar a operação.

    Example:
        if not sessao.pode_editar:
            raise PermissionDeniedError("Usuários VIP não podem editar equipamentos")
    """

    def __init__(self, message: str):
        super().__init__(message, "PERMISSION_DENIED")


class RepositoryError(DomainException):
    """
    Falha do backend de persistência (banco ou API REST).

    Attributes:
        detail: Detalhe técnico bruto devolvido pelo backend
    """

    def __init__(self, message: str, detail: Optional[str] = None, code: str = None):
        self.detail = detail
        super().__init__(message, code or "REPOSITORY_ERROR")


class SchemaMismatchError(RepositoryError):
    """
    Backend rejeitou o payload por conter colunas inexistentes.

    Distingue "coluna opcional ausente no schema" de falhas genuínas,
    permitindo que o chamador reenvie um payload reduzido.

    Attributes:
        columns: Colunas rejeitadas, quando identificáveis
    """

    def __init__(
        self,
        message: str,
        columns: Optional[Sequence[str]] = None,
        detail: Optional[str] = None,
    ):
        self.columns = list(columns or [])
        super().__init__(message, detail=detail, code="SCHEMA_MISMATCH")

    def to_dict(self) -> dict:
        result = super().to_dict()
        if self.columns:
            result["columns"] = self.columns
        return result


class DuplicateRecordError(RepositoryError):
    """Violação de unicidade (chave natural já cadastrada)."""

    def __init__(
        self,
        message: str = "Registro duplicado encontrado.",
        detail: Optional[str] = None,
    ):
        super().__init__(message, detail=detail, code="DUPLICATE_RECORD")
