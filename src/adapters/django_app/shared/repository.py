"""
Repository Base - Implementação base de repositórios com Django ORM.

Fornece o contrato Repository do core para qualquer Model:
- list_all / get_by_id / create / update / delete
- Conversão Model -> registro (dict) -> Entity
- Tradução de erros do banco para exceções de domínio

Princípios:
- Repositórios são stateless
- Não contêm lógica de negócio
- Apenas persistência e queries

Tradução de erros:
    FieldDoesNotExist / coluna ausente  -> SchemaMismatchError
    IntegrityError (chave única)        -> DuplicateRecordError
    demais DatabaseError                -> RepositoryError
    ValidationError do Django           -> ValidationError do core
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar
import logging
import re

from django.core.exceptions import FieldDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, models, transaction
from django.db.models import QuerySet

from src.core.shared.datas import para_iso
from src.core.shared.exceptions import (
    DuplicateRecordError,
    EntityNotFoundError,
    RepositoryError,
    SchemaMismatchError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type variables
T = TypeVar("T")  # Entity type
M = TypeVar("M", bound=models.Model)  # Model type

MARCADORES_SCHEMA = (
    "no such column",
    "has no column named",
    "does not exist",
    "Unknown column",
)
MARCADORES_DUPLICIDADE = (
    "UNIQUE constraint failed",
    "duplicate key value",
    "Duplicate entry",
    "23505",
)
PADRAO_COLUNA = re.compile(
    r"(?:column(?: named)?:?|Unknown column)\s+['\"]?([\w.]+)['\"]?", re.IGNORECASE
)


def model_to_record(instance: models.Model) -> Dict[str, Any]:
    """
    Converte instância em registro no formato trafegado pela API.

    Chaves estrangeiras aparecem pelo nome da coluna (`produto_id`);
    datas/horas viram texto ISO.
    """
    return {
        f.attname: para_iso(getattr(instance, f.attname))
        for f in instance._meta.concrete_fields
    }


def colunas_do_erro(mensagem: str) -> List[str]:
    """Extrai nomes de colunas citados numa mensagem de erro do banco."""
    return [c.split(".")[-1] for c in PADRAO_COLUNA.findall(mensagem or "")]


@contextmanager
def traduzir_erros(entity_type: str) -> Iterator[None]:
    """
    Converte exceções do Django/banco em exceções de domínio.

    Example:
        with traduzir_erros("Setor"):
            SetorModel.objects.create(**campos)
    """
    try:
        yield
    except FieldDoesNotExist as e:
        raise SchemaMismatchError(str(e), columns=colunas_do_erro(str(e)), detail=str(e)) from e
    except IntegrityError as e:
        mensagem = str(e)
        if any(m in mensagem for m in MARCADORES_DUPLICIDADE):
            raise DuplicateRecordError(detail=mensagem) from e
        logger.error(f"Violação de integridade em {entity_type}: {mensagem}")
        raise RepositoryError(
            f"Violação de integridade em {entity_type}", detail=mensagem
        ) from e
    except DatabaseError as e:
        mensagem = str(e)
        if any(m in mensagem for m in MARCADORES_SCHEMA):
            raise SchemaMismatchError(
                mensagem, columns=colunas_do_erro(mensagem), detail=mensagem
            ) from e
        logger.error(f"Erro de banco em {entity_type}: {mensagem}")
        raise RepositoryError("Falha ao acessar o banco de dados.", detail=mensagem) from e
    except DjangoValidationError as e:
        raise ValidationError("; ".join(e.messages)) from e


class BaseRepository(Generic[T, M]):
    """
    Classe base para repositórios Django.

    Subclasses definem `model_class`, `entity_class` (com
    `from_record`) e, se preciso, `ordering`.

    Type Parameters:
        T: Tipo da entidade de domínio
        M: Tipo do Model Django

    Example:
        class DjangoSetorRepository(BaseRepository[SetorEntity, SetorModel]):
            model_class = SetorModel
            entity_class = SetorEntity
            entity_type = "Setor"
    """

    # Classe do model Django (definir na subclasse)
    model_class: Type[M]
    entity_class: Any
    entity_type: str = "Registro"

    # Ordenação padrão do list_all
    ordering: Tuple[str, ...] = ("-created_at",)

    def to_entity(self, model: M) -> T:
        return self.entity_class.from_record(model_to_record(model))

    def _get_base_queryset(self) -> QuerySet:
        return self.model_class.objects.all()

    def _campos_do_model(self, campos: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mapeia campos para atributos do Model.

        Raises:
            SchemaMismatchError: Se algum campo não existir na tabela
        """
        atributos = {f.attname: f for f in self.model_class._meta.concrete_fields}
        atributos.update({f.name: f for f in self.model_class._meta.concrete_fields})

        inexistentes = sorted(c for c in campos if c not in atributos)
        if inexistentes:
            raise SchemaMismatchError(
                f"Colunas inexistentes em {self.model_class._meta.db_table}: "
                f"{', '.join(inexistentes)}",
                columns=inexistentes,
            )
        return {atributos[c].attname: v for c, v in campos.items()}

    def _nao_encontrado(self, entity_id: str) -> EntityNotFoundError:
        return EntityNotFoundError(
            f"{self.entity_type} {entity_id} não encontrado",
            entity_type=self.entity_type,
            entity_id=entity_id,
        )

    def list_all(self) -> List[T]:
        with traduzir_erros(self.entity_type):
            registros = list(self._get_base_queryset().order_by(*self.ordering))
        return [self.to_entity(m) for m in registros]

    def get_by_id(self, entity_id: str) -> Optional[T]:
        with traduzir_erros(self.entity_type):
            model = self._get_base_queryset().filter(pk=entity_id).first()
        return self.to_entity(model) if model else None

    def create(self, campos: Dict[str, Any]) -> T:
        """
        Insere registro em savepoint próprio, para que uma falha não
        invalide a transação externa do Unit of Work.
        """
        valores = self._campos_do_model(campos)
        with traduzir_erros(self.entity_type), transaction.atomic():
            model = self.model_class(**valores)
            model.save(force_insert=True)
            model.refresh_from_db()

        logger.debug(f"{self.model_class.__name__} created: {model.pk}")
        return self.to_entity(model)

    def update(self, entity_id: str, campos: Dict[str, Any]) -> T:
        valores = self._campos_do_model({k: v for k, v in campos.items() if k != "id"})
        with traduzir_erros(self.entity_type), transaction.atomic():
            queryset = self.model_class.objects.filter(pk=entity_id)
            if valores:
                atualizados = queryset.update(**valores)
            else:
                atualizados = queryset.count()
            if not atualizados:
                raise self._nao_encontrado(entity_id)
            model = self._get_base_queryset().get(pk=entity_id)

        logger.debug(f"{self.model_class.__name__} updated: {entity_id}")
        return self.to_entity(model)

    def delete(self, entity_id: str) -> None:
        with traduzir_erros(self.entity_type):
            removidos, _ = self.model_class.objects.filter(pk=entity_id).delete()
        if not removidos:
            raise self._nao_encontrado(entity_id)

    def count(self) -> int:
        with traduzir_erros(self.entity_type):
            return self.model_class.objects.count()
