"""
Repositório genérico em memória.

Base para os repositórios InMemory de cada domínio. Guarda registros
como dicionários (mesmo formato trafegado pelos backends reais) e
reproduz os sinais de erro do contrato Repository:
- DuplicateRecordError para chaves naturais repetidas
- SchemaMismatchError quando `colunas` restringe o schema
- EntityNotFoundError em update/delete de ID inexistente

Não usar em produção!
"""

from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar
import uuid

from .datas import agora, para_iso
from .exceptions import DuplicateRecordError, EntityNotFoundError, SchemaMismatchError

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """
    Implementação em memória do contrato Repository.

    Subclasses definem `entity_class` (com `from_record`) e,
    opcionalmente, `unique_fields` e `order_field`.

    Example:
        repo = InMemorySetorRepository(colunas={"nome", "responsavel"})
        repo.create({"nome": "TI", "ramal": "201"})  # SchemaMismatchError
    """

    entity_class: Any = None
    entity_type: str = "Registro"
    unique_fields: Tuple[str, ...] = ()
    order_field: str = "created_at"

    def __init__(
        self,
        registros: Optional[Iterable[Dict[str, Any]]] = None,
        colunas: Optional[Iterable[str]] = None,
    ):
        self._registros: Dict[str, Dict[str, Any]] = {}
        self._colunas = set(colunas) if colunas is not None else None
        self.escritas: List[Tuple[str, Dict[str, Any]]] = []
        for registro in registros or []:
            self._inserir(dict(registro))

    def to_entity(self, registro: Dict[str, Any]) -> T:
        return self.entity_class.from_record(dict(registro))

    def list_all(self) -> List[T]:
        registros = sorted(
            self._registros.values(),
            key=lambda r: str(r.get(self.order_field) or ""),
            reverse=True,
        )
        return [self.to_entity(r) for r in registros]

    def get_by_id(self, entity_id: str) -> Optional[T]:
        registro = self._registros.get(entity_id)
        return self.to_entity(registro) if registro else None

    def create(self, campos: Dict[str, Any]) -> T:
        self.escritas.append(("create", dict(campos)))
        self._verificar_colunas(campos)
        self._verificar_unicidade(campos)
        registro = self._inserir(dict(campos))
        return self.to_entity(registro)

    def update(self, entity_id: str, campos: Dict[str, Any]) -> T:
        self.escritas.append(("update", dict(campos)))
        registro = self._obter_registro(entity_id)
        self._verificar_colunas(campos)
        self._verificar_unicidade(campos, ignorar_id=entity_id)
        registro.update({k: para_iso(v) for k, v in campos.items() if k != "id"})
        return self.to_entity(registro)

    def delete(self, entity_id: str) -> None:
        self.escritas.append(("delete", {"id": entity_id}))
        self._obter_registro(entity_id)
        del self._registros[entity_id]

    def count(self) -> int:
        return len(self._registros)

    def clear(self) -> None:
        """Limpa todos os dados (útil para testes)."""
        self._registros.clear()
        self.escritas.clear()

    def _inserir(self, registro: Dict[str, Any]) -> Dict[str, Any]:
        registro = {k: para_iso(v) for k, v in registro.items()}
        registro.setdefault("id", str(uuid.uuid4()))
        registro.setdefault("created_at", agora().isoformat())
        self._registros[registro["id"]] = registro
        return registro

    def _obter_registro(self, entity_id: str) -> Dict[str, Any]:
        registro = self._registros.get(entity_id)
        if registro is None:
            raise EntityNotFoundError(
                f"{self.entity_type} {entity_id} não encontrado",
                entity_type=self.entity_type,
                entity_id=entity_id,
            )
        return registro

    def _verificar_colunas(self, campos: Dict[str, Any]) -> None:
        if self._colunas is None:
            return
        inexistentes = sorted(set(campos) - self._colunas - {"id"})
        if inexistentes:
            raise SchemaMismatchError(
                f"Colunas inexistentes: {', '.join(inexistentes)}",
                columns=inexistentes,
            )

    def _verificar_unicidade(
        self, campos: Dict[str, Any], ignorar_id: Optional[str] = None
    ) -> None:
        for campo in self.unique_fields:
            valor = campos.get(campo)
            if valor is None:
                continue
            for registro in self._registros.values():
                if registro["id"] != ignorar_id and registro.get(campo) == valor:
                    raise DuplicateRecordError(
                        detail=f"duplicate key value violates unique constraint ({campo})"
                    )
