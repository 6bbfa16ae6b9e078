"""
Repositórios Django (backend store) do Help Desk.

Implementam os Ports de src/core/*/ports.py usando Django ORM.
"""

from typing import Any, Dict, Optional
import logging

from django.db import transaction
from django.db.models import F, Value
from django.db.models.functions import Greatest

from src.adapters.django_app.shared.repository import BaseRepository, traduzir_erros
from src.core.chamados.entities import ChamadoEntity
from src.core.equipamentos.entities import EquipamentoEntity
from src.core.produtos.entities import ProdutoEntity, ProdutoSaidaEntity
from src.core.setores.entities import SetorEntity
from src.core.usuarios.entities import UsuarioEntity

from .models import (
    ChamadoModel,
    EquipamentoModel,
    ProdutoModel,
    ProdutoSaidaModel,
    SetorModel,
    UsuarioModel,
)

logger = logging.getLogger(__name__)


class DjangoChamadoRepository(BaseRepository[ChamadoEntity, ChamadoModel]):
    model_class = ChamadoModel
    entity_class = ChamadoEntity
    entity_type = "Chamado"


class DjangoEquipamentoRepository(BaseRepository[EquipamentoEntity, EquipamentoModel]):
    model_class = EquipamentoModel
    entity_class = EquipamentoEntity
    entity_type = "Equipamento"


class DjangoProdutoRepository(BaseRepository[ProdutoEntity, ProdutoModel]):
    model_class = ProdutoModel
    entity_class = ProdutoEntity
    entity_type = "Produto"


class DjangoProdutoSaidaRepository(BaseRepository[ProdutoSaidaEntity, ProdutoSaidaModel]):
    """
    Saídas de estoque.

    `create` grava a saída e decrementa o estoque do produto na mesma
    transação, com piso em zero calculado pelo banco.
    """

    model_class = ProdutoSaidaModel
    entity_class = ProdutoSaidaEntity
    entity_type = "Saída"
    ordering = ("-data", "-created_at")

    def create(self, campos: Dict[str, Any]) -> ProdutoSaidaEntity:
        with traduzir_erros(self.entity_type), transaction.atomic():
            saida = super().create(campos)
            ProdutoModel.objects.filter(pk=saida.produto_id).update(
                estoque=Greatest(F("estoque") - saida.quantidade, Value(0))
            )

        logger.debug(f"Estoque de {saida.produto_id} decrementado em {saida.quantidade}")
        return saida


class DjangoSetorRepository(BaseRepository[SetorEntity, SetorModel]):
    model_class = SetorModel
    entity_class = SetorEntity
    entity_type = "Setor"


class DjangoUsuarioRepository(BaseRepository[UsuarioEntity, UsuarioModel]):
    model_class = UsuarioModel
    entity_class = UsuarioEntity
    entity_type = "Usuário"

    def get_by_username(self, username: str) -> Optional[UsuarioEntity]:
        with traduzir_erros(self.entity_type):
            model = UsuarioModel.objects.filter(username=username).first()
        return self.to_entity(model) if model else None
