"""
Use Cases do Domínio de Setores.
"""

from typing import List
import logging
import uuid

from src.core.shared.datas import agora
from src.core.shared.exceptions import EntityNotFoundError, ValidationError
from src.core.shared.interfaces import UnitOfWork

from .dtos import AtualizarSetorInputDTO, CriarSetorInputDTO, SetorOutputDTO
from .entities import SetorEntity
from .ports import SetorRepository

logger = logging.getLogger(__name__)


class CriarSetorService:
    """
    Use Case: Cadastrar setor.

    Example:
        CriarSetorService(repo, uow).execute(CriarSetorInputDTO(nome="financeiro"))
        # nome gravado como "FINANCEIRO"
    """

    def __init__(self, setor_repo: SetorRepository, uow: UnitOfWork):
        self.setor_repo = setor_repo
        self.uow = uow

    def execute(self, input_dto: CriarSetorInputDTO) -> SetorOutputDTO:
        campos = SetorEntity.normalizar_campos({
            "nome": input_dto.nome,
            "responsavel": input_dto.responsavel,
            "ramal": input_dto.ramal,
            "localizacao": input_dto.localizacao,
        })
        registro = {"id": str(uuid.uuid4()), "created_at": agora().isoformat(), **campos}

        with self.uow:
            criado = self.setor_repo.create(
                {k: v for k, v in registro.items() if v is not None}
            )

        logger.info(f"Setor criado: {criado.nome}")
        return SetorOutputDTO.from_entity(criado)


class AtualizarSetorService:
    def __init__(self, setor_repo: SetorRepository, uow: UnitOfWork):
        self.setor_repo = setor_repo
        self.uow = uow

    def execute(self, input_dto: AtualizarSetorInputDTO) -> SetorOutputDTO:
        campos = SetorEntity.normalizar_campos(input_dto.campos)
        if not campos:
            raise ValidationError("Nenhum campo informado para atualização")

        with self.uow:
            atualizado = self.setor_repo.update(input_dto.setor_id, campos)

        logger.info(f"Setor atualizado: {atualizado.nome}")
        return SetorOutputDTO.from_entity(atualizado)


class ListarSetoresService:
    def __init__(self, setor_repo: SetorRepository):
        self.setor_repo = setor_repo

    def execute(self) -> List[SetorOutputDTO]:
        return [SetorOutputDTO.from_entity(s) for s in self.setor_repo.list_all()]


class ObterSetorService:
    def __init__(self, setor_repo: SetorRepository):
        self.setor_repo = setor_repo

    def execute(self, setor_id: str) -> SetorOutputDTO:
        setor = self.setor_repo.get_by_id(setor_id)
        if not setor:
            raise EntityNotFoundError(
                f"Setor {setor_id} não encontrado",
                entity_type="Setor",
                entity_id=setor_id,
            )
        return SetorOutputDTO.from_entity(setor)


class ExcluirSetorService:
    def __init__(self, setor_repo: SetorRepository, uow: UnitOfWork):
        self.setor_repo = setor_repo
        self.uow = uow

    def execute(self, setor_id: str) -> None:
        with self.uow:
            self.setor_repo.delete(setor_id)
        logger.info(f"Setor excluído: {setor_id}")
