"""
Domínio de Setores - Departamentos da organização.
"""

from .entities import SetorEntity
from .dtos import AtualizarSetorInputDTO, CriarSetorInputDTO, SetorOutputDTO
from .ports import InMemorySetorRepository, SetorRepository
from .use_cases import (
    AtualizarSetorService,
    CriarSetorService,
    ExcluirSetorService,
    ListarSetoresService,
    ObterSetorService,
)

__all__ = [
    "SetorEntity",
    "CriarSetorInputDTO",
    "AtualizarSetorInputDTO",
    "SetorOutputDTO",
    "SetorRepository",
    "InMemorySetorRepository",
    "CriarSetorService",
    "AtualizarSetorService",
    "ListarSetoresService",
    "ObterSetorService",
    "ExcluirSetorService",
]
