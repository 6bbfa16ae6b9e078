"""
Testes do DashboardService.
"""

from src.core.chamados.ports import InMemoryChamadoRepository
from src.core.equipamentos.ports import InMemoryEquipamentoRepository
from src.core.produtos.ports import InMemoryProdutoRepository
from src.core.relatorios.use_cases import DashboardService
from src.core.setores.ports import InMemorySetorRepository
from src.core.usuarios.ports import InMemoryUsuarioRepository


def _chamado(n, status="Aberto", prioridade="media"):
    return {
        "id": f"c-{n}",
        "titulo": f"Chamado {n}",
        "descricao": "-",
        "usuario": "MARIA",
        "setor": "TI",
        "status": status,
        "prioridade": prioridade,
        "created_at": f"2024-03-{n:02d}T09:00:00+00:00",
    }


def _service(chamados=(), equipamentos=(), produtos=(), usuarios=(), setores=()):
    return DashboardService(
        InMemoryChamadoRepository(registros=chamados),
        InMemoryEquipamentoRepository(registros=equipamentos),
        InMemoryProdutoRepository(registros=produtos),
        InMemoryUsuarioRepository(registros=usuarios),
        InMemorySetorRepository(registros=setores),
    )


class TestDashboardService:
    def test_vazio_tem_todas_as_chaves(self):
        dashboard = _service().execute()

        assert dashboard.total_chamados == 0
        assert dashboard.chamados_por_status == {"Aberto": 0, "Em Andamento": 0, "Concluído": 0}
        assert dashboard.chamados_por_prioridade == {"baixa": 0, "media": 0, "alta": 0}
        assert set(dashboard.equipamentos_por_status) == {
            "Disponível", "Em Uso", "Manutenção", "Inativo"
        }
        assert dashboard.chamados_recentes == []

    def test_totais_e_distribuicoes(self):
        dashboard = _service(
            chamados=[
                _chamado(1),
                _chamado(2, status="Em Andamento", prioridade="alta"),
                _chamado(3, status="Concluído"),
                _chamado(4, prioridade="baixa"),
            ],
            equipamentos=[
                {"id": "e-1", "nome": "PC", "tipo": "Desktop", "patrimonio": "PC001",
                 "status": "Em Uso"},
                {"id": "e-2", "nome": "Tab", "tipo": "Tablet", "patrimonio": "TAB-001"},
            ],
            produtos=[
                {"id": "p-1", "nome": "Mouse", "categoria": "Periféricos", "estoque": 7},
                {"id": "p-2", "nome": "Cabo", "categoria": "Cabos", "estoque": 3},
            ],
            usuarios=[{"id": "u-1", "name": "MARIA", "username": "maria"}],
            setores=[{"id": "s-1", "nome": "TI"}, {"id": "s-2", "nome": "RH"}],
        ).execute()

        assert dashboard.total_chamados == 4
        assert dashboard.chamados_abertos == 2
        assert dashboard.chamados_por_status == {"Aberto": 2, "Em Andamento": 1, "Concluído": 1}
        assert dashboard.chamados_por_prioridade == {"baixa": 1, "media": 2, "alta": 1}
        assert dashboard.total_equipamentos == 2
        assert dashboard.equipamentos_por_status["Em Uso"] == 1
        assert dashboard.equipamentos_por_status["Disponível"] == 1
        assert dashboard.total_produtos == 2
        assert dashboard.estoque_total == 10
        assert dashboard.total_usuarios == 1
        assert dashboard.total_setores == 2

    def test_cinco_mais_recentes(self):
        dashboard = _service(chamados=[_chamado(n) for n in range(1, 8)]).execute()

        assert [c["id"] for c in dashboard.chamados_recentes] == [
            "c-7", "c-6", "c-5", "c-4", "c-3"
        ]
        assert dashboard.to_dict()["chamados_recentes"][0]["titulo"] == "Chamado 7"
