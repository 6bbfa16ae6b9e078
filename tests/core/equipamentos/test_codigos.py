"""
Testes dos códigos de patrimônio derivados.

Coverage:
- classificar(): regra JV antes do tipo
- parse_codigo() / formatar_codigo()
- atribuir_codigos(): numeração por grupo, duplicados, determinismo
- ordenar_por_codigo()
- sugerir_codigo()
- verificar_patrimonio_disponivel()
"""

import pytest

from src.core.equipamentos.codigos import (
    CodigoPatrimonio,
    MENSAGEM_PATRIMONIO_DUPLICADO,
    atribuir_codigos,
    classificar,
    formatar_codigo,
    parse_codigo,
    ordenar_por_codigo,
    sugerir_codigo,
    verificar_patrimonio_disponivel,
)
from src.core.equipamentos.entities import EquipamentoEntity
from src.core.shared.exceptions import ValidationError


def equipamento(id, nome, tipo="Desktop", patrimonio=""):
    return EquipamentoEntity(id=id, nome=nome, tipo=tipo, patrimonio=patrimonio)


@pytest.fixture
def inventario():
    return [
        equipamento("a", "Desktop A", patrimonio="PC001"),
        equipamento("b", "Desktop B", patrimonio="PC002"),
        equipamento("c", "Laptop C", tipo="Notebook", patrimonio="123456"),
    ]


class TestClassificar:
    @pytest.mark.parametrize(
        "nome,tipo,prefixo",
        [
            ("Estação 1", "Desktop", "PC"),
            ("Laptop", "Notebook", "PC"),
            ("Galaxy Tab", "Tablet", "TAB"),
            ("Moto G", "Smartphone", "CEL"),
            ("HP LaserJet", "Impressora", "IMP"),
            ("Dell 24", "Monitor", "MON"),
            ("Teclado", "Periférico", "-"),
            ("Nobreak", "Outro", "-"),
        ],
    )
    def test_prefixo_por_tipo(self, nome, tipo, prefixo):
        assert classificar(nome, tipo) == prefixo

    def test_jovem_aprendiz_vence_o_tipo(self):
        assert classificar("Jovem Aprendiz 04", "Notebook") == "JV"
        assert classificar("  jovem   aprendiz 7 ", "Desktop") == "JV"

    def test_jovem_aprendiz_exige_numero_de_ate_dois_digitos(self):
        assert classificar("Jovem Aprendiz", "Desktop") == "PC"
        assert classificar("Jovem Aprendiz 123", "Desktop") == "PC"


class TestParseFormatar:
    def test_parse(self):
        assert parse_codigo("pc-007") == CodigoPatrimonio("PC", 7)
        assert parse_codigo("TAB012") == CodigoPatrimonio("TAB", 12)
        assert parse_codigo(" JV-004 ") == CodigoPatrimonio("JV", 4)

    @pytest.mark.parametrize("valor", ["12345", "PC1", "XYZ-001", "", None])
    def test_parse_invalido(self, valor):
        assert parse_codigo(valor) is None

    def test_formatar(self):
        assert formatar_codigo("PC", 3) == "PC003"
        assert formatar_codigo("TAB", 12) == "TAB-012"
        assert str(CodigoPatrimonio("JV", 4)) == "JV-004"


class TestAtribuirCodigos:
    def test_sem_codigo_recebe_proximo_do_grupo(self, inventario):
        codigos = atribuir_codigos(inventario)

        assert codigos == {"a": "PC001", "b": "PC002", "c": "PC003"}

    def test_idempotente(self, inventario):
        assert atribuir_codigos(inventario) == atribuir_codigos(list(reversed(inventario)))

    def test_patrimonio_repetido_no_grupo_e_renumerado(self):
        itens = [
            equipamento("1", "Beta", patrimonio="PC001"),
            equipamento("2", "Alpha", patrimonio="pc-001"),
        ]

        codigos = atribuir_codigos(itens)

        assert codigos == {"2": "PC001", "1": "PC002"}

    def test_varios_sem_codigo_em_ordem_de_nome(self):
        itens = [
            equipamento("1", "Zeta", tipo="Tablet"),
            equipamento("2", "alfa", tipo="Tablet"),
            equipamento("3", "Meio", tipo="Tablet", patrimonio="TAB-010"),
        ]

        codigos = atribuir_codigos(itens)

        assert codigos == {"3": "TAB-010", "2": "TAB-011", "1": "TAB-012"}

    def test_sem_prefixo_nao_recebe_codigo(self):
        itens = [equipamento("1", "Teclado", tipo="Periférico", patrimonio="PER-1")]

        assert atribuir_codigos(itens) == {}

    def test_patrimonio_gravado_nao_e_alterado(self, inventario):
        atribuir_codigos(inventario)

        assert inventario[2].patrimonio == "123456"


class TestOrdenarPorCodigo:
    def test_grupo_numero_e_nome(self):
        itens = [
            equipamento("t", "Tablet", tipo="Tablet", patrimonio="TAB-001"),
            equipamento("p2", "PC dois", patrimonio="PC002"),
            equipamento("x", "Teclado", tipo="Periférico"),
            equipamento("j", "Jovem Aprendiz 01", tipo="Notebook"),
            equipamento("p1", "PC um", patrimonio="PC001"),
        ]

        ordenados = ordenar_por_codigo(itens)

        assert [e.id for e in ordenados] == ["j", "p1", "p2", "t", "x"]


class TestSugerirCodigo:
    def test_proximo_do_grupo(self):
        itens = [
            equipamento("a", "Desktop A", patrimonio="PC001"),
            equipamento("b", "Desktop B", patrimonio="PC002"),
        ]

        assert sugerir_codigo(itens, "Desktop", "Laptop C") == "PC003"

    def test_considera_codigos_atribuidos(self, inventario):
        assert sugerir_codigo(inventario, "Notebook") == "PC004"

    def test_considera_patrimonio_de_outro_grupo_com_mesmo_prefixo(self):
        itens = [equipamento("m", "Monitor antigo", tipo="Outro", patrimonio="PC-009")]

        assert sugerir_codigo(itens, "Desktop") == "PC010"

    def test_jovem_aprendiz(self):
        assert sugerir_codigo([], "Notebook", "Jovem Aprendiz 02") == "JV-001"

    def test_tipo_sem_numeracao(self):
        assert sugerir_codigo([], "Periférico") is None


class TestVerificarPatrimonio:
    def test_igualdade_sem_diferenciar_maiusculas(self, inventario):
        with pytest.raises(ValidationError) as exc_info:
            verificar_patrimonio_disponivel("pc001", inventario)

        assert exc_info.value.message == MENSAGEM_PATRIMONIO_DUPLICADO
        assert exc_info.value.field == "patrimonio"

    def test_colisao_do_codigo_interpretado(self, inventario):
        with pytest.raises(ValidationError):
            verificar_patrimonio_disponivel("PC-002", inventario)

    def test_ignora_o_proprio_registro(self, inventario):
        verificar_patrimonio_disponivel("PC001", inventario, ignorar_id="a")

    def test_livre(self, inventario):
        verificar_patrimonio_disponivel("PC003", inventario)
