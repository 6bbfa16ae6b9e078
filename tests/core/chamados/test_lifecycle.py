"""
Testes do ciclo de vida do chamado.

Coverage:
- formatar_duracao(): limites de minutos, horas e dias
- calcular_duracao_minutos(): piso, negativos e valores malformados
- aplicar_transicao(): timestamps derivados e duração gravada uma vez
"""

from datetime import datetime, timezone

import pytest

from src.core.chamados.lifecycle import (
    aplicar_transicao,
    calcular_duracao_minutos,
    formatar_duracao,
)

AGORA = datetime(2024, 3, 15, 11, 47, tzinfo=timezone.utc)


class TestFormatarDuracao:
    @pytest.mark.parametrize(
        "minutos,esperado",
        [
            (0, "0 min"),
            (59, "59 min"),
            (60, "1h 0min"),
            (102, "1h 42min"),
            (1439, "23h 59min"),
            (1440, "1 dias 0h 0min"),
            (1500, "1 dias 1h 0min"),
        ],
    )
    def test_limites(self, minutos, esperado):
        assert formatar_duracao(minutos) == esperado


class TestCalcularDuracao:
    def test_minutos_inteiros_com_piso(self):
        inicio = "2024-03-15T10:05:00+00:00"
        fim = "2024-03-15T11:47:59+00:00"

        assert calcular_duracao_minutos(inicio, fim) == 102

    def test_aceita_sufixo_z(self):
        assert calcular_duracao_minutos("2024-03-15T10:00:00Z", "2024-03-15T10:30:00Z") == 30

    def test_aceita_fracao_de_segundo_curta(self):
        inicio = "2024-03-15T10:00:00.5Z"
        fim = "2024-03-15T10:30:00.123+00:00"

        assert calcular_duracao_minutos(inicio, fim) == 29

    def test_fim_antes_do_inicio_vira_zero(self):
        assert calcular_duracao_minutos("2024-03-15T12:00:00Z", "2024-03-15T11:00:00Z") == 0

    def test_timestamp_malformado_retorna_none(self):
        assert calcular_duracao_minutos("ontem de manhã", "2024-03-15T11:00:00Z") is None
        assert calcular_duracao_minutos(None, "2024-03-15T11:00:00Z") is None


class TestAplicarTransicao:
    """Campos derivados de cada mudança de status."""

    def test_em_andamento_preenche_started_at(self):
        patch = aplicar_transicao({}, {"status": "Em Andamento"}, AGORA)

        assert patch["status"] == "Em Andamento"
        assert patch["started_at"] == AGORA.isoformat()

    def test_em_andamento_mantem_started_at_existente(self):
        snapshot = {"started_at": "2024-03-15T09:00:00+00:00"}

        patch = aplicar_transicao(snapshot, {"status": "in_progress"}, AGORA)

        assert patch["started_at"] == "2024-03-15T09:00:00+00:00"

    def test_override_de_started_at_vence(self):
        snapshot = {"started_at": "2024-03-15T09:00:00+00:00"}
        patch = {"status": "Em Andamento", "started_at": "2024-03-15T08:00:00+00:00"}

        assert aplicar_transicao(snapshot, patch, AGORA)["started_at"] == "2024-03-15T08:00:00+00:00"

    def test_concluido_calcula_duracao(self):
        snapshot = {"started_at": "2024-03-15T10:05:00+00:00"}

        patch = aplicar_transicao(snapshot, {"status": "Concluído"}, AGORA)

        assert patch["completed_at"] == AGORA.isoformat()
        assert patch["started_at"] == "2024-03-15T10:05:00+00:00"
        assert patch["duration_minutes"] == 102
        assert patch["duration_text"] == "1h 42min"

    def test_concluido_sem_inicio_usa_criacao(self):
        snapshot = {"created_at": "2024-03-15T11:00:00+00:00", "data": "2024-03-14"}

        patch = aplicar_transicao(snapshot, {"status": "done"}, AGORA)

        assert patch["started_at"] == "2024-03-15T11:00:00+00:00"
        assert patch["duration_minutes"] == 47

    def test_concluido_sem_nenhuma_referencia_usa_agora(self):
        patch = aplicar_transicao({}, {"status": "Concluído"}, AGORA)

        assert patch["started_at"] == AGORA.isoformat()
        assert patch["duration_minutes"] == 0
        assert patch["duration_text"] == "0 min"

    def test_segunda_conclusao_nao_recalcula(self):
        snapshot = {
            "started_at": "2024-03-15T10:05:00+00:00",
            "completed_at": "2024-03-15T11:47:00+00:00",
            "duration_minutes": 102,
            "duration_text": "1h 42min",
        }
        depois = datetime(2024, 3, 16, 9, 0, tzinfo=timezone.utc)

        patch = aplicar_transicao(snapshot, {"status": "Concluído"}, depois)

        assert patch["completed_at"] == "2024-03-15T11:47:00+00:00"
        assert "duration_minutes" not in patch
        assert "duration_text" not in patch

    def test_campo_legado_tempo_servico_bloqueia_calculo(self):
        snapshot = {"started_at": "2024-03-15T10:05:00+00:00", "tempo_servico": "2h"}

        patch = aplicar_transicao(snapshot, {"status": "Concluído"}, AGORA)

        assert "duration_minutes" not in patch

    def test_duracao_informada_no_patch_vence(self):
        snapshot = {"started_at": "2024-03-15T10:05:00+00:00"}
        patch = {"status": "Concluído", "duration_minutes": 30}

        resultado = aplicar_transicao(snapshot, patch, AGORA)

        assert resultado["duration_minutes"] == 30
        assert "duration_text" not in resultado

    def test_timestamp_malformado_nao_gera_erro(self):
        snapshot = {"started_at": "ontem de manhã"}

        patch = aplicar_transicao(snapshot, {"status": "Concluído"}, AGORA)

        assert patch["status"] == "Concluído"
        assert patch["started_at"] == "ontem de manhã"
        assert "duration_minutes" not in patch

    def test_aberto_altera_apenas_status(self):
        snapshot = {"started_at": "2024-03-15T10:05:00+00:00"}

        patch = aplicar_transicao(snapshot, {"status": "open"}, AGORA)

        assert patch == {"status": "Aberto"}

    def test_status_invalido(self):
        with pytest.raises(ValueError):
            aplicar_transicao({}, {"status": "Arquivado"}, AGORA)
