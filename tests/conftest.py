"""
Configurações globais do Pytest para o Help Desk.

Este arquivo é carregado automaticamente pelo pytest e
fornece fixtures e configurações compartilhadas.

Django é configurado pelo pytest-django (DJANGO_SETTINGS_MODULE no
pyproject.toml).
"""

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def project_root():
    """Retorna o caminho raiz do projeto."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def reset_singletons():
    """
    Reset do container DI entre testes.

    Garante que cada teste inicia com providers sem override.
    """
    from src.config.container import reset_container

    reset_container()
    yield
    reset_container()


def pytest_configure(config):
    """Configuração do pytest."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Pula testes de integração fora do modo --run-integration."""
    skip_integration = pytest.mark.skip(reason="Integration tests require --run-integration")

    for item in items:
        if "integration" in item.keywords:
            if not config.getoption("--run-integration", default=False):
                item.add_marker(skip_integration)


def pytest_addoption(parser):
    """Adiciona opções de linha de comando."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="run integration tests",
    )
