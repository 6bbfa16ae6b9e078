#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings (backend store sobre SQLite)
2. Executa migrations
3. Cria dados de exemplo (opcional): setores, equipamentos,
   produtos, usuários e chamados

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Raiz do projeto no path (pacote src)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    # Forçar SQLite e backend store para desenvolvimento rápido
    os.environ['DATABASE_URL'] = 'sqlite:///db.sqlite3'
    os.environ['HELPDESK_BACKEND'] = 'store'

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cria dados de exemplo através dos services."""
    from src.config.container import get_container
    from src.core.chamados.dtos import AtualizarChamadoInputDTO, CriarChamadoInputDTO
    from src.core.equipamentos.dtos import CriarEquipamentoInputDTO
    from src.core.produtos.dtos import CriarProdutoInputDTO, RegistrarSaidaInputDTO
    from src.core.setores.dtos import CriarSetorInputDTO
    from src.core.shared.exceptions import DuplicateRecordError, ValidationError
    from src.core.usuarios.dtos import CriarUsuarioInputDTO

    container = get_container()

    print("📝 Criando setores...")
    setores = [
        CriarSetorInputDTO(nome='TI', responsavel='Marcos', ramal='201', localizacao='Bloco A'),
        CriarSetorInputDTO(nome='Financeiro', responsavel='Ana', ramal='305'),
        CriarSetorInputDTO(nome='Diretoria', responsavel='Paulo', ramal='100'),
    ]
    for dto in setores:
        setor = container.criar_setor_service().execute(dto)
        print(f"   ✓ {setor.nome}")

    print("👤 Criando usuários...")
    usuarios = [
        CriarUsuarioInputDTO(
            name='Administrador', username='admin', password='admin123',
            setor='TI', cargo='Analista', tier='admin',
        ),
        CriarUsuarioInputDTO(
            name='Paulo Souza', username='paulo', password='paulo123',
            setor='Diretoria', cargo='Diretor', tier='vip',
        ),
        CriarUsuarioInputDTO(
            name='Joana Lima', username='joana', password='joana123',
            setor='Financeiro', cargo='Assistente',
        ),
    ]
    for dto in usuarios:
        try:
            usuario = container.criar_usuario_service().execute(dto)
            print(f"   ✓ {usuario.username} ({usuario.tier})")
        except DuplicateRecordError:
            print(f"   - {dto.username} já existe")

    print("🖥️  Criando equipamentos...")
    equipamentos = [
        CriarEquipamentoInputDTO(
            nome='Desktop Financeiro 01', tipo='Desktop', patrimonio='PC001',
            marca='Dell', status='Em Uso', setor='FINANCEIRO', usuario='JOANA LIMA',
            ram='16GB', armazenamento='512GB SSD', processador='i5',
        ),
        CriarEquipamentoInputDTO(
            nome='Notebook Diretoria', tipo='Notebook', patrimonio='NT001',
            marca='Lenovo', status='Em Uso', setor='DIRETORIA', usuario='PAULO SOUZA',
        ),
        CriarEquipamentoInputDTO(
            nome='Monitor Reserva', tipo='Monitor', patrimonio='MN001',
            status='Disponível', polegadas='24',
        ),
    ]
    for dto in equipamentos:
        try:
            equipamento = container.criar_equipamento_service().execute(dto)
            print(f"   ✓ {equipamento.patrimonio} - {equipamento.nome}")
        except ValidationError as e:
            print(f"   - {dto.patrimonio}: {e.message}")

    print("📦 Criando produtos...")
    produtos = [
        CriarProdutoInputDTO(nome='Mouse USB', categoria='Periféricos', estoque=20),
        CriarProdutoInputDTO(nome='Cabo HDMI', categoria='Cabos', estoque=8),
        CriarProdutoInputDTO(nome='Toner HP 85A', categoria='Suprimentos', estoque=3),
    ]
    criados = [container.criar_produto_service().execute(dto) for dto in produtos]
    for produto in criados:
        print(f"   ✓ {produto.nome} (estoque {produto.estoque})")

    container.registrar_saida_service().execute(
        RegistrarSaidaInputDTO(produto_id=criados[0].id, quantidade=2, destinatario='JOANA LIMA')
    )

    print("🎫 Criando chamados...")
    chamados = [
        CriarChamadoInputDTO(
            titulo='Computador não liga', descricao='Desktop do financeiro sem energia.',
            usuario='JOANA LIMA', setor='FINANCEIRO', tipo_servico='Hardware',
            prioridade='alta',
        ),
        CriarChamadoInputDTO(
            titulo='Instalar pacote Office', descricao='Notebook novo da diretoria.',
            usuario='PAULO SOUZA', setor='DIRETORIA', tipo_servico='Software',
            is_vip=True,
        ),
        CriarChamadoInputDTO(
            titulo='Impressora sem toner', descricao='Trocar toner da impressora do bloco A.',
            usuario='MARCOS', setor='TI', tipo_servico='Impressora', prioridade='baixa',
        ),
    ]
    abertos = [container.criar_chamado_service().execute(dto) for dto in chamados]
    for chamado in abertos:
        print(f"   ✓ {chamado.titulo} [{chamado.prioridade}]")

    # Um chamado em andamento e outro concluído
    atualizar = container.atualizar_chamado_service()
    atualizar.execute(AtualizarChamadoInputDTO(abertos[0].id, {'status': 'Em Andamento'}))
    atualizar.execute(AtualizarChamadoInputDTO(abertos[2].id, {'status': 'Em Andamento'}))
    atualizar.execute(AtualizarChamadoInputDTO(abertos[2].id, {'status': 'Concluído'}))

    print(f"✅ {len(abertos)} chamados criados!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection
    from django.db.utils import OperationalError

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except OperationalError as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Backend: {settings.HELPDESK_BACKEND}")
    print(f"  Event Publisher: {settings.EVENT_PUBLISHER_MODE}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. python manage.py runserver")
    print("   2. Acesse: http://localhost:8000/admin/")
    print("   3. Acesse: http://localhost:8000/api/chamados/")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Criar dados de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 Help Desk - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        print("   Para usar SQLite, defina: DATABASE_URL=sqlite:///db.sqlite3")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
