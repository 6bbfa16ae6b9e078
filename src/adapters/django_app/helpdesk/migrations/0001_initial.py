"""
Migration inicial do Help Desk.

Cria as tabelas do schema legado:
- chamados
- equipamentos
- produtos / produto_saidas
- setores
- app_users
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        # =================================================================
        # Tabela: chamados
        # =================================================================
        migrations.CreateModel(
            name='ChamadoModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único do chamado'
                )),
                ('titulo', models.CharField(max_length=200, help_text='Título do chamado')),
                ('descricao', models.TextField(help_text='Descrição do problema')),
                ('prioridade', models.CharField(
                    max_length=10,
                    choices=[('baixa', 'Baixa'), ('media', 'Média'), ('alta', 'Alta')],
                    default='media',
                    db_index=True,
                )),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('Aberto', 'Aberto'),
                        ('Em Andamento', 'Em Andamento'),
                        ('Concluído', 'Concluído'),
                    ],
                    default='Aberto',
                    db_index=True,
                )),
                ('usuario', models.CharField(max_length=150, help_text='Usuário atendido')),
                ('solicitante', models.CharField(max_length=150, null=True, blank=True)),
                ('setor', models.CharField(max_length=100, null=True, blank=True)),
                ('tipo_servico', models.CharField(max_length=100, db_index=True)),
                ('is_vip', models.BooleanField(
                    default=False,
                    help_text='Solicitante VIP (ordem de exibição)'
                )),
                ('data', models.DateField(null=True, blank=True, help_text='Data de referência')),
                ('created_at', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True,
                )),
                ('started_at', models.DateTimeField(null=True, blank=True)),
                ('completed_at', models.DateTimeField(null=True, blank=True)),
                ('duration_minutes', models.IntegerField(null=True, blank=True)),
                ('duration_text', models.CharField(max_length=50, null=True, blank=True)),
                ('tempo_servico', models.CharField(max_length=50, null=True, blank=True)),
            ],
            options={
                'db_table': 'chamados',
                'ordering': ['-created_at'],
                'verbose_name': 'Chamado',
                'verbose_name_plural': 'Chamados',
            },
        ),

        # =================================================================
        # Tabela: equipamentos
        # =================================================================
        migrations.CreateModel(
            name='EquipamentoModel',
            fields=[
                ('id', models.CharField(
                    max_length=36, primary_key=True, serialize=False, editable=False
                )),
                ('nome', models.CharField(max_length=200)),
                ('tipo', models.CharField(max_length=50, db_index=True)),
                ('patrimonio', models.CharField(
                    max_length=100,
                    unique=True,
                    help_text='Etiqueta de patrimônio (ex: PC003, TAB-012)'
                )),
                ('marca', models.CharField(max_length=100, null=True, blank=True)),
                ('modelo', models.CharField(max_length=100, null=True, blank=True)),
                ('status', models.CharField(
                    max_length=20,
                    choices=[
                        ('Disponível', 'Disponível'),
                        ('Em Uso', 'Em Uso'),
                        ('Manutenção', 'Manutenção'),
                        ('Inativo', 'Inativo'),
                    ],
                    default='Disponível',
                    db_index=True,
                )),
                ('usuario', models.CharField(max_length=150, null=True, blank=True)),
                ('setor', models.CharField(max_length=100, null=True, blank=True)),
                ('ram', models.CharField(max_length=50, null=True, blank=True)),
                ('armazenamento', models.CharField(max_length=50, null=True, blank=True)),
                ('processador', models.CharField(max_length=100, null=True, blank=True)),
                ('polegadas', models.CharField(max_length=20, null=True, blank=True)),
                ('ghz', models.CharField(max_length=20, null=True, blank=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'equipamentos',
                'ordering': ['-created_at'],
                'verbose_name': 'Equipamento',
                'verbose_name_plural': 'Equipamentos',
            },
        ),

        # =================================================================
        # Tabelas: produtos / produto_saidas
        # =================================================================
        migrations.CreateModel(
            name='ProdutoModel',
            fields=[
                ('id', models.CharField(
                    max_length=36, primary_key=True, serialize=False, editable=False
                )),
                ('nome', models.CharField(max_length=200)),
                ('categoria', models.CharField(max_length=100, db_index=True)),
                ('descricao', models.TextField(null=True, blank=True)),
                ('estoque', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'produtos',
                'ordering': ['-created_at'],
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
            },
        ),
        migrations.CreateModel(
            name='ProdutoSaidaModel',
            fields=[
                ('id', models.CharField(
                    max_length=36, primary_key=True, serialize=False, editable=False
                )),
                ('quantidade', models.PositiveIntegerField()),
                ('destinatario', models.CharField(max_length=150, null=True, blank=True)),
                ('data', models.DateField(null=True, blank=True, db_index=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('produto', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='saidas',
                    db_column='produto_id',
                    to='helpdesk.produtomodel',
                )),
            ],
            options={
                'db_table': 'produto_saidas',
                'ordering': ['-data', '-created_at'],
                'verbose_name': 'Saída de Produto',
                'verbose_name_plural': 'Saídas de Produtos',
            },
        ),

        # =================================================================
        # Tabela: setores
        # =================================================================
        migrations.CreateModel(
            name='SetorModel',
            fields=[
                ('id', models.CharField(
                    max_length=36, primary_key=True, serialize=False, editable=False
                )),
                ('nome', models.CharField(max_length=100, help_text='Nome em maiúsculas')),
                ('responsavel', models.CharField(max_length=150, null=True, blank=True)),
                ('ramal', models.CharField(max_length=20, null=True, blank=True)),
                ('localizacao', models.CharField(max_length=150, null=True, blank=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'setores',
                'ordering': ['-created_at'],
                'verbose_name': 'Setor',
                'verbose_name_plural': 'Setores',
            },
        ),

        # =================================================================
        # Tabela: app_users
        # =================================================================
        migrations.CreateModel(
            name='UsuarioModel',
            fields=[
                ('id', models.CharField(
                    max_length=36, primary_key=True, serialize=False, editable=False
                )),
                ('name', models.CharField(max_length=200)),
                ('username', models.CharField(max_length=150, unique=True)),
                ('setor', models.CharField(max_length=100, null=True, blank=True)),
                ('cargo', models.CharField(max_length=100, null=True, blank=True)),
                ('tier', models.CharField(
                    max_length=10,
                    choices=[('padrao', 'Padrão'), ('vip', 'VIP'), ('admin', 'Administrador')],
                    default='padrao',
                )),
                ('password_hash', models.CharField(
                    max_length=255,
                    help_text='Hash (django.contrib.auth.hashers)'
                )),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'app_users',
                'ordering': ['-created_at'],
                'verbose_name': 'Usuário',
                'verbose_name_plural': 'Usuários',
            },
        ),
    ]
