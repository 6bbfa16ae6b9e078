"""
Django Models do Help Desk.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em src/core/*/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Nomes de tabelas e colunas seguem o schema legado, compartilhado
  com a API REST de fallback

Tabelas:
- chamados, equipamentos, produtos, produto_saidas, setores, app_users
"""

from django.db import models
from django.utils import timezone


class ChamadoStatusChoices(models.TextChoices):
    """Espelha ChamadoStatus do Core."""
    ABERTO = 'Aberto', 'Aberto'
    EM_ANDAMENTO = 'Em Andamento', 'Em Andamento'
    CONCLUIDO = 'Concluído', 'Concluído'


class ChamadoPrioridadeChoices(models.TextChoices):
    """Espelha ChamadoPrioridade do Core."""
    BAIXA = 'baixa', 'Baixa'
    MEDIA = 'media', 'Média'
    ALTA = 'alta', 'Alta'


class EquipamentoStatusChoices(models.TextChoices):
    DISPONIVEL = 'Disponível', 'Disponível'
    EM_USO = 'Em Uso', 'Em Uso'
    MANUTENCAO = 'Manutenção', 'Manutenção'
    INATIVO = 'Inativo', 'Inativo'


class UsuarioTierChoices(models.TextChoices):
    PADRAO = 'padrao', 'Padrão'
    VIP = 'vip', 'VIP'
    ADMIN = 'admin', 'Administrador'


class ChamadoModel(models.Model):
    """
    Chamado de atendimento.

    Fields:
        started_at/completed_at: Preenchidos nas transições de status
        duration_minutes/duration_text: Tempo de serviço, gravado uma vez
        tempo_servico: Coluna legada alternativa para o tempo formatado
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único do chamado"
    )
    titulo = models.CharField(max_length=200, help_text="Título do chamado")
    descricao = models.TextField(help_text="Descrição do problema")
    prioridade = models.CharField(
        max_length=10,
        choices=ChamadoPrioridadeChoices.choices,
        default=ChamadoPrioridadeChoices.MEDIA,
        db_index=True,
    )
    status = models.CharField(
        max_length=20,
        choices=ChamadoStatusChoices.choices,
        default=ChamadoStatusChoices.ABERTO,
        db_index=True,
    )
    usuario = models.CharField(max_length=150, help_text="Usuário atendido")
    solicitante = models.CharField(max_length=150, null=True, blank=True)
    setor = models.CharField(max_length=100, null=True, blank=True)
    tipo_servico = models.CharField(max_length=100, db_index=True)
    is_vip = models.BooleanField(default=False, help_text="Solicitante VIP (ordem de exibição)")
    data = models.DateField(null=True, blank=True, help_text="Data de referência")

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.IntegerField(null=True, blank=True)
    duration_text = models.CharField(max_length=50, null=True, blank=True)
    tempo_servico = models.CharField(max_length=50, null=True, blank=True)

    class Meta:
        db_table = 'chamados'
        ordering = ['-created_at']
        verbose_name = 'Chamado'
        verbose_name_plural = 'Chamados'

    def __str__(self):
        return f"{self.titulo} ({self.status})"


class EquipamentoModel(models.Model):
    """Equipamento do inventário; `patrimonio` é único."""

    id = models.CharField(max_length=36, primary_key=True, editable=False)
    nome = models.CharField(max_length=200)
    tipo = models.CharField(max_length=50, db_index=True)
    patrimonio = models.CharField(
        max_length=100,
        unique=True,
        help_text="Etiqueta de patrimônio (ex: PC003, TAB-012)"
    )
    marca = models.CharField(max_length=100, null=True, blank=True)
    modelo = models.CharField(max_length=100, null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=EquipamentoStatusChoices.choices,
        default=EquipamentoStatusChoices.DISPONIVEL,
        db_index=True,
    )
    usuario = models.CharField(max_length=150, null=True, blank=True)
    setor = models.CharField(max_length=100, null=True, blank=True)
    ram = models.CharField(max_length=50, null=True, blank=True)
    armazenamento = models.CharField(max_length=50, null=True, blank=True)
    processador = models.CharField(max_length=100, null=True, blank=True)
    polegadas = models.CharField(max_length=20, null=True, blank=True)
    ghz = models.CharField(max_length=20, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'equipamentos'
        ordering = ['-created_at']
        verbose_name = 'Equipamento'
        verbose_name_plural = 'Equipamentos'

    def __str__(self):
        return f"{self.patrimonio} - {self.nome}"


class ProdutoModel(models.Model):
    id = models.CharField(max_length=36, primary_key=True, editable=False)
    nome = models.CharField(max_length=200)
    categoria = models.CharField(max_length=100, db_index=True)
    descricao = models.TextField(null=True, blank=True)
    estoque = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'produtos'
        ordering = ['-created_at']
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return f"{self.nome} ({self.estoque})"


class ProdutoSaidaModel(models.Model):
    """Saída de estoque; a criação decrementa ProdutoModel.estoque."""

    id = models.CharField(max_length=36, primary_key=True, editable=False)
    produto = models.ForeignKey(
        ProdutoModel,
        on_delete=models.CASCADE,
        related_name='saidas',
        db_column='produto_id',
    )
    quantidade = models.PositiveIntegerField()
    destinatario = models.CharField(max_length=150, null=True, blank=True)
    data = models.DateField(null=True, blank=True, db_index=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'produto_saidas'
        ordering = ['-data', '-created_at']
        verbose_name = 'Saída de Produto'
        verbose_name_plural = 'Saídas de Produtos'

    def __str__(self):
        return f"{self.quantidade}x {self.produto_id} -> {self.destinatario or '-'}"


class SetorModel(models.Model):
    id = models.CharField(max_length=36, primary_key=True, editable=False)
    nome = models.CharField(max_length=100, help_text="Nome em maiúsculas")
    responsavel = models.CharField(max_length=150, null=True, blank=True)
    ramal = models.CharField(max_length=20, null=True, blank=True)
    localizacao = models.CharField(max_length=150, null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'setores'
        ordering = ['-created_at']
        verbose_name = 'Setor'
        verbose_name_plural = 'Setores'

    def __str__(self):
        return self.nome


class UsuarioModel(models.Model):
    """
    Usuário do diretório do help desk.

    Não é o User do django.contrib.auth: a tabela é compartilhada com
    a API REST legada.
    """

    id = models.CharField(max_length=36, primary_key=True, editable=False)
    name = models.CharField(max_length=200)
    username = models.CharField(max_length=150, unique=True)
    setor = models.CharField(max_length=100, null=True, blank=True)
    cargo = models.CharField(max_length=100, null=True, blank=True)
    tier = models.CharField(
        max_length=10,
        choices=UsuarioTierChoices.choices,
        default=UsuarioTierChoices.PADRAO,
    )
    password_hash = models.CharField(max_length=255, help_text="Hash (django.contrib.auth.hashers)")
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'app_users'
        ordering = ['-created_at']
        verbose_name = 'Usuário'
        verbose_name_plural = 'Usuários'

    def __str__(self):
        return f"{self.username} ({self.tier})"
