"""
Core Domain Layer - O Hexágono.

Este pacote contém a lógica de negócio pura do help desk, sem
dependências de frameworks:
- chamados: atendimento e tempo de serviço
- equipamentos: inventário e códigos de patrimônio
- produtos: estoque e saídas
- setores, usuarios: cadastros de apoio e sessão
- relatorios: indicadores agregados

Características:
- Zero dependências externas (Django, Celery, etc.)
- 100% testável sem banco de dados
- Agnóstico a infraestrutura (banco ou API REST)
"""
