"""
Módulo de inicialização dos repositórios e gateways.
Deve ser importado somente depois que o Django estiver configurado.
"""
from django.conf import settings
from django.utils.module_loading import import_string

from .repositories import (
    ProdutoRepositoryDjango as ProdutoRepository,
    PedidoRepositoryDjango as PedidoRepository,
)

# Instâncias globais dos repositórios
produto_repo = ProdutoRepository()
pedido_repo = PedidoRepository(produto_repo)


def obter_processador_pagamento():
    """Instancia o processador configurado em PAGAMENTO_PROCESSADOR (lido a cada chamada)."""
    return import_string(settings.PAGAMENTO_PROCESSADOR)()
