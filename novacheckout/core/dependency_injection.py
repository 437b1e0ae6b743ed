# novacheckout/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências de Repositórios/Gateways
concretos da camada de Infraestrutura.
"""
from novacheckout.infrastructure.instances import produto_repo, pedido_repo, obter_processador_pagamento
from .ports import ICarrinhoStorage
from .use_cases import (
    GerenciarCatalogoUseCase,
    GerenciarCarrinhoUseCase,
    FinalizarCheckoutUseCase,
    GerenciarPedidosAdminUseCase,
)


# ====================================================================
# Use Cases de Catálogo/Administração
# ====================================================================

def get_gerenciar_catalogo_use_case() -> GerenciarCatalogoUseCase:
    return GerenciarCatalogoUseCase(produto_repo)

def get_gerenciar_pedidos_admin_use_case() -> GerenciarPedidosAdminUseCase:
    return GerenciarPedidosAdminUseCase(pedido_repo)


# ====================================================================
# Use Cases de Vendas/Carrinho
# ====================================================================

def get_gerenciar_carrinho_use_case(storage: ICarrinhoStorage) -> GerenciarCarrinhoUseCase:
    return GerenciarCarrinhoUseCase(storage, produto_repo)

def get_finalizar_checkout_use_case(storage: ICarrinhoStorage) -> FinalizarCheckoutUseCase:
    return FinalizarCheckoutUseCase(pedido_repo, obter_processador_pagamento(), storage)
