from typing import Dict, Optional


class BaseErroCore(Exception):
    """Classe base para todas as exceções da Camada Core."""
    pass

class DadosInvalidosError(BaseErroCore):
    """Erro levantado quando dados inválidos são fornecidos. `erros` mapeia campo -> mensagem."""
    def __init__(self, message="Os dados fornecidos são inválidos.", erros: Optional[Dict[str, str]] = None):
        self.message = message
        self.erros = erros or {}
        super().__init__(self.message)

# ===============================================
# ERROS DE PERSISTÊNCIA E ENTIDADE
# ===============================================

class ItemNaoEncontradoError(BaseErroCore):
    """Erro levantado quando um item (genérico) não é encontrado."""
    def __init__(self, message="O item solicitado não foi encontrado."):
        self.message = message
        super().__init__(self.message)

class ProdutoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro levantado quando um produto específico não é encontrado."""
    def __init__(self, produto_id=None, message=None):
        self.produto_id = produto_id
        if message is None:
            message = f"Produto não encontrado: {produto_id}" if produto_id is not None else "Produto não encontrado"
        super().__init__(message)

class PedidoNaoEncontradoError(ItemNaoEncontradoError):
    """Erro específico para Pedidos não encontrados."""
    def __init__(self, pedido_id=None, message=None):
        self.pedido_id = pedido_id
        if message is None:
            message = f"Pedido não encontrado: {pedido_id}" if pedido_id is not None else "Pedido não encontrado"
        super().__init__(message)

class ErroPersistenciaError(BaseErroCore):
    """Falha transitória do banco de dados. A transação já foi desfeita quando este erro chega ao chamador."""
    def __init__(self, message="Falha ao acessar o banco de dados."):
        self.message = message
        super().__init__(self.message)

class TransicaoStatusInvalidaError(BaseErroCore):
    """Erro levantado ao tentar uma transição de status não permitida."""
    def __init__(self, status_atual, status_destino, message=None):
        self.status_atual = status_atual
        self.status_destino = status_destino
        if message is None:
            message = (f"Transição de status inválida: "
                       f"{getattr(status_atual, 'value', status_atual)} -> "
                       f"{getattr(status_destino, 'value', status_destino)}.")
        super().__init__(message)
        self.message = message

# ===============================================
# ERROS DE FLUXO DE COMPRA E PAGAMENTO
# ===============================================

class CarrinhoVazioError(BaseErroCore):
    """Erro levantado ao tentar fazer checkout com carrinho vazio."""
    def __init__(self, message="O carrinho de compras está vazio."):
        self.message = message
        super().__init__(self.message)

class ProdutoIndisponivelError(BaseErroCore):
    """Produto inativo ou sem estoque não pode entrar no carrinho."""
    def __init__(self, message="Produto indisponível para compra."):
        self.message = message
        super().__init__(self.message)
