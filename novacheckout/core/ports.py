# novacheckout/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositórios, Gateways,
armazenamento de sessão) DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, List, Optional, Dict, Any
from abc import abstractmethod

from novacheckout.core.entities import (
    Produto, Pedido, Carrinho, BaixaEstoque, ResultadoPagamento, StatusPedido
)


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a persistência e busca de Produtos."""

    @abstractmethod
    def listar(self) -> List[Produto]: ...

    @abstractmethod
    def buscar_por_id(self, produto_id: int) -> Optional[Produto]: ...

    @abstractmethod
    def criar(self, produto: Produto) -> Produto: ...

    @abstractmethod
    def atualizar(self, produto_id: int, campos: Dict[str, Any]) -> Produto: ...

    @abstractmethod
    def deletar(self, produto_id: int) -> None: ...

    @abstractmethod
    def aplicar_baixas_estoque(self, baixas: List[BaixaEstoque]) -> None:
        """Tudo ou nada: um id inexistente desfaz o lote inteiro."""
        ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def criar(self, pedido: Pedido) -> Pedido: ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: str) -> Pedido: ...

    @abstractmethod
    def listar(self, status: Optional[StatusPedido] = None) -> List[Pedido]: ...

    @abstractmethod
    def atualizar_status(
        self, pedido_id: str, status: StatusPedido, transacao_id: Optional[str] = None
    ) -> Pedido: ...

    @abstractmethod
    def aprovar_com_baixa_estoque(self, pedido_id: str, transacao_id: Optional[str] = None) -> Pedido:
        """Aprova o pedido e baixa o estoque na mesma transação."""
        ...


# ====================================================================
# 2. GATEWAYS E ARMAZENAMENTO
# ====================================================================

class IProcessadorPagamento(Protocol):
    """Capacidade de autorizar o pagamento de um pedido."""

    @abstractmethod
    def autorizar(self, pedido: Pedido) -> ResultadoPagamento: ...


class ICarrinhoStorage(Protocol):
    """Persistência do carrinho do cliente (sessão, memória...)."""

    @abstractmethod
    def carregar(self) -> Carrinho: ...

    @abstractmethod
    def salvar(self, carrinho: Carrinho) -> None: ...
