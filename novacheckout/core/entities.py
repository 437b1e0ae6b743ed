import secrets
import string
import time
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Dict, FrozenSet

CENTAVOS = Decimal('0.01')
ALFABETO_BASE36 = string.digits + string.ascii_lowercase


def quantizar(valor) -> Decimal:
    """Normaliza um valor monetário para duas casas decimais."""
    return Decimal(str(valor)).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def agora_em_ms() -> int:
    return int(time.time() * 1000)


# ====================================================================
# ENUMERAÇÕES
# Conjuntos fechados de valores aceitos pelo domínio.
# ====================================================================

class StatusProduto(str, Enum):
    ATIVO = 'Ativo'
    INATIVO = 'Inativo'


class MetodoPagamento(str, Enum):
    CARTAO = 'card'
    PIX = 'pix'


class StatusPedido(str, Enum):
    """Ciclo de vida do pedido: pending -> approved | failed."""
    PENDENTE = 'pending'
    APROVADO = 'approved'
    FALHOU = 'failed'

    def pode_transitar_para(self, destino: 'StatusPedido') -> bool:
        return destino in TRANSICOES_PERMITIDAS[self]


TRANSICOES_PERMITIDAS: Dict[StatusPedido, FrozenSet[StatusPedido]] = {
    StatusPedido.PENDENTE: frozenset({StatusPedido.APROVADO, StatusPedido.FALHOU}),
    StatusPedido.APROVADO: frozenset(),
    StatusPedido.FALHOU: frozenset(),
}


# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

@dataclass
class Produto:
    """Entidade do Produto (curso) vendido no catálogo."""
    titulo: str
    preco: Decimal
    estoque: int
    categoria: str
    imagem: str = ''
    status: StatusProduto = StatusProduto.ATIVO
    descricao: Optional[str] = None
    id: Optional[int] = None
    data_criacao: Optional[datetime] = None
    data_atualizacao: Optional[datetime] = None

    @property
    def disponivel_para_compra(self) -> bool:
        return self.status == StatusProduto.ATIVO and self.estoque > 0


@dataclass
class ItemCarrinho:
    """Snapshot do produto no momento em que foi colocado no carrinho."""
    produto_id: int
    titulo: str
    preco_unitario: Decimal
    quantidade: int
    estoque_maximo: int
    categoria: str = ''
    imagem: str = ''

    @property
    def subtotal(self) -> Decimal:
        return quantizar(self.preco_unitario * self.quantidade)

    @classmethod
    def a_partir_de_produto(cls, produto: Produto, quantidade: int = 1) -> 'ItemCarrinho':
        return cls(
            produto_id=produto.id,
            titulo=produto.titulo,
            preco_unitario=produto.preco,
            quantidade=quantidade,
            estoque_maximo=produto.estoque,
            categoria=produto.categoria,
            imagem=produto.imagem,
        )


@dataclass
class Carrinho:
    """Carrinho explícito: uma entrada por produto."""
    itens: List[ItemCarrinho] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        # Frete é sempre zero.
        return quantizar(sum((item.subtotal for item in self.itens), Decimal('0')))

    @property
    def quantidade_total(self) -> int:
        return sum(item.quantidade for item in self.itens)

    @property
    def esta_vazio(self) -> bool:
        return not self.itens

    def get_item(self, produto_id: int) -> Optional[ItemCarrinho]:
        return next((item for item in self.itens if item.produto_id == produto_id), None)

    def remover(self, produto_id: int) -> None:
        self.itens = [item for item in self.itens if item.produto_id != produto_id]


@dataclass(frozen=True)
class Cliente:
    nome: str
    email: str
    telefone: str
    cpf: str


@dataclass(frozen=True)
class Endereco:
    """Endereço de entrega embutido no pedido."""
    rua: str
    numero: str
    bairro: str
    cidade: str
    estado: str
    cep: str
    complemento: Optional[str] = None


@dataclass(frozen=True)
class ItemPedido:
    """Snapshot imutável de uma linha do pedido."""
    produto_id: int
    titulo: str
    preco_unitario: Decimal
    quantidade: int
    categoria: str = ''
    imagem: str = ''
    estoque_disponivel: int = 0

    @property
    def subtotal(self) -> Decimal:
        return quantizar(self.preco_unitario * self.quantidade)

    @classmethod
    def a_partir_do_carrinho(cls, item: ItemCarrinho) -> 'ItemPedido':
        return cls(
            produto_id=item.produto_id,
            titulo=item.titulo,
            preco_unitario=quantizar(item.preco_unitario),
            quantidade=item.quantidade,
            categoria=item.categoria,
            imagem=item.imagem,
            estoque_disponivel=item.estoque_maximo,
        )


@dataclass
class Pedido:
    """Entidade do Pedido. O snapshot de cliente, endereço e itens não muda após a criação."""
    cliente: Cliente
    endereco: Endereco
    itens: List[ItemPedido]
    metodo_pagamento: MetodoPagamento
    total: Decimal = Decimal('0.00')
    status: StatusPedido = StatusPedido.PENDENTE
    transacao_id: Optional[str] = None
    id: str = field(default_factory=lambda: Pedido.gerar_id())
    data_criacao: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def gerar_id() -> str:
        """Gera um id no formato order-<epoch ms>-<9 caracteres base36>."""
        sufixo = ''.join(secrets.choice(ALFABETO_BASE36) for _ in range(9))
        return f"order-{agora_em_ms()}-{sufixo}"

    @staticmethod
    def calcular_total(itens: List[ItemPedido]) -> Decimal:
        return quantizar(sum((item.subtotal for item in itens), Decimal('0')))

    def baixas_de_estoque(self) -> List['BaixaEstoque']:
        return [BaixaEstoque(item.produto_id, item.quantidade) for item in self.itens]


# ====================================================================
# OBJETOS DE RESULTADO
# ====================================================================

@dataclass(frozen=True)
class BaixaEstoque:
    produto_id: int
    quantidade_vendida: int


@dataclass(frozen=True)
class ResultadoPagamento:
    """Veredito do processador de pagamento. Recusa não é exceção."""
    sucesso: bool
    mensagem: str
    transacao_id: str


@dataclass(frozen=True)
class ResultadoCheckout:
    sucesso: bool
    mensagem: str
    pedido_id: Optional[str] = None
    transacao_id: Optional[str] = None
