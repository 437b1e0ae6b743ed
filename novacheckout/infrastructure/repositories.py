"""
Camada de Infraestrutura: Implementação de Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas da Core
em chamadas concretas ao framework (Django ORM) ou a estruturas em memória (testes).
"""
import logging
import threading
from collections import OrderedDict
from dataclasses import replace
from typing import List, Optional, Dict, Any

from django.db import transaction, DatabaseError
from django.db.models import Prefetch

from novacheckout.core.entities import (
    Produto, Pedido, Carrinho, BaixaEstoque, StatusPedido, StatusProduto
)
from novacheckout.core.ports import IProdutoRepository, IPedidoRepository, ICarrinhoStorage
from novacheckout.core.exceptions import (
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    ErroPersistenciaError,
    TransicaoStatusInvalidaError,
)
from novacheckout.core.validacao import validar_baixas

from .mappers import ProdutoMapper, PedidoMapper, ItemPedidoMapper, get_model

logger = logging.getLogger(__name__)

CAMPOS_EDITAVEIS_PRODUTO = ('titulo', 'preco', 'estoque', 'status', 'categoria', 'imagem', 'descricao')


def agrupar_baixas(baixas: List[BaixaEstoque]) -> "OrderedDict[int, int]":
    """Soma as quantidades por produto, preservando a ordem da primeira ocorrência."""
    agrupadas: "OrderedDict[int, int]" = OrderedDict()
    for baixa in baixas:
        agrupadas[baixa.produto_id] = agrupadas.get(baixa.produto_id, 0) + baixa.quantidade_vendida
    return agrupadas


def verificar_transicao(atual: StatusPedido, destino: StatusPedido) -> None:
    if not atual.pode_transitar_para(destino):
        raise TransicaoStatusInvalidaError(atual, destino)


# ====================================================================
# 1. REPOSITÓRIOS (Implementação Django ORM)
# ====================================================================

class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    def listar(self) -> List[Produto]:
        qs = self.ProdutoModel.objects.order_by('-data_criacao', '-id')
        return [ProdutoMapper.to_entity(model) for model in qs]

    def buscar_por_id(self, produto_id: int) -> Optional[Produto]:
        try:
            return ProdutoMapper.to_entity(self.ProdutoModel.objects.get(pk=produto_id))
        except (self.ProdutoModel.DoesNotExist, ValueError):
            return None

    def criar(self, produto: Produto) -> Produto:
        model = ProdutoMapper.to_model(produto)
        try:
            model.save()
        except DatabaseError as e:
            logger.exception("Erro ao criar produto '%s'.", produto.titulo)
            raise ErroPersistenciaError() from e
        return ProdutoMapper.to_entity(model)

    @transaction.atomic
    def atualizar(self, produto_id: int, campos: Dict[str, Any]) -> Produto:
        try:
            model = self.ProdutoModel.objects.select_for_update().get(pk=produto_id)
        except self.ProdutoModel.DoesNotExist:
            raise ProdutoNaoEncontradoError(produto_id)

        for campo in CAMPOS_EDITAVEIS_PRODUTO:
            if campo in campos:
                valor = campos[campo]
                if campo == 'status':
                    valor = StatusProduto(valor).value
                setattr(model, campo, valor)
        model.save()
        return ProdutoMapper.to_entity(model)

    def deletar(self, produto_id: int) -> None:
        apagados, _ = self.ProdutoModel.objects.filter(pk=produto_id).delete()
        if not apagados:
            raise ProdutoNaoEncontradoError(produto_id)

    def aplicar_baixas_estoque(self, baixas: List[BaixaEstoque]) -> None:
        validar_baixas(baixas)
        try:
            with transaction.atomic():
                self._aplicar_baixas_na_transacao(baixas)
        except DatabaseError as e:
            logger.exception("Erro de banco ao aplicar baixas de estoque; lote desfeito.")
            raise ErroPersistenciaError("Falha ao atualizar o estoque.") from e

    def _aplicar_baixas_na_transacao(self, baixas: List[BaixaEstoque]) -> None:
        """
        Precisa ser chamado dentro de transaction.atomic(). As linhas são travadas
        com select_for_update em ordem crescente de id, então duas baixas concorrentes
        sobre o mesmo produto são serializadas e nunca leem o mesmo estoque.
        """
        agrupadas = agrupar_baixas(baixas)
        if not agrupadas:
            return

        travados = {
            model.pk: model
            for model in self.ProdutoModel.objects.select_for_update()
            .filter(pk__in=list(agrupadas))
            .order_by('pk')
        }

        for produto_id in agrupadas:
            if produto_id not in travados:
                raise ProdutoNaoEncontradoError(produto_id)

        for produto_id in sorted(agrupadas):
            model = travados[produto_id]
            model.estoque = max(0, model.estoque - agrupadas[produto_id])
            model.save(update_fields=['estoque', 'data_atualizacao'])


class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    def __init__(self, produto_repo: Optional[ProdutoRepositoryDjango] = None):
        self.produto_repo = produto_repo or ProdutoRepositoryDjango()

    @property
    def PedidoModel(self):
        return get_model('vendas', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('vendas', 'ItemPedido')

    def _queryset(self):
        return self.PedidoModel.objects.prefetch_related(
            Prefetch('itens', queryset=self.ItemPedidoModel.objects.order_by('id'))
        )

    def criar(self, pedido: Pedido) -> Pedido:
        try:
            with transaction.atomic():
                model = PedidoMapper.to_model(pedido)
                model.save(force_insert=True)
                self.ItemPedidoModel.objects.bulk_create(
                    [ItemPedidoMapper.to_model(item, model) for item in pedido.itens]
                )
        except DatabaseError as e:
            logger.exception("Erro ao gravar o pedido %s.", pedido.id)
            raise ErroPersistenciaError("Falha ao gravar o pedido.") from e
        return self.buscar_por_id(pedido.id)

    def buscar_por_id(self, pedido_id: str) -> Pedido:
        try:
            return PedidoMapper.to_entity(self._queryset().get(pk=pedido_id))
        except self.PedidoModel.DoesNotExist:
            raise PedidoNaoEncontradoError(pedido_id)

    def listar(self, status: Optional[StatusPedido] = None) -> List[Pedido]:
        qs = self._queryset()
        if status:
            qs = qs.filter(status=StatusPedido(status).value)
        qs = qs.order_by('-data_criacao')
        return [PedidoMapper.to_entity(model) for model in qs]

    def _travar(self, pedido_id: str):
        try:
            return self.PedidoModel.objects.select_for_update().get(pk=pedido_id)
        except self.PedidoModel.DoesNotExist:
            raise PedidoNaoEncontradoError(pedido_id)

    def atualizar_status(
        self, pedido_id: str, status: StatusPedido, transacao_id: Optional[str] = None
    ) -> Pedido:
        destino = StatusPedido(status)
        try:
            with transaction.atomic():
                model = self._travar(pedido_id)
                verificar_transicao(StatusPedido(model.status), destino)
                model.status = destino.value
                if transacao_id:
                    model.transacao_id = transacao_id
                model.save(update_fields=['status', 'transacao_id', 'data_modificacao'])
        except DatabaseError as e:
            logger.exception("Erro ao atualizar o status do pedido %s.", pedido_id)
            raise ErroPersistenciaError("Falha ao atualizar o pedido.") from e
        return self.buscar_por_id(pedido_id)

    def aprovar_com_baixa_estoque(self, pedido_id: str, transacao_id: Optional[str] = None) -> Pedido:
        try:
            with transaction.atomic():
                model = self._travar(pedido_id)
                verificar_transicao(StatusPedido(model.status), StatusPedido.APROVADO)
                baixas = [
                    BaixaEstoque(item.produto_id, item.quantidade)
                    for item in self.ItemPedidoModel.objects.filter(pedido_id=pedido_id)
                ]
                self.produto_repo._aplicar_baixas_na_transacao(baixas)
                model.status = StatusPedido.APROVADO.value
                if transacao_id:
                    model.transacao_id = transacao_id
                model.save(update_fields=['status', 'transacao_id', 'data_modificacao'])
        except DatabaseError as e:
            logger.exception("Erro ao aprovar o pedido %s; transação desfeita.", pedido_id)
            raise ErroPersistenciaError("Falha ao aprovar o pedido.") from e
        return self.buscar_por_id(pedido_id)


# ====================================================================
# REPOSITÓRIOS (Implementações In-Memory para Teste)
# NOTA: Estes repositórios não usam o Django ORM e servem para
# testes unitários e simulações onde o DB não é necessário.
# ====================================================================

class ProdutoRepositoryMemoria(IProdutoRepository):
    """Implementação In-Memory. Um lock serializa as baixas de estoque."""

    def __init__(self, produtos: Optional[List[Produto]] = None):
        self._produtos: Dict[int, Produto] = {}
        self._proximo_id = 1
        self.lock = threading.RLock()
        for produto in produtos or []:
            self.criar(produto)

    def listar(self) -> List[Produto]:
        with self.lock:
            return [replace(p) for p in sorted(self._produtos.values(), key=lambda p: p.id, reverse=True)]

    def buscar_por_id(self, produto_id: int) -> Optional[Produto]:
        with self.lock:
            produto = self._produtos.get(produto_id)
            return replace(produto) if produto else None

    def criar(self, produto: Produto) -> Produto:
        with self.lock:
            produto_id = produto.id if produto.id is not None else self._proximo_id
            self._proximo_id = max(self._proximo_id, produto_id) + 1
            self._produtos[produto_id] = replace(produto, id=produto_id)
            return replace(self._produtos[produto_id])

    def atualizar(self, produto_id: int, campos: Dict[str, Any]) -> Produto:
        with self.lock:
            if produto_id not in self._produtos:
                raise ProdutoNaoEncontradoError(produto_id)
            alteracoes = {k: v for k, v in campos.items() if k in CAMPOS_EDITAVEIS_PRODUTO}
            if 'status' in alteracoes:
                alteracoes['status'] = StatusProduto(alteracoes['status'])
            self._produtos[produto_id] = replace(self._produtos[produto_id], **alteracoes)
            return replace(self._produtos[produto_id])

    def deletar(self, produto_id: int) -> None:
        with self.lock:
            if self._produtos.pop(produto_id, None) is None:
                raise ProdutoNaoEncontradoError(produto_id)

    def aplicar_baixas_estoque(self, baixas: List[BaixaEstoque]) -> None:
        validar_baixas(baixas)
        agrupadas = agrupar_baixas(baixas)
        with self.lock:
            # Verifica tudo antes de escrever: nenhum estoque muda se um id faltar.
            for produto_id in agrupadas:
                if produto_id not in self._produtos:
                    raise ProdutoNaoEncontradoError(produto_id)
            for produto_id, quantidade in agrupadas.items():
                produto = self._produtos[produto_id]
                produto.estoque = max(0, produto.estoque - quantidade)


class PedidoRepositoryMemoria(IPedidoRepository):
    """Implementação In-Memory para testes."""

    def __init__(self, produto_repo: ProdutoRepositoryMemoria):
        self.produto_repo = produto_repo
        self._pedidos: Dict[str, Pedido] = {}
        self.lock = threading.RLock()

    def _copiar(self, pedido: Pedido) -> Pedido:
        return replace(pedido, itens=list(pedido.itens))

    def criar(self, pedido: Pedido) -> Pedido:
        with self.lock:
            if pedido.id in self._pedidos:
                raise ErroPersistenciaError(f"Pedido {pedido.id} já existe.")
            self._pedidos[pedido.id] = self._copiar(pedido)
            return self._copiar(pedido)

    def buscar_por_id(self, pedido_id: str) -> Pedido:
        with self.lock:
            if pedido_id not in self._pedidos:
                raise PedidoNaoEncontradoError(pedido_id)
            return self._copiar(self._pedidos[pedido_id])

    def listar(self, status: Optional[StatusPedido] = None) -> List[Pedido]:
        with self.lock:
            pedidos = list(self._pedidos.values())
        if status:
            pedidos = [p for p in pedidos if p.status == StatusPedido(status)]
        pedidos.sort(key=lambda p: p.data_criacao, reverse=True)
        return [self._copiar(p) for p in pedidos]

    def atualizar_status(
        self, pedido_id: str, status: StatusPedido, transacao_id: Optional[str] = None
    ) -> Pedido:
        destino = StatusPedido(status)
        with self.lock:
            pedido = self.buscar_por_id(pedido_id)
            verificar_transicao(pedido.status, destino)
            pedido.status = destino
            if transacao_id:
                pedido.transacao_id = transacao_id
            self._pedidos[pedido_id] = pedido
            return self._copiar(pedido)

    def aprovar_com_baixa_estoque(self, pedido_id: str, transacao_id: Optional[str] = None) -> Pedido:
        with self.lock:
            pedido = self.buscar_por_id(pedido_id)
            verificar_transicao(pedido.status, StatusPedido.APROVADO)
            # Se a baixa falhar o pedido continua pending.
            self.produto_repo.aplicar_baixas_estoque(pedido.baixas_de_estoque())
            pedido.status = StatusPedido.APROVADO
            if transacao_id:
                pedido.transacao_id = transacao_id
            self._pedidos[pedido_id] = pedido
            return self._copiar(pedido)


class CarrinhoStorageMemoria(ICarrinhoStorage):
    """Carrinho guardado em memória; usado nos testes dos casos de uso."""

    def __init__(self, carrinho: Optional[Carrinho] = None):
        self._carrinho = carrinho or Carrinho()

    def carregar(self) -> Carrinho:
        return Carrinho(itens=[replace(item) for item in self._carrinho.itens])

    def salvar(self, carrinho: Carrinho) -> None:
        self._carrinho = Carrinho(itens=[replace(item) for item in carrinho.itens])
