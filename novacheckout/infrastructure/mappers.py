"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM (catalog.Produto, vendas.Pedido, vendas.ItemPedido)
2. Entidades de Domínio (novacheckout.core.entities)
"""
from typing import Any, Optional, Type
from django.db import models
from django.apps import apps

from novacheckout.core.entities import (
    Produto as ProdutoEntity,
    Pedido as PedidoEntity,
    ItemPedido as ItemPedidoEntity,
    Cliente,
    Endereco,
    StatusProduto,
    StatusPedido,
    MetodoPagamento,
)


def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


class BaseMapper:
    """Contrato comum: to_entity(model) e to_model(entity, model=None)."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        raise NotImplementedError


# ====================================================================
# MAPPERS DO CATÁLOGO
# ====================================================================

class ProdutoMapper(BaseMapper):
    """Mapeador para Produto."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('catalog', 'Produto')

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        if not model: return None
        return ProdutoEntity(
            id=model.id,
            titulo=model.titulo,
            preco=model.preco,
            estoque=model.estoque,
            status=StatusProduto(model.status),
            categoria=model.categoria,
            imagem=model.imagem,
            descricao=model.descricao,
            data_criacao=model.data_criacao,
            data_atualizacao=model.data_atualizacao,
        )

    @classmethod
    def to_model(cls, entity: ProdutoEntity, model: Optional[Any] = None) -> Any:
        if model is None:
            model = cls.model_class()()

        model.titulo = entity.titulo
        model.preco = entity.preco
        model.estoque = entity.estoque
        model.status = StatusProduto(entity.status).value
        model.categoria = entity.categoria
        model.imagem = entity.imagem or ''
        model.descricao = entity.descricao
        return model


# ====================================================================
# MAPPERS DE VENDAS
# ====================================================================

class ItemPedidoMapper(BaseMapper):
    """Mapeador para ItemPedido (snapshot)."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('vendas', 'ItemPedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemPedidoEntity]:
        if not model: return None
        return ItemPedidoEntity(
            produto_id=model.produto_id,
            titulo=model.titulo,
            preco_unitario=model.preco_unitario,
            quantidade=model.quantidade,
            categoria=model.categoria,
            imagem=model.imagem,
            estoque_disponivel=model.estoque_disponivel,
        )

    @classmethod
    def to_model(cls, entity: ItemPedidoEntity, pedido_model: Any) -> Any:
        return cls.model_class()(
            pedido=pedido_model,
            produto_id=entity.produto_id,
            titulo=entity.titulo,
            preco_unitario=entity.preco_unitario,
            quantidade=entity.quantidade,
            categoria=entity.categoria or '',
            imagem=entity.imagem or '',
            estoque_disponivel=entity.estoque_disponivel,
        )


class PedidoMapper(BaseMapper):
    """Mapeador para Pedido. Espera os itens pré-carregados em `itens`."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('vendas', 'Pedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        if not model: return None
        return PedidoEntity(
            id=model.id,
            cliente=Cliente(
                nome=model.cliente_nome,
                email=model.cliente_email,
                telefone=model.cliente_telefone,
                cpf=model.cliente_cpf,
            ),
            endereco=Endereco(
                rua=model.rua,
                numero=model.numero,
                complemento=model.complemento,
                bairro=model.bairro,
                cidade=model.cidade,
                estado=model.estado,
                cep=model.cep,
            ),
            itens=[ItemPedidoMapper.to_entity(item) for item in model.itens.all()],
            total=model.total,
            status=StatusPedido(model.status),
            metodo_pagamento=MetodoPagamento(model.metodo_pagamento),
            transacao_id=model.transacao_id,
            data_criacao=model.data_criacao,
        )

    @classmethod
    def to_model(cls, entity: PedidoEntity, model: Optional[Any] = None) -> Any:
        if model is None:
            model = cls.model_class()(id=entity.id)

        model.status = StatusPedido(entity.status).value
        model.data_criacao = entity.data_criacao
        model.total = entity.total
        model.metodo_pagamento = MetodoPagamento(entity.metodo_pagamento).value
        model.transacao_id = entity.transacao_id

        model.cliente_nome = entity.cliente.nome
        model.cliente_email = entity.cliente.email
        model.cliente_telefone = entity.cliente.telefone
        model.cliente_cpf = entity.cliente.cpf

        model.rua = entity.endereco.rua
        model.numero = entity.endereco.numero
        model.complemento = entity.endereco.complemento
        model.bairro = entity.endereco.bairro
        model.cidade = entity.endereco.cidade
        model.estado = entity.endereco.estado
        model.cep = entity.endereco.cep
        return model
