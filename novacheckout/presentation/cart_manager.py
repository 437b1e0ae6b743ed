# novacheckout/presentation/cart_manager.py
# Persistência do Carrinho de Compras na sessão do Django.

from decimal import Decimal
from typing import Dict, Any, List

from django.http import HttpRequest

from novacheckout.core.entities import Carrinho, ItemCarrinho
from novacheckout.core.ports import ICarrinhoStorage


class SessaoCarrinhoStorage(ICarrinhoStorage):
    """
    Implementa a porta ICarrinhoStorage sobre a sessão do Django.
    Guarda o snapshot de cada item (título, preço, estoque máximo...) para que
    o carrinho reproduza exatamente o que o cliente viu ao adicionar o produto.
    """

    SESSION_KEY = 'carrinho_novacheckout'

    def __init__(self, request: HttpRequest):
        self.request = request

    def carregar(self) -> Carrinho:
        """Se não houver nada na sessão, retorna um Carrinho vazio."""
        raw_cart: List[Dict[str, Any]] = self.request.session.get(self.SESSION_KEY) or []
        itens = []
        for raw in raw_cart:
            itens.append(ItemCarrinho(
                produto_id=int(raw['produto_id']),
                titulo=raw['titulo'],
                preco_unitario=Decimal(raw['preco_unitario']),
                quantidade=int(raw['quantidade']),
                estoque_maximo=int(raw['estoque_maximo']),
                categoria=raw.get('categoria', ''),
                imagem=raw.get('imagem', ''),
            ))
        return Carrinho(itens=itens)

    def salvar(self, carrinho: Carrinho) -> None:
        if carrinho.esta_vazio:
            self.limpar()
            return

        # Decimal não é serializável em JSON: o preço vai como string.
        self.request.session[self.SESSION_KEY] = [
            {
                'produto_id': item.produto_id,
                'titulo': item.titulo,
                'preco_unitario': str(item.preco_unitario),
                'quantidade': item.quantidade,
                'estoque_maximo': item.estoque_maximo,
                'categoria': item.categoria,
                'imagem': item.imagem,
            }
            for item in carrinho.itens
        ]
        self.request.session.modified = True

    def limpar(self) -> None:
        if self.SESSION_KEY in self.request.session:
            del self.request.session[self.SESSION_KEY]
            self.request.session.modified = True
