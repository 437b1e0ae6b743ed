from decimal import Decimal

from rest_framework import serializers

from novacheckout.core.entities import (
    Produto, Cliente, Endereco, ItemPedido, Pedido, BaixaEstoque,
    StatusProduto, StatusPedido, MetodoPagamento,
)


# ====================================================================
# SERIALIZERS DO CATÁLOGO
# ====================================================================

class ProdutoSerializer(serializers.Serializer):
    """Entrada e saída de Produto. Na saída recebe a entidade do Core."""
    id = serializers.IntegerField(read_only=True)
    titulo = serializers.CharField(max_length=255)
    preco = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))
    estoque = serializers.IntegerField(min_value=0)
    status = serializers.ChoiceField(choices=[s.value for s in StatusProduto], default=StatusProduto.ATIVO.value)
    categoria = serializers.CharField(max_length=100)
    imagem = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    descricao = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    disponivel_para_compra = serializers.BooleanField(read_only=True)
    data_criacao = serializers.DateTimeField(read_only=True)
    data_atualizacao = serializers.DateTimeField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['status'] = StatusProduto(instance.status).value
        return data

    def to_entity(self) -> Produto:
        dados = self.validated_data
        return Produto(
            titulo=dados['titulo'],
            preco=dados['preco'],
            estoque=dados['estoque'],
            status=StatusProduto(dados['status']),
            categoria=dados['categoria'],
            imagem=dados.get('imagem') or '',
            descricao=dados.get('descricao'),
        )


class BaixaEstoqueItemSerializer(serializers.Serializer):
    produto_id = serializers.IntegerField()
    # Negativos passam aqui e são rejeitados pelo repositório com a mensagem do domínio.
    quantidade_vendida = serializers.IntegerField()


class BaixaEstoqueSerializer(serializers.Serializer):
    baixas = BaixaEstoqueItemSerializer(many=True, allow_empty=False)

    def to_entities(self):
        return [BaixaEstoque(b['produto_id'], b['quantidade_vendida']) for b in self.validated_data['baixas']]


# ====================================================================
# SERIALIZERS DO CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    produto_id = serializers.IntegerField()
    titulo = serializers.CharField()
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantidade = serializers.IntegerField()
    estoque_maximo = serializers.IntegerField()
    categoria = serializers.CharField()
    imagem = serializers.CharField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class CarrinhoSerializer(serializers.Serializer):
    """Representação do carrinho da sessão. Frete é sempre zero."""
    itens = ItemCarrinhoSerializer(many=True)
    quantidade_total = serializers.IntegerField()
    frete = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)

    def get_frete(self, obj) -> str:
        return '0.00'


class CarrinhoItemInputSerializer(serializers.Serializer):
    produto_id = serializers.IntegerField()


class CarrinhoQuantidadeInputSerializer(serializers.Serializer):
    produto_id = serializers.IntegerField()
    quantidade = serializers.IntegerField()


# ====================================================================
# SERIALIZERS DE PEDIDO
# ====================================================================

class ClienteSerializer(serializers.Serializer):
    nome = serializers.CharField(max_length=255, allow_blank=True)
    email = serializers.CharField(max_length=254, allow_blank=True)
    telefone = serializers.CharField(max_length=20, allow_blank=True)
    cpf = serializers.CharField(max_length=14, allow_blank=True)

    def to_entity(self, dados=None) -> Cliente:
        dados = dados if dados is not None else self.validated_data
        return Cliente(**dados)


class EnderecoSerializer(serializers.Serializer):
    rua = serializers.CharField(max_length=255, allow_blank=True)
    numero = serializers.CharField(max_length=20, allow_blank=True)
    complemento = serializers.CharField(max_length=100, required=False, allow_blank=True, allow_null=True)
    bairro = serializers.CharField(max_length=100, allow_blank=True)
    cidade = serializers.CharField(max_length=100, allow_blank=True)
    estado = serializers.CharField(max_length=2, allow_blank=True)
    cep = serializers.CharField(max_length=9, allow_blank=True)

    def to_entity(self, dados=None) -> Endereco:
        dados = dados if dados is not None else self.validated_data
        return Endereco(
            rua=dados['rua'],
            numero=dados['numero'],
            complemento=dados.get('complemento') or None,
            bairro=dados['bairro'],
            cidade=dados['cidade'],
            estado=dados['estado'],
            cep=dados['cep'],
        )


class ItemPedidoSerializer(serializers.Serializer):
    produto_id = serializers.IntegerField()
    titulo = serializers.CharField(max_length=255)
    preco_unitario = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))
    quantidade = serializers.IntegerField(min_value=1)
    categoria = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    imagem = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')
    estoque_disponivel = serializers.IntegerField(min_value=0, required=False, default=0)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class PedidoSerializer(serializers.Serializer):
    """Saída de Pedido (entidade) e entrada do cadastro direto de pedidos."""
    id = serializers.CharField(read_only=True)
    cliente = ClienteSerializer()
    endereco = EnderecoSerializer()
    itens = ItemPedidoSerializer(many=True, allow_empty=False)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    status = serializers.CharField(read_only=True)
    metodo_pagamento = serializers.ChoiceField(choices=[m.value for m in MetodoPagamento])
    transacao_id = serializers.CharField(read_only=True, allow_null=True)
    data_criacao = serializers.DateTimeField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['status'] = StatusPedido(instance.status).value
        data['metodo_pagamento'] = MetodoPagamento(instance.metodo_pagamento).value
        return data

    def to_entity(self) -> Pedido:
        dados = self.validated_data
        return Pedido(
            cliente=ClienteSerializer().to_entity(dados['cliente']),
            endereco=EnderecoSerializer().to_entity(dados['endereco']),
            itens=[
                ItemPedido(
                    produto_id=item['produto_id'],
                    titulo=item['titulo'],
                    preco_unitario=item['preco_unitario'],
                    quantidade=item['quantidade'],
                    categoria=item.get('categoria', ''),
                    imagem=item.get('imagem', ''),
                    estoque_disponivel=item.get('estoque_disponivel', 0),
                )
                for item in dados['itens']
            ],
            metodo_pagamento=MetodoPagamento(dados['metodo_pagamento']),
        )


class StatusPedidoSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in StatusPedido])


# SERIALIZER PARA CHECKOUT
# ====================================================================
class CheckoutSerializer(serializers.Serializer):
    """
    Estrutura do formulário de checkout. As regras de conteúdo (dígitos de CPF, CEP,
    cartão...) ficam no Core, para que as mensagens por campo sejam as mesmas em qualquer entrada.
    """
    cliente = ClienteSerializer()
    endereco = EnderecoSerializer()
    metodo_pagamento = serializers.CharField(max_length=10)
    numero_cartao = serializers.CharField(max_length=25, required=False, allow_blank=True, allow_null=True)


class ResultadoCheckoutSerializer(serializers.Serializer):
    sucesso = serializers.BooleanField()
    mensagem = serializers.CharField()
    pedido_id = serializers.CharField(allow_null=True)
    transacao_id = serializers.CharField(allow_null=True)
