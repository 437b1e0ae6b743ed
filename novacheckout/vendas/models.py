from django.db import models
from decimal import Decimal


class Pedido(models.Model):
    """
    Modelo que representa um pedido/venda no sistema.
    Cliente, endereço e itens são snapshots gravados no checkout.
    """
    id = models.CharField(max_length=64, primary_key=True, editable=False)

    # Status e Data
    STATUS_CHOICES = [
        ('pending', 'Pendente'),
        ('approved', 'Aprovado'),
        ('failed', 'Falhou'),
    ]

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending', db_index=True)
    data_criacao = models.DateTimeField()
    data_modificacao = models.DateTimeField(auto_now=True)

    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    # Dados de Pagamento
    METODO_PAGAMENTO_CHOICES = [
        ('card', 'Cartão de Crédito'),
        ('pix', 'PIX'),
    ]
    metodo_pagamento = models.CharField(max_length=10, choices=METODO_PAGAMENTO_CHOICES)
    transacao_id = models.CharField(max_length=100, blank=True, null=True)

    # Cliente
    cliente_nome = models.CharField(max_length=255)
    cliente_email = models.EmailField()
    cliente_telefone = models.CharField(max_length=20)
    cliente_cpf = models.CharField(max_length=14)

    # Endereço de entrega
    rua = models.CharField(max_length=255)
    numero = models.CharField(max_length=20)
    complemento = models.CharField(max_length=100, blank=True, null=True)
    bairro = models.CharField(max_length=100)
    cidade = models.CharField(max_length=100)
    estado = models.CharField(max_length=2)
    cep = models.CharField(max_length=9)

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        db_table = 'vendas_pedido'
        ordering = ['-data_criacao']

    def __str__(self):
        return f"Pedido {self.id} - {self.cliente_email}"


class ItemPedido(models.Model):
    """
    Modelo que representa um item dentro de um pedido.
    Mantém um snapshot dos dados do produto no momento da compra.
    """
    pedido = models.ForeignKey(Pedido, related_name='itens', on_delete=models.CASCADE)
    # Sem constraint: o produto pode ser removido do catálogo sem apagar o histórico.
    produto = models.ForeignKey(
        'catalog.Produto',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='itens_venda',
    )

    # Snapshot dos dados do produto
    titulo = models.CharField(max_length=255)
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2)
    quantidade = models.PositiveIntegerField()
    categoria = models.CharField(max_length=100, blank=True)
    imagem = models.URLField(max_length=500, blank=True)
    estoque_disponivel = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'vendas_item_pedido'
        ordering = ['id']

    def __str__(self):
        return f"{self.quantidade}x {self.titulo} em Pedido {self.pedido_id}"
