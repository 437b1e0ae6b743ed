# Configuração da interface administrativa do Django para o catálogo e os pedidos.

from django.contrib import admin, messages

from novacheckout.catalog.models import Produto
from novacheckout.vendas.models import Pedido, ItemPedido
from novacheckout.core.dependency_injection import get_gerenciar_pedidos_admin_use_case
from novacheckout.core.exceptions import BaseErroCore


# ====================================================================
# 1. ADMIN PARA PRODUTOS
# ====================================================================

@admin.register(Produto)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ('titulo', 'preco', 'estoque', 'categoria', 'status', 'data_criacao')
    list_filter = ('status', 'categoria')
    search_fields = ('titulo', 'descricao', 'id')
    ordering = ('-data_criacao',)
    fieldsets = (
        ('Informações Básicas', {
            'fields': ('titulo', 'descricao', 'preco', 'estoque', 'status', 'imagem')
        }),
        ('Classificação', {
            'fields': ('categoria',),
        }),
    )


# ====================================================================
# 2. ADMIN PARA PEDIDOS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Exibe os itens comprados dentro do detalhe do Pedido."""
    model = ItemPedido
    fields = ('produto_id', 'titulo', 'preco_unitario', 'quantidade', 'estoque_disponivel')
    readonly_fields = fields
    extra = 0
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('id', 'cliente_nome', 'cliente_email', 'data_criacao', 'total', 'status', 'metodo_pagamento')
    list_filter = ('status', 'metodo_pagamento', 'data_criacao')
    search_fields = ('id', 'cliente_email', 'cliente_nome', 'cliente_cpf')
    date_hierarchy = 'data_criacao'
    inlines = [ItemPedidoInline]
    actions = ['aprovar_pedidos', 'recusar_pedidos']

    # O status só muda pelas ações, que passam pela tabela de transições.
    readonly_fields = (
        'id', 'status', 'data_criacao', 'total', 'metodo_pagamento', 'transacao_id',
        'cliente_nome', 'cliente_email', 'cliente_telefone', 'cliente_cpf',
        'rua', 'numero', 'complemento', 'bairro', 'cidade', 'estado', 'cep',
    )

    def has_add_permission(self, request):
        """Pedidos nascem no checkout, não no Admin."""
        return False

    def _executar_em_lote(self, request, queryset, operacao, rotulo):
        ok = 0
        for pedido_id in queryset.values_list('pk', flat=True):
            try:
                operacao(pedido_id)
                ok += 1
            except BaseErroCore as e:
                self.message_user(request, f"Pedido {pedido_id}: {e}", level=messages.ERROR)
        if ok:
            self.message_user(request, f"{ok} pedido(s) {rotulo}.", level=messages.SUCCESS)

    @admin.action(description="Aprovar pedidos selecionados (baixa o estoque)")
    def aprovar_pedidos(self, request, queryset):
        self._executar_em_lote(request, queryset, get_gerenciar_pedidos_admin_use_case().aprovar, 'aprovado(s)')

    @admin.action(description="Recusar pedidos selecionados")
    def recusar_pedidos(self, request, queryset):
        self._executar_em_lote(request, queryset, get_gerenciar_pedidos_admin_use_case().recusar, 'recusado(s)')
