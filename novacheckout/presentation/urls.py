"""
Define as rotas de API REST da camada de apresentação:
catálogo, pedidos, carrinho, checkout e painel administrativo.
"""
from django.urls import path
from . import views, views_admin


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE CATÁLOGO
    # ====================================================================
    path('api/produtos/', views.ProdutoListAPIView.as_view(), name='api_produtos'),
    path('api/produtos/baixa-estoque/', views.BaixaEstoqueAPIView.as_view(), name='api_baixa_estoque'),
    path('api/produtos/<int:pk>/', views.ProdutoDetailAPIView.as_view(), name='api_produto_detalhe'),

    # ====================================================================
    # 2. ROTAS DE PEDIDOS
    # ====================================================================
    path('api/pedidos/', views.PedidoListAPIView.as_view(), name='api_pedidos'),
    path('api/pedidos/<str:pk>/', views.PedidoDetailAPIView.as_view(), name='api_pedido_detalhe'),
    path('api/pedidos/<str:pk>/status/', views.PedidoStatusAPIView.as_view(), name='api_pedido_status'),

    # ====================================================================
    # 3. ROTAS DE COMPRA (CARRINHO E CHECKOUT)
    # ====================================================================
    path('api/carrinho/', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('api/checkout/', views.CheckoutAPIView.as_view(), name='api_checkout'),

    # ====================================================================
    # 4. ROTAS ADMINISTRATIVAS
    # ====================================================================
    path('api/admin/pedidos/', views_admin.AdminPedidosAPIView.as_view(), name='api_admin_pedidos'),
    path('api/admin/pedidos/<str:pk>/aprovar/', views_admin.AprovarPedidoAPIView.as_view(), name='api_admin_aprovar'),
    path('api/admin/pedidos/<str:pk>/recusar/', views_admin.RecusarPedidoAPIView.as_view(), name='api_admin_recusar'),

    path('api/health/', views.HealthCheckAPIView.as_view(), name='api_health'),
]
