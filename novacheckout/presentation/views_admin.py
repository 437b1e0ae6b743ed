# novacheckout/presentation/views_admin.py
"""
Views do painel de conciliação de pedidos (acesso administrativo).
"""
from rest_framework.permissions import IsAdminUser
from rest_framework.views import APIView
from rest_framework.response import Response

from novacheckout.core.dependency_injection import get_gerenciar_pedidos_admin_use_case
from .serializers import PedidoSerializer


class AdminPedidosAPIView(APIView):
    """Todos os pedidos, mais recentes primeiro. Aceita ?status=pending|approved|failed."""
    permission_classes = [IsAdminUser]

    def get(self, request):
        pedidos = get_gerenciar_pedidos_admin_use_case().listar_todos(request.query_params.get('status'))
        return Response(PedidoSerializer(pedidos, many=True).data)


class AprovarPedidoAPIView(APIView):
    """Aprova um pedido pending e baixa o estoque; um segundo envio recebe 409."""
    permission_classes = [IsAdminUser]

    def post(self, request, pk):
        pedido = get_gerenciar_pedidos_admin_use_case().aprovar(pk)
        return Response(PedidoSerializer(pedido).data)


class RecusarPedidoAPIView(APIView):
    permission_classes = [IsAdminUser]

    def post(self, request, pk):
        pedido = get_gerenciar_pedidos_admin_use_case().recusar(pk)
        return Response(PedidoSerializer(pedido).data)
