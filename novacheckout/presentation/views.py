from django.conf import settings
from django.utils import timezone
from rest_framework.permissions import IsAdminUser, AllowAny
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from novacheckout.core.dependency_injection import (
    get_gerenciar_catalogo_use_case,
    get_gerenciar_carrinho_use_case,
    get_finalizar_checkout_use_case,
    get_gerenciar_pedidos_admin_use_case,
)
from .cart_manager import SessaoCarrinhoStorage
from .serializers import (
    ProdutoSerializer,
    BaixaEstoqueSerializer,
    CarrinhoSerializer,
    CarrinhoItemInputSerializer,
    CarrinhoQuantidadeInputSerializer,
    PedidoSerializer,
    StatusPedidoSerializer,
    CheckoutSerializer,
    ClienteSerializer,
    EnderecoSerializer,
    ResultadoCheckoutSerializer,
)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# Erros do Core sobem para presentation.exceptions.tratar_excecao.
# ====================================================================

class PermissaoPorMetodoMixin:
    """Leitura pública; escrita restrita a administradores."""
    metodos_publicos = ('GET', 'HEAD', 'OPTIONS')

    def get_permissions(self):
        if self.request.method in self.metodos_publicos:
            self.permission_classes = [AllowAny]
        else:
            self.permission_classes = [IsAdminUser]
        return [permission() for permission in self.permission_classes]


# ====================================================================
# CATÁLOGO
# ====================================================================

class ProdutoListAPIView(PermissaoPorMetodoMixin, APIView):
    """
    Lista produtos (mais recentes primeiro) e cadastra novos (admin).
    Com ?disponiveis=1 a vitrine recebe apenas produtos ativos e com estoque.
    """

    def get(self, request):
        use_case = get_gerenciar_catalogo_use_case()
        if request.query_params.get('disponiveis') in ('1', 'true'):
            produtos = use_case.listar_disponiveis()
        else:
            produtos = use_case.listar()
        return Response(ProdutoSerializer(produtos, many=True).data)

    def post(self, request):
        serializer = ProdutoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        produto = get_gerenciar_catalogo_use_case().criar(serializer.to_entity())
        return Response(ProdutoSerializer(produto).data, status=status.HTTP_201_CREATED)


class ProdutoDetailAPIView(PermissaoPorMetodoMixin, APIView):

    def get(self, request, pk):
        produto = get_gerenciar_catalogo_use_case().detalhar(pk)
        return Response(ProdutoSerializer(produto).data)

    def put(self, request, pk):
        serializer = ProdutoSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        produto = get_gerenciar_catalogo_use_case().atualizar(pk, dict(serializer.validated_data))
        return Response(ProdutoSerializer(produto).data)

    def delete(self, request, pk):
        get_gerenciar_catalogo_use_case().deletar(pk)
        return Response({'id': pk})


class BaixaEstoqueAPIView(APIView):
    """Transação de baixa de estoque: tudo ou nada."""
    permission_classes = [IsAdminUser]

    def post(self, request):
        serializer = BaixaEstoqueSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        get_gerenciar_catalogo_use_case().aplicar_baixas_estoque(serializer.to_entities())
        return Response({'success': True})


# ====================================================================
# PEDIDOS
# ====================================================================

class PedidoListAPIView(APIView):
    permission_classes = [IsAdminUser]

    def get(self, request):
        pedidos = get_gerenciar_pedidos_admin_use_case().listar_todos(request.query_params.get('status'))
        return Response(PedidoSerializer(pedidos, many=True).data)

    def post(self, request):
        serializer = PedidoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pedido = get_gerenciar_pedidos_admin_use_case().registrar_pedido(serializer.to_entity())
        return Response(PedidoSerializer(pedido).data, status=status.HTTP_201_CREATED)


class PedidoDetailAPIView(APIView):
    """Consulta pública: o cliente acompanha o pedido pelo id recebido no checkout."""
    permission_classes = [AllowAny]

    def get(self, request, pk):
        pedido = get_gerenciar_pedidos_admin_use_case().detalhar_pedido(pk)
        return Response(PedidoSerializer(pedido).data)


class PedidoStatusAPIView(APIView):
    permission_classes = [IsAdminUser]

    def put(self, request, pk):
        serializer = StatusPedidoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        pedido = get_gerenciar_pedidos_admin_use_case().atualizar_status(pk, serializer.validated_data['status'])
        return Response(PedidoSerializer(pedido).data)


# ====================================================================
# CARRINHO E CHECKOUT
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    Carrinho do visitante, guardado na sessão.
    POST adiciona uma unidade, PATCH ajusta a quantidade,
    DELETE remove um produto (com produto_id) ou esvazia o carrinho.
    """
    permission_classes = [AllowAny]

    def _use_case(self, request):
        return get_gerenciar_carrinho_use_case(SessaoCarrinhoStorage(request))

    def get(self, request):
        carrinho = self._use_case(request).obter()
        return Response(CarrinhoSerializer(carrinho).data)

    def post(self, request):
        entrada = CarrinhoItemInputSerializer(data=request.data)
        entrada.is_valid(raise_exception=True)
        carrinho = self._use_case(request).adicionar_item(entrada.validated_data['produto_id'])
        return Response(CarrinhoSerializer(carrinho).data, status=status.HTTP_201_CREATED)

    def patch(self, request):
        entrada = CarrinhoQuantidadeInputSerializer(data=request.data)
        entrada.is_valid(raise_exception=True)
        carrinho = self._use_case(request).atualizar_quantidade(
            entrada.validated_data['produto_id'], entrada.validated_data['quantidade']
        )
        return Response(CarrinhoSerializer(carrinho).data)

    def delete(self, request):
        use_case = self._use_case(request)
        if request.data.get('produto_id') is None:
            carrinho = use_case.limpar()
        else:
            entrada = CarrinhoItemInputSerializer(data=request.data)
            entrada.is_valid(raise_exception=True)
            carrinho = use_case.remover_item(entrada.validated_data['produto_id'])
        return Response(CarrinhoSerializer(carrinho).data)


class CheckoutAPIView(APIView):
    """
    API View para processar o checkout do carrinho da sessão.
    Pagamento recusado não é erro: a resposta é 200 com sucesso=false.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        storage = SessaoCarrinhoStorage(request)
        resultado = get_finalizar_checkout_use_case(storage).executar(
            carrinho=storage.carregar(),
            cliente=ClienteSerializer().to_entity(dados['cliente']),
            endereco=EnderecoSerializer().to_entity(dados['endereco']),
            metodo_pagamento=dados['metodo_pagamento'],
            numero_cartao=dados.get('numero_cartao'),
        )
        return Response(ResultadoCheckoutSerializer(resultado).data, status=status.HTTP_200_OK)


class HealthCheckAPIView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return Response({
            'status': 'OK',
            'timestamp': timezone.now().isoformat(),
            'environment': settings.AMBIENTE,
        })
