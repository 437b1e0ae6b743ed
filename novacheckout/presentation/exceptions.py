"""
Handler de exceções da API (REST_FRAMEWORK['EXCEPTION_HANDLER']).
Traduz as exceções do Core para respostas HTTP; o texto de erros internos nunca chega ao cliente.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from novacheckout.core.exceptions import (
    DadosInvalidosError,
    CarrinhoVazioError,
    ProdutoIndisponivelError,
    ItemNaoEncontradoError,
    TransicaoStatusInvalidaError,
)

logger = logging.getLogger(__name__)

MENSAGEM_ERRO_INTERNO = "Erro interno do servidor"


def tratar_excecao(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DadosInvalidosError):
        corpo = {'error': exc.message}
        if exc.erros:
            corpo['erros'] = exc.erros
        return Response(corpo, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, (CarrinhoVazioError, ProdutoIndisponivelError)):
        return Response({'error': exc.message}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, ItemNaoEncontradoError):
        return Response({'error': exc.message}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, TransicaoStatusInvalidaError):
        return Response({'error': exc.message}, status=status.HTTP_409_CONFLICT)

    view = context.get('view')
    logger.exception("Erro não tratado em %s", view.__class__.__name__ if view else 'view desconhecida')
    return Response({'error': MENSAGEM_ERRO_INTERNO}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
