import logging
import time
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from django.conf import settings

from novacheckout.core.ports import IProcessadorPagamento
from novacheckout.core.entities import Pedido, ResultadoPagamento, MetodoPagamento, agora_em_ms

logger = logging.getLogger(__name__)


# ====================================================================
# GATEWAYS: Implementações concretas do processador de pagamento.
# ====================================================================

class PagamentoSimuladoGateway(IProcessadorPagamento):
    """
    Gateway de Pagamento Simulado.
    Decide de forma determinística, após uma latência artificial:
    PIX é sempre recusado e cartão é sempre aprovado (centavos 00/90 pela regra
    normal, qualquer outro valor pelo fallback). Não grava nada no banco.
    """

    CENTAVOS_APROVADOS = (0, 90)

    def __init__(self, latencia_segundos: Optional[float] = None):
        if latencia_segundos is None:
            latencia_segundos = getattr(settings, 'PAGAMENTO_LATENCIA_SEGUNDOS', 2.0)
        self.latencia_segundos = float(latencia_segundos)

    @staticmethod
    def centavos(total: Decimal) -> int:
        return int((Decimal(str(total)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)) % 100

    def autorizar(self, pedido: Pedido) -> ResultadoPagamento:
        if self.latencia_segundos > 0:
            time.sleep(self.latencia_segundos)

        transacao_id = f"PAG_{agora_em_ms()}"
        resultado = self._decidir(pedido, transacao_id)
        logger.info(
            "Pagamento simulado do pedido %s (%s, total=%s): %s",
            pedido.id, pedido.metodo_pagamento, pedido.total,
            'aprovado' if resultado.sucesso else 'recusado',
        )
        return resultado

    def _decidir(self, pedido: Pedido, transacao_id: str) -> ResultadoPagamento:
        try:
            metodo = MetodoPagamento(pedido.metodo_pagamento)
        except ValueError:
            return ResultadoPagamento(False, "Método de pagamento não suportado.", transacao_id)

        if metodo is MetodoPagamento.PIX:
            return ResultadoPagamento(
                False, "Pagamento PIX recusado automaticamente pelo gateway de teste.", transacao_id
            )

        if self.centavos(pedido.total) in self.CENTAVOS_APROVADOS:
            return ResultadoPagamento(True, "Pagamento aprovado com sucesso!", transacao_id)

        # A regra de centavos recusaria, mas cartão sempre cai no fallback aprovado.
        return ResultadoPagamento(True, "Pagamento aprovado (fallback para cartão).", transacao_id)
