# novacheckout/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from dataclasses import replace
from typing import List, Optional, Dict, Any

# Entidades e Exceções
from novacheckout.core.entities import (
    Produto, Carrinho, ItemCarrinho, Cliente, Endereco, Pedido, ItemPedido,
    BaixaEstoque, ResultadoCheckout, StatusPedido, MetodoPagamento
)
from novacheckout.core.exceptions import (
    CarrinhoVazioError,
    DadosInvalidosError,
    ProdutoNaoEncontradoError,
    ProdutoIndisponivelError,
)
from novacheckout.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IProcessadorPagamento,
    ICarrinhoStorage,
)
from novacheckout.core.validacao import validar_dados_checkout

logger = logging.getLogger(__name__)

MENSAGEM_ERRO_INESPERADO = (
    "Ocorreu um erro inesperado ao processar seu pedido. Por favor, tente novamente."
)


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class GerenciarCatalogoUseCase:
    """Caso de Uso do catálogo: listagem, CRUD administrativo e baixa de estoque."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def listar(self) -> List[Produto]:
        return self.produto_repo.listar()

    def listar_disponiveis(self) -> List[Produto]:
        """Somente produtos ativos e com estoque."""
        return [p for p in self.produto_repo.listar() if p.disponivel_para_compra]

    def detalhar(self, produto_id: int) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError(produto_id)
        return produto

    def criar(self, produto: Produto) -> Produto:
        return self.produto_repo.criar(produto)

    def atualizar(self, produto_id: int, campos: Dict[str, Any]) -> Produto:
        return self.produto_repo.atualizar(produto_id, campos)

    def deletar(self, produto_id: int) -> None:
        self.produto_repo.deletar(produto_id)

    def aplicar_baixas_estoque(self, baixas: List[BaixaEstoque]) -> None:
        self.produto_repo.aplicar_baixas_estoque(baixas)


# ====================================================================
# 2. CASOS DE USO DO CARRINHO
# ====================================================================

class GerenciarCarrinhoUseCase:
    """
    Caso de Uso que centraliza a lógica de gestão do carrinho (adicionar, atualizar, remover).
    A persistência do carrinho fica a cargo da porta ICarrinhoStorage.
    """
    def __init__(self, storage: ICarrinhoStorage, produto_repo: IProdutoRepository):
        self.storage = storage
        self.produto_repo = produto_repo

    def obter(self) -> Carrinho:
        return self.storage.carregar()

    def adicionar_item(self, produto_id: int) -> Carrinho:
        """Adiciona uma unidade do produto, limitada ao estoque atual."""
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError(produto_id)
        if not produto.disponivel_para_compra:
            raise ProdutoIndisponivelError(f"O produto '{produto.titulo}' está indisponível.")

        carrinho = self.storage.carregar()
        item = carrinho.get_item(produto_id)
        if item:
            item.estoque_maximo = produto.estoque
            item.quantidade = min(item.quantidade + 1, produto.estoque)
        else:
            carrinho.itens.append(ItemCarrinho.a_partir_de_produto(produto))

        self.storage.salvar(carrinho)
        return carrinho

    def atualizar_quantidade(self, produto_id: int, quantidade: int) -> Carrinho:
        """Quantidade <= 0 remove o item. Produto fora do carrinho é ignorado."""
        carrinho = self.storage.carregar()
        item = carrinho.get_item(produto_id)
        if item is None:
            return carrinho

        if quantidade <= 0:
            carrinho.remover(produto_id)
        else:
            produto = self.produto_repo.buscar_por_id(produto_id)
            if produto:
                item.estoque_maximo = produto.estoque
            if item.estoque_maximo <= 0:
                carrinho.remover(produto_id)
            else:
                item.quantidade = min(quantidade, item.estoque_maximo)

        self.storage.salvar(carrinho)
        return carrinho

    def remover_item(self, produto_id: int) -> Carrinho:
        carrinho = self.storage.carregar()
        carrinho.remover(produto_id)
        self.storage.salvar(carrinho)
        return carrinho

    def limpar(self) -> Carrinho:
        carrinho = Carrinho()
        self.storage.salvar(carrinho)
        return carrinho


# ====================================================================
# 3. CASO DE USO DO CHECKOUT
# ====================================================================

class FinalizarCheckoutUseCase:
    """
    Coordena o checkout: cria o pedido pendente, aguarda o pagamento,
    finaliza o pedido (com baixa de estoque quando aprovado) e limpa o carrinho.
    Qualquer falha após a criação do pedido aciona a compensação (marcar como failed).
    """
    def __init__(
        self,
        pedido_repo: IPedidoRepository,
        processador_pagamento: IProcessadorPagamento,
        carrinho_storage: ICarrinhoStorage,
    ):
        self.pedido_repo = pedido_repo
        self.processador_pagamento = processador_pagamento
        self.carrinho_storage = carrinho_storage

    def executar(
        self,
        carrinho: Carrinho,
        cliente: Cliente,
        endereco: Endereco,
        metodo_pagamento,
        numero_cartao: Optional[str] = None,
    ) -> ResultadoCheckout:
        if carrinho.esta_vazio:
            raise CarrinhoVazioError("Não é possível finalizar o checkout com o carrinho vazio.")

        # Falha de validação não chega ao banco nem ao gateway.
        validar_dados_checkout(cliente, endereco, metodo_pagamento, numero_cartao)
        metodo = MetodoPagamento(metodo_pagamento)

        itens = [ItemPedido.a_partir_do_carrinho(item) for item in carrinho.itens]
        pedido_id = None
        try:
            pedido = self.pedido_repo.criar(Pedido(
                cliente=cliente,
                endereco=endereco,
                itens=itens,
                metodo_pagamento=metodo,
                total=Pedido.calcular_total(itens),
            ))
            pedido_id = pedido.id
            logger.info("Pedido %s criado (total=%s, metodo=%s).", pedido.id, pedido.total, metodo.value)

            resultado = self.processador_pagamento.autorizar(pedido)

            if resultado.sucesso:
                self.pedido_repo.aprovar_com_baixa_estoque(pedido.id, resultado.transacao_id)
                self.carrinho_storage.salvar(Carrinho())
                logger.info("Pedido %s aprovado (transacao=%s).", pedido.id, resultado.transacao_id)
            else:
                # Estoque intocado e carrinho preservado para nova tentativa.
                self.pedido_repo.atualizar_status(pedido.id, StatusPedido.FALHOU, resultado.transacao_id)
                logger.info("Pedido %s recusado: %s", pedido.id, resultado.mensagem)

            return ResultadoCheckout(
                sucesso=resultado.sucesso,
                mensagem=resultado.mensagem,
                pedido_id=pedido.id,
                transacao_id=resultado.transacao_id,
            )
        except Exception:
            logger.exception("Erro inesperado no checkout do pedido %s.", pedido_id)
            if pedido_id is not None:
                self._compensar(pedido_id)
            return ResultadoCheckout(sucesso=False, mensagem=MENSAGEM_ERRO_INESPERADO, pedido_id=pedido_id)

    def _compensar(self, pedido_id: str) -> None:
        """Tenta marcar o pedido como failed. Falhas aqui são apenas registradas."""
        try:
            self.pedido_repo.atualizar_status(pedido_id, StatusPedido.FALHOU)
        except Exception:
            logger.exception("Falha ao marcar o pedido %s como failed após erro no checkout.", pedido_id)


# ====================================================================
# 4. CASOS DE USO ADMINISTRATIVOS
# ====================================================================

class GerenciarPedidosAdminUseCase:
    """Caso de Uso para listagem e conciliação manual de pedidos (acesso administrativo)."""

    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(self, status: Optional[str] = None) -> List[Pedido]:
        """Lista todos os pedidos, mais recentes primeiro, com filtro opcional por status."""
        return self.pedido_repo.listar(self._converter_status(status) if status else None)

    def detalhar_pedido(self, pedido_id: str) -> Pedido:
        return self.pedido_repo.buscar_por_id(pedido_id)

    def registrar_pedido(self, pedido: Pedido) -> Pedido:
        """Grava um pedido diretamente, sempre como pending."""
        if not pedido.itens:
            raise CarrinhoVazioError("O pedido precisa de ao menos um item.")
        pedido = replace(
            pedido,
            status=StatusPedido.PENDENTE,
            total=Pedido.calcular_total(pedido.itens),
            transacao_id=None,
        )
        return self.pedido_repo.criar(pedido)

    def aprovar(self, pedido_id: str) -> Pedido:
        """Aprova e baixa o estoque atomicamente; se a baixa falhar o pedido continua pending."""
        pedido = self.pedido_repo.aprovar_com_baixa_estoque(pedido_id)
        logger.info("Pedido %s aprovado manualmente.", pedido_id)
        return pedido

    def recusar(self, pedido_id: str) -> Pedido:
        pedido = self.pedido_repo.atualizar_status(pedido_id, StatusPedido.FALHOU)
        logger.info("Pedido %s recusado manualmente.", pedido_id)
        return pedido

    def atualizar_status(self, pedido_id: str, novo_status: str) -> Pedido:
        status = self._converter_status(novo_status)
        if status is StatusPedido.APROVADO:
            return self.aprovar(pedido_id)
        if status is StatusPedido.FALHOU:
            return self.recusar(pedido_id)
        return self.pedido_repo.atualizar_status(pedido_id, status)

    @staticmethod
    def _converter_status(valor) -> StatusPedido:
        try:
            return StatusPedido(valor)
        except ValueError:
            raise DadosInvalidosError(
                f"O status '{valor}' não é um status de pedido válido.",
                erros={'status': 'Use pending, approved ou failed.'},
            )
