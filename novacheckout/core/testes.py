# novacheckout/core/testes.py

import threading
import unittest
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import Mock, patch

from novacheckout.core.use_cases import (
    FinalizarCheckoutUseCase,
    GerenciarCarrinhoUseCase,
    GerenciarCatalogoUseCase,
    GerenciarPedidosAdminUseCase,
    MENSAGEM_ERRO_INESPERADO,
)
from novacheckout.core.entities import (
    Produto, Carrinho, ItemCarrinho, Cliente, Endereco, Pedido, ItemPedido,
    BaixaEstoque, ResultadoPagamento, StatusPedido, StatusProduto, MetodoPagamento,
)
from novacheckout.core.exceptions import (
    CarrinhoVazioError,
    DadosInvalidosError,
    ProdutoNaoEncontradoError,
    ProdutoIndisponivelError,
    PedidoNaoEncontradoError,
    TransicaoStatusInvalidaError,
)
from novacheckout.core.validacao import validar_dados_checkout
from novacheckout.infrastructure.repositories import (
    ProdutoRepositoryMemoria,
    PedidoRepositoryMemoria,
    CarrinhoStorageMemoria,
)
from novacheckout.infrastructure.gateways import PagamentoSimuladoGateway


def cliente_valido():
    return Cliente(nome='Maria da Silva', email='maria@exemplo.com', telefone='(11) 98765-4321', cpf='123.456.789-01')


def endereco_valido():
    return Endereco(rua='Rua das Flores', numero='10', bairro='Centro', cidade='São Paulo', estado='SP', cep='01001-000')


def item_carrinho(produto_id=1, preco='199.90', quantidade=1, estoque=10):
    return ItemCarrinho(
        produto_id=produto_id,
        titulo=f'Curso {produto_id}',
        preco_unitario=Decimal(preco),
        quantidade=quantidade,
        estoque_maximo=estoque,
        categoria='Direito',
    )


# ====================================================================
# ENTIDADES E VALIDAÇÃO
# ====================================================================

class TestEntidades(unittest.TestCase):

    def test_total_do_carrinho_e_a_soma_dos_subtotais_sem_frete(self):
        carrinho = Carrinho(itens=[
            item_carrinho(1, '199.90', 2),
            item_carrinho(2, '0.10', 3),
            item_carrinho(3, '149.90', 1),
        ])
        self.assertEqual(carrinho.total, Decimal('550.00'))
        self.assertEqual(carrinho.quantidade_total, 6)

    def test_id_do_pedido_tem_timestamp_e_sufixo_base36(self):
        partes = Pedido.gerar_id().split('-')
        self.assertEqual(partes[0], 'order')
        self.assertTrue(partes[1].isdigit())
        self.assertEqual(len(partes[2]), 9)
        self.assertTrue(all(c.isdigit() or c.islower() for c in partes[2]))

    def test_sufixo_do_id_vem_de_fonte_criptografica(self):
        """
        Cenário: O id é a única chave da consulta pública do pedido; o sufixo
        precisa sair do gerador do módulo secrets.
        """
        with patch('novacheckout.core.entities.secrets.choice', return_value='z') as choice_mock:
            pedido_id = Pedido.gerar_id()

        self.assertTrue(pedido_id.endswith('-zzzzzzzzz'))
        self.assertEqual(choice_mock.call_count, 9)

    def test_tabela_de_transicoes(self):
        self.assertTrue(StatusPedido.PENDENTE.pode_transitar_para(StatusPedido.APROVADO))
        self.assertTrue(StatusPedido.PENDENTE.pode_transitar_para(StatusPedido.FALHOU))
        self.assertFalse(StatusPedido.APROVADO.pode_transitar_para(StatusPedido.FALHOU))
        self.assertFalse(StatusPedido.FALHOU.pode_transitar_para(StatusPedido.APROVADO))
        self.assertFalse(StatusPedido.PENDENTE.pode_transitar_para(StatusPedido.PENDENTE))

    def test_produto_disponivel_apenas_ativo_e_com_estoque(self):
        self.assertTrue(Produto('A', Decimal('1'), 1, 'X').disponivel_para_compra)
        self.assertFalse(Produto('B', Decimal('1'), 0, 'X').disponivel_para_compra)
        self.assertFalse(Produto('C', Decimal('1'), 5, 'X', status=StatusProduto.INATIVO).disponivel_para_compra)


class TestValidacaoCheckout(unittest.TestCase):

    def test_dados_validos_nao_levantam_erro(self):
        validar_dados_checkout(cliente_valido(), endereco_valido(), 'card', '4111 1111 1111 1111')
        validar_dados_checkout(cliente_valido(), endereco_valido(), 'pix')

    def test_mensagens_por_campo(self):
        cliente = Cliente(nome='', email='', telefone='1234', cpf='123')
        endereco = Endereco(rua='', numero='', bairro='', cidade='', estado='', cep='123')

        with self.assertRaises(DadosInvalidosError) as ctx:
            validar_dados_checkout(cliente, endereco, 'card', '1234')

        erros = ctx.exception.erros
        self.assertEqual(erros['nome'], 'Nome é obrigatório')
        self.assertEqual(erros['email'], 'Email é obrigatório')
        self.assertEqual(erros['telefone'], 'Telefone inválido. Deve ter 10 ou 11 dígitos.')
        self.assertEqual(erros['cpf'], 'CPF deve conter 11 dígitos.')
        self.assertEqual(erros['cep'], 'CEP deve conter 8 dígitos.')
        self.assertEqual(erros['numero_cartao'], 'Cartão deve conter 16 dígitos.')
        for campo in ('rua', 'numero', 'bairro', 'cidade', 'estado'):
            self.assertIn(campo, erros)

    def test_cartao_nao_e_exigido_no_pix(self):
        validar_dados_checkout(cliente_valido(), endereco_valido(), 'pix', None)

    def test_metodo_desconhecido(self):
        with self.assertRaises(DadosInvalidosError) as ctx:
            validar_dados_checkout(cliente_valido(), endereco_valido(), 'boleto')
        self.assertIn('metodo_pagamento', ctx.exception.erros)


# ====================================================================
# CHECKOUT COM MOCKS
# ====================================================================

class TestFinalizarCheckoutUseCase(unittest.TestCase):

    def setUp(self):
        """
        Prepara o caso de uso com dependências "Mock" para
        observar exatamente quais chamadas são feitas ao banco e ao gateway.
        """
        self.pedido_repo_mock = Mock()
        self.pedido_repo_mock.criar.side_effect = lambda pedido: pedido
        self.processador_mock = Mock()
        self.storage_mock = Mock()

        self.use_case = FinalizarCheckoutUseCase(
            pedido_repo=self.pedido_repo_mock,
            processador_pagamento=self.processador_mock,
            carrinho_storage=self.storage_mock,
        )
        self.carrinho = Carrinho(itens=[item_carrinho(1, '199.90', 2)])

    def executar(self, metodo='card', cartao='4111111111111111', carrinho=None):
        return self.use_case.executar(
            carrinho=carrinho or self.carrinho,
            cliente=cliente_valido(),
            endereco=endereco_valido(),
            metodo_pagamento=metodo,
            numero_cartao=cartao,
        )

    def test_carrinho_vazio_falha_antes_de_qualquer_chamada(self):
        """
        Cenário: Checkout com carrinho vazio.
        """
        with self.assertRaises(CarrinhoVazioError):
            self.executar(carrinho=Carrinho())

        self.pedido_repo_mock.criar.assert_not_called()
        self.processador_mock.autorizar.assert_not_called()

    def test_validacao_falha_sem_tocar_no_banco_nem_no_gateway(self):
        """
        Cenário: Cartão com poucos dígitos.
        """
        with self.assertRaises(DadosInvalidosError) as ctx:
            self.executar(cartao='4111')

        self.assertIn('numero_cartao', ctx.exception.erros)
        self.pedido_repo_mock.criar.assert_not_called()
        self.processador_mock.autorizar.assert_not_called()

    def test_pagamento_aprovado_aprova_com_baixa_e_limpa_carrinho(self):
        """
        Cenário: Gateway aprova o pagamento.
        """
        # ARRANGE
        self.processador_mock.autorizar.return_value = ResultadoPagamento(True, 'ok', 'PAG_1')

        # ACT
        resultado = self.executar()

        # ASSERT
        pedido_criado = self.pedido_repo_mock.criar.call_args[0][0]
        self.assertEqual(pedido_criado.status, StatusPedido.PENDENTE)
        self.assertEqual(pedido_criado.total, Decimal('399.80'))
        self.assertEqual(pedido_criado.itens[0].estoque_disponivel, 10)

        self.assertTrue(resultado.sucesso)
        self.assertEqual(resultado.pedido_id, pedido_criado.id)
        self.assertEqual(resultado.transacao_id, 'PAG_1')
        self.pedido_repo_mock.aprovar_com_baixa_estoque.assert_called_once_with(pedido_criado.id, 'PAG_1')
        self.pedido_repo_mock.atualizar_status.assert_not_called()
        self.storage_mock.salvar.assert_called_once_with(Carrinho())

    def test_pagamento_recusado_marca_failed_e_preserva_carrinho(self):
        """
        Cenário: Gateway recusa o pagamento (não é exceção).
        """
        self.processador_mock.autorizar.return_value = ResultadoPagamento(False, 'recusado', 'PAG_2')

        resultado = self.executar(metodo='pix', cartao=None)

        pedido_id = self.pedido_repo_mock.criar.call_args[0][0].id
        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.mensagem, 'recusado')
        self.pedido_repo_mock.atualizar_status.assert_called_once_with(pedido_id, StatusPedido.FALHOU, 'PAG_2')
        self.pedido_repo_mock.aprovar_com_baixa_estoque.assert_not_called()
        self.storage_mock.salvar.assert_not_called()

    def test_erro_inesperado_aciona_compensacao(self):
        """
        Cenário: Gateway explode durante a autorização.
        """
        self.processador_mock.autorizar.side_effect = ConnectionError('timeout')

        resultado = self.executar()

        pedido_id = self.pedido_repo_mock.criar.call_args[0][0].id
        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.mensagem, MENSAGEM_ERRO_INESPERADO)
        self.assertEqual(resultado.pedido_id, pedido_id)
        self.pedido_repo_mock.atualizar_status.assert_called_once_with(pedido_id, StatusPedido.FALHOU)
        self.storage_mock.salvar.assert_not_called()

    def test_falha_na_compensacao_e_apenas_registrada(self):
        """
        Cenário: A baixa falha e a compensação também falha.
        """
        self.processador_mock.autorizar.return_value = ResultadoPagamento(True, 'ok', 'PAG_3')
        self.pedido_repo_mock.aprovar_com_baixa_estoque.side_effect = RuntimeError('db caiu')
        self.pedido_repo_mock.atualizar_status.side_effect = RuntimeError('db continua caído')

        with self.assertLogs('novacheckout.core.use_cases', level='ERROR') as logs:
            resultado = self.executar()

        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.mensagem, MENSAGEM_ERRO_INESPERADO)
        self.assertEqual(len(logs.records), 2)
        self.storage_mock.salvar.assert_not_called()

    def test_falha_ao_criar_pedido_nao_tenta_compensar(self):
        self.pedido_repo_mock.criar.side_effect = RuntimeError('db fora')

        resultado = self.executar()

        self.assertFalse(resultado.sucesso)
        self.assertIsNone(resultado.pedido_id)
        self.pedido_repo_mock.atualizar_status.assert_not_called()
        self.processador_mock.autorizar.assert_not_called()


# ====================================================================
# CENÁRIOS COMPLETOS (REPOSITÓRIOS EM MEMÓRIA + GATEWAY SIMULADO)
# ====================================================================

class TestCenariosCheckout(unittest.TestCase):

    def setUp(self):
        self.produto_repo = ProdutoRepositoryMemoria([
            Produto(id=1, titulo='Administração Pública', preco=Decimal('199.90'), estoque=5, categoria='Administração'),
        ])
        self.pedido_repo = PedidoRepositoryMemoria(self.produto_repo)
        self.storage = CarrinhoStorageMemoria(Carrinho(itens=[item_carrinho(1, '199.90', 1, estoque=5)]))
        self.use_case = FinalizarCheckoutUseCase(
            self.pedido_repo, PagamentoSimuladoGateway(latencia_segundos=0), self.storage
        )

    def executar(self, metodo, cartao=None):
        return self.use_case.executar(
            carrinho=self.storage.carregar(),
            cliente=cliente_valido(),
            endereco=endereco_valido(),
            metodo_pagamento=metodo,
            numero_cartao=cartao,
        )

    def test_cartao_aprova_baixa_estoque_e_esvazia_carrinho(self):
        resultado = self.executar('card', '4111111111111111')

        self.assertTrue(resultado.sucesso)
        self.assertTrue(resultado.transacao_id.startswith('PAG_'))
        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.status, StatusPedido.APROVADO)
        self.assertEqual(pedido.transacao_id, resultado.transacao_id)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 4)
        self.assertTrue(self.storage.carregar().esta_vazio)

    def test_pix_recusa_sem_mexer_no_estoque_nem_no_carrinho(self):
        resultado = self.executar('pix')

        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.mensagem, 'Pagamento PIX recusado automaticamente pelo gateway de teste.')
        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.status, StatusPedido.FALHOU)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 5)
        self.assertEqual(len(self.storage.carregar().itens), 1)

    def test_pedido_recuperado_reproduz_o_snapshot(self):
        resultado = self.executar('card', '4111111111111111')

        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.cliente, cliente_valido())
        self.assertEqual(pedido.endereco, endereco_valido())
        self.assertEqual(pedido.total, Decimal('199.90'))
        self.assertEqual(pedido.metodo_pagamento, MetodoPagamento.CARTAO)
        self.assertEqual(
            pedido.itens,
            [ItemPedido(1, 'Curso 1', Decimal('199.90'), 1, 'Direito', '', 5)],
        )

    def test_gateway_fora_do_ar_deixa_pedido_failed(self):
        """
        Cenário: A comunicação com o gateway cai no meio da autorização.
        """
        # ARRANGE
        gateway_mock = Mock()
        gateway_mock.autorizar.side_effect = ConnectionError('gateway indisponível')
        use_case = FinalizarCheckoutUseCase(self.pedido_repo, gateway_mock, self.storage)

        # ACT
        with self.assertLogs('novacheckout.core.use_cases', level='ERROR'):
            resultado = use_case.executar(
                carrinho=self.storage.carregar(),
                cliente=cliente_valido(),
                endereco=endereco_valido(),
                metodo_pagamento='card',
                numero_cartao='4111111111111111',
            )

        # ASSERT
        self.assertFalse(resultado.sucesso)
        self.assertEqual(resultado.mensagem, MENSAGEM_ERRO_INESPERADO)
        self.assertEqual(self.pedido_repo.buscar_por_id(resultado.pedido_id).status, StatusPedido.FALHOU)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 5)
        self.assertEqual(len(self.storage.carregar().itens), 1)

    def test_produto_removido_do_catalogo_deixa_pedido_failed(self):
        """
        Cenário: A baixa de estoque falha depois do pagamento aprovado.
        A aprovação é desfeita e a compensação marca o pedido como failed.
        """
        self.produto_repo.deletar(1)

        with self.assertLogs('novacheckout.core.use_cases', level='ERROR'):
            resultado = self.executar('card', '4111111111111111')

        self.assertFalse(resultado.sucesso)
        pedido = self.pedido_repo.buscar_por_id(resultado.pedido_id)
        self.assertEqual(pedido.status, StatusPedido.FALHOU)
        self.assertEqual(len(self.storage.carregar().itens), 1)


# ====================================================================
# CARRINHO
# ====================================================================

class TestGerenciarCarrinhoUseCase(unittest.TestCase):

    def setUp(self):
        self.produto_repo = ProdutoRepositoryMemoria([
            Produto(id=1, titulo='Português', preco=Decimal('159.90'), estoque=2, categoria='Português'),
            Produto(id=2, titulo='Contabilidade', preco=Decimal('229.90'), estoque=5, categoria='Contabilidade',
                    status=StatusProduto.INATIVO),
            Produto(id=3, titulo='Administração', preco=Decimal('199.90'), estoque=0, categoria='Administração'),
        ])
        self.storage = CarrinhoStorageMemoria()
        self.use_case = GerenciarCarrinhoUseCase(self.storage, self.produto_repo)

    def test_adicionar_incrementa_ate_o_estoque(self):
        for _ in range(3):
            carrinho = self.use_case.adicionar_item(1)

        self.assertEqual(len(carrinho.itens), 1)
        self.assertEqual(carrinho.itens[0].quantidade, 2)
        self.assertEqual(self.storage.carregar().itens[0].quantidade, 2)

    def test_produto_inativo_ou_sem_estoque_nao_entra(self):
        with self.assertRaises(ProdutoIndisponivelError):
            self.use_case.adicionar_item(2)
        with self.assertRaises(ProdutoIndisponivelError):
            self.use_case.adicionar_item(3)
        self.assertTrue(self.storage.carregar().esta_vazio)

    def test_produto_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.adicionar_item(99)

    def test_atualizar_quantidade_limita_ao_estoque_e_remove_com_zero(self):
        self.use_case.adicionar_item(1)

        carrinho = self.use_case.atualizar_quantidade(1, 10)
        self.assertEqual(carrinho.itens[0].quantidade, 2)

        carrinho = self.use_case.atualizar_quantidade(1, 0)
        self.assertTrue(carrinho.esta_vazio)

    def test_remover_e_limpar(self):
        self.use_case.adicionar_item(1)
        self.assertTrue(self.use_case.remover_item(1).esta_vazio)

        self.use_case.adicionar_item(1)
        self.use_case.limpar()
        self.assertTrue(self.use_case.obter().esta_vazio)


# ====================================================================
# CATÁLOGO E BAIXA DE ESTOQUE
# ====================================================================

class TestBaixaEstoque(unittest.TestCase):

    def setUp(self):
        self.produto_repo = ProdutoRepositoryMemoria([
            Produto(id=1, titulo='A', preco=Decimal('10.00'), estoque=5, categoria='X'),
            Produto(id=2, titulo='B', preco=Decimal('10.00'), estoque=3, categoria='X'),
        ])
        self.use_case = GerenciarCatalogoUseCase(self.produto_repo)

    def test_lote_com_id_inexistente_nao_altera_nada(self):
        with self.assertRaises(ProdutoNaoEncontradoError) as ctx:
            self.use_case.aplicar_baixas_estoque([BaixaEstoque(1, 2), BaixaEstoque(999, 10)])

        self.assertEqual(ctx.exception.produto_id, 999)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 5)
        self.assertEqual(self.produto_repo.buscar_por_id(2).estoque, 3)

    def test_estoque_nunca_fica_negativo(self):
        self.use_case.aplicar_baixas_estoque([BaixaEstoque(1, 99)])
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 0)

    def test_quantidade_negativa_e_rejeitada(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.aplicar_baixas_estoque([BaixaEstoque(1, -1)])
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 5)

    def test_baixas_concorrentes_no_mesmo_produto(self):
        self.produto_repo.atualizar(1, {'estoque': 1})
        barreira = threading.Barrier(2)
        erros = []

        def vender():
            try:
                barreira.wait()
                self.use_case.aplicar_baixas_estoque([BaixaEstoque(1, 1)])
            except Exception as e:
                erros.append(e)

        threads = [threading.Thread(target=vender) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(erros, [])
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 0)

    def test_listar_disponiveis(self):
        self.produto_repo.atualizar(2, {'status': 'Inativo'})
        self.assertEqual([p.id for p in self.use_case.listar_disponiveis()], [1])

    def test_detalhar_inexistente(self):
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.detalhar(42)


# ====================================================================
# PAINEL ADMINISTRATIVO
# ====================================================================

class TestGerenciarPedidosAdminUseCase(unittest.TestCase):

    def setUp(self):
        self.produto_repo = ProdutoRepositoryMemoria([
            Produto(id=1, titulo='Lógica', preco=Decimal('149.90'), estoque=25, categoria='Raciocínio Lógico'),
        ])
        self.pedido_repo = PedidoRepositoryMemoria(self.produto_repo)
        self.use_case = GerenciarPedidosAdminUseCase(self.pedido_repo)

    def criar_pedido(self, produto_id=1, quantidade=2, minutos_atras=0):
        item = ItemPedido(produto_id, 'Lógica', Decimal('149.90'), quantidade, estoque_disponivel=25)
        return self.pedido_repo.criar(Pedido(
            cliente=cliente_valido(),
            endereco=endereco_valido(),
            itens=[item],
            metodo_pagamento=MetodoPagamento.CARTAO,
            total=Pedido.calcular_total([item]),
            data_criacao=datetime.now(timezone.utc) - timedelta(minutes=minutos_atras),
        ))

    def test_listar_mais_recentes_primeiro_com_filtro(self):
        antigo = self.criar_pedido(minutos_atras=10)
        novo = self.criar_pedido(minutos_atras=1)
        self.use_case.recusar(antigo.id)

        self.assertEqual([p.id for p in self.use_case.listar_todos()], [novo.id, antigo.id])
        self.assertEqual([p.id for p in self.use_case.listar_todos('failed')], [antigo.id])

    def test_aprovar_baixa_estoque(self):
        pedido = self.criar_pedido()

        aprovado = self.use_case.aprovar(pedido.id)

        self.assertEqual(aprovado.status, StatusPedido.APROVADO)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 23)

    def test_segunda_aprovacao_e_rejeitada(self):
        pedido = self.criar_pedido()
        self.use_case.aprovar(pedido.id)

        with self.assertRaises(TransicaoStatusInvalidaError):
            self.use_case.aprovar(pedido.id)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 23)

    def test_aprovar_com_produto_inexistente_mantem_pendente(self):
        pedido = self.criar_pedido(produto_id=404)

        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.aprovar(pedido.id)

        self.assertEqual(self.pedido_repo.buscar_por_id(pedido.id).status, StatusPedido.PENDENTE)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 25)

    def test_recusar_nao_mexe_no_estoque(self):
        pedido = self.criar_pedido()
        self.use_case.recusar(pedido.id)

        self.assertEqual(self.pedido_repo.buscar_por_id(pedido.id).status, StatusPedido.FALHOU)
        self.assertEqual(self.produto_repo.buscar_por_id(1).estoque, 25)

    def test_status_terminal_nao_muda(self):
        pedido = self.criar_pedido()
        self.use_case.recusar(pedido.id)

        with self.assertRaises(TransicaoStatusInvalidaError):
            self.use_case.atualizar_status(pedido.id, 'approved')

    def test_status_desconhecido(self):
        pedido = self.criar_pedido()
        with self.assertRaises(DadosInvalidosError):
            self.use_case.atualizar_status(pedido.id, 'shipped')

    def test_pedido_inexistente(self):
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.detalhar_pedido('order-0-inexistente')

    def test_registrar_pedido_forca_pending_e_recalcula_total(self):
        item = ItemPedido(1, 'Lógica', Decimal('149.90'), 2)
        pedido = Pedido(
            cliente=cliente_valido(),
            endereco=endereco_valido(),
            itens=[item],
            metodo_pagamento=MetodoPagamento.PIX,
            total=Decimal('1.00'),
            status=StatusPedido.APROVADO,
        )

        registrado = self.use_case.registrar_pedido(pedido)

        self.assertEqual(registrado.status, StatusPedido.PENDENTE)
        self.assertEqual(registrado.total, Decimal('299.80'))


if __name__ == '__main__':
    unittest.main()
