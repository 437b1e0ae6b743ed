import threading
from decimal import Decimal
from io import StringIO
from unittest import skipUnless

from django.core.management import call_command
from django.db import connection, connections
from django.test import TestCase, SimpleTestCase, TransactionTestCase

# Importamos as classes que queremos testar
from novacheckout.catalog.models import Produto as ProdutoModel
from novacheckout.vendas.models import Pedido as PedidoModel
from novacheckout.infrastructure.repositories import ProdutoRepositoryDjango, PedidoRepositoryDjango
from novacheckout.infrastructure.gateways import PagamentoSimuladoGateway
from novacheckout.core.entities import (
    Produto, Pedido, ItemPedido, Cliente, Endereco, BaixaEstoque,
    StatusPedido, StatusProduto, MetodoPagamento,
)
from novacheckout.core.exceptions import (
    DadosInvalidosError,
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    TransicaoStatusInvalidaError,
)


def novo_pedido(itens, metodo=MetodoPagamento.CARTAO, total=None):
    return Pedido(
        cliente=Cliente(nome='João Souza', email='joao@exemplo.com', telefone='11987654321', cpf='98765432100'),
        endereco=Endereco(rua='Av. Paulista', numero='1000', bairro='Bela Vista', cidade='São Paulo',
                          estado='SP', cep='01310100', complemento='Apto 12'),
        itens=itens,
        metodo_pagamento=metodo,
        total=Pedido.calcular_total(itens) if total is None else Decimal(total),
    )


# A classe de teste herda do TestCase do Django, que prepara o banco de dados de teste
class ProdutoRepositoryDjangoTestCase(TestCase):

    def setUp(self):
        """
        Configura o ambiente para cada teste, criando uma instância do repositório
        e dois produtos reais no banco de dados.
        """
        self.repository = ProdutoRepositoryDjango()
        self.produto_a = ProdutoModel.objects.create(
            titulo='Direito Constitucional', preco=Decimal('249.90'), estoque=5, categoria='Direito'
        )
        self.produto_b = ProdutoModel.objects.create(
            titulo='Português', preco=Decimal('159.90'), estoque=3, categoria='Português'
        )

    def test_buscar_por_id_com_sucesso(self):
        """
        Cenário: Verificar se o repositório consegue encontrar um produto existente.
        """
        # ACT
        produto = self.repository.buscar_por_id(self.produto_a.id)

        # ASSERT
        self.assertIsInstance(produto, Produto)
        self.assertEqual(produto.titulo, 'Direito Constitucional')
        self.assertEqual(produto.status, StatusProduto.ATIVO)

    def test_buscar_por_id_nao_encontrado(self):
        self.assertIsNone(self.repository.buscar_por_id(999999))

    def test_criar_atualizar_e_deletar(self):
        criado = self.repository.criar(Produto(
            titulo='Matemática', preco=Decimal('189.90'), estoque=20, categoria='Matemática'
        ))
        self.assertIsNotNone(criado.id)

        atualizado = self.repository.atualizar(criado.id, {'preco': Decimal('179.90'), 'status': 'Inativo'})
        self.assertEqual(atualizado.preco, Decimal('179.90'))
        self.assertEqual(atualizado.status, StatusProduto.INATIVO)

        self.repository.deletar(criado.id)
        self.assertFalse(ProdutoModel.objects.filter(pk=criado.id).exists())

        with self.assertRaises(ProdutoNaoEncontradoError):
            self.repository.deletar(criado.id)

    def test_baixa_em_lote_e_atomica(self):
        """
        Cenário: Um id inexistente no meio do lote. Nenhum estoque pode mudar.
        """
        # ACT
        with self.assertRaises(ProdutoNaoEncontradoError) as ctx:
            self.repository.aplicar_baixas_estoque([
                BaixaEstoque(self.produto_a.id, 2),
                BaixaEstoque(999, 1),
            ])

        # ASSERT
        self.assertEqual(ctx.exception.produto_id, 999)
        self.produto_a.refresh_from_db()
        self.assertEqual(self.produto_a.estoque, 5)

    def test_baixa_soma_repetidos_e_nao_fica_negativa(self):
        self.repository.aplicar_baixas_estoque([
            BaixaEstoque(self.produto_a.id, 2),
            BaixaEstoque(self.produto_a.id, 1),
            BaixaEstoque(self.produto_b.id, 99),
        ])

        self.produto_a.refresh_from_db()
        self.produto_b.refresh_from_db()
        self.assertEqual(self.produto_a.estoque, 2)
        self.assertEqual(self.produto_b.estoque, 0)

    def test_baixa_negativa_rejeitada(self):
        with self.assertRaises(DadosInvalidosError):
            self.repository.aplicar_baixas_estoque([BaixaEstoque(self.produto_a.id, -3)])

        self.produto_a.refresh_from_db()
        self.assertEqual(self.produto_a.estoque, 5)


class PedidoRepositoryDjangoTestCase(TestCase):

    def setUp(self):
        self.produto_repo = ProdutoRepositoryDjango()
        self.repository = PedidoRepositoryDjango(self.produto_repo)
        self.produto = ProdutoModel.objects.create(
            titulo='Raciocínio Lógico', preco=Decimal('149.90'), estoque=25, categoria='Raciocínio Lógico'
        )
        self.item = ItemPedido(
            produto_id=self.produto.id,
            titulo=self.produto.titulo,
            preco_unitario=self.produto.preco,
            quantidade=2,
            categoria=self.produto.categoria,
            estoque_disponivel=25,
        )

    def test_pedido_gravado_e_recuperado_igual(self):
        """
        Cenário: O snapshot completo do pedido sobrevive à ida e volta no banco.
        """
        # ARRANGE
        pedido = novo_pedido([self.item])

        # ACT
        self.repository.criar(pedido)
        recuperado = self.repository.buscar_por_id(pedido.id)

        # ASSERT
        self.assertEqual(recuperado.id, pedido.id)
        self.assertEqual(recuperado.cliente, pedido.cliente)
        self.assertEqual(recuperado.endereco, pedido.endereco)
        self.assertEqual(recuperado.itens, [self.item])
        self.assertEqual(recuperado.total, Decimal('299.80'))
        self.assertEqual(recuperado.status, StatusPedido.PENDENTE)
        self.assertEqual(recuperado.metodo_pagamento, MetodoPagamento.CARTAO)
        self.assertIsNone(recuperado.transacao_id)

    def test_pedido_inexistente(self):
        with self.assertRaises(PedidoNaoEncontradoError):
            self.repository.buscar_por_id('order-0-000000000')

    def test_listar_filtra_por_status(self):
        pendente = self.repository.criar(novo_pedido([self.item]))
        recusado = self.repository.criar(novo_pedido([self.item], metodo=MetodoPagamento.PIX))
        self.repository.atualizar_status(recusado.id, StatusPedido.FALHOU, 'PAG_1')

        self.assertEqual(len(self.repository.listar()), 2)
        self.assertEqual([p.id for p in self.repository.listar(StatusPedido.PENDENTE)], [pendente.id])
        self.assertEqual(self.repository.listar(StatusPedido.FALHOU)[0].transacao_id, 'PAG_1')

    def test_aprovar_com_baixa_estoque(self):
        pedido = self.repository.criar(novo_pedido([self.item]))

        aprovado = self.repository.aprovar_com_baixa_estoque(pedido.id, 'PAG_123')

        self.assertEqual(aprovado.status, StatusPedido.APROVADO)
        self.assertEqual(aprovado.transacao_id, 'PAG_123')
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 23)

    def test_aprovacao_desfeita_se_produto_sumiu(self):
        """
        Cenário: O produto foi removido depois do pedido. A aprovação
        e a baixa acontecem juntas ou não acontecem.
        """
        outro = ProdutoModel.objects.create(titulo='Temporário', preco=Decimal('10.00'), estoque=1, categoria='X')
        item_outro = ItemPedido(outro.id, outro.titulo, outro.preco, 1)
        pedido = self.repository.criar(novo_pedido([self.item, item_outro]))
        outro.delete()

        with self.assertRaises(ProdutoNaoEncontradoError):
            self.repository.aprovar_com_baixa_estoque(pedido.id)

        self.assertEqual(PedidoModel.objects.get(pk=pedido.id).status, 'pending')
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 25)

    def test_transicao_de_status_terminal_e_rejeitada(self):
        pedido = self.repository.criar(novo_pedido([self.item]))
        self.repository.aprovar_com_baixa_estoque(pedido.id)

        with self.assertRaises(TransicaoStatusInvalidaError):
            self.repository.atualizar_status(pedido.id, StatusPedido.FALHOU)
        with self.assertRaises(TransicaoStatusInvalidaError):
            self.repository.aprovar_com_baixa_estoque(pedido.id)

        # Nenhuma baixa dupla.
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 23)


class PagamentoSimuladoGatewayTestCase(SimpleTestCase):
    """O gateway simulado não toca no banco."""

    def setUp(self):
        self.gateway = PagamentoSimuladoGateway(latencia_segundos=0)

    def autorizar(self, metodo, total):
        item = ItemPedido(1, 'Curso', Decimal(total), 1)
        return self.gateway.autorizar(novo_pedido([item], metodo=metodo))

    def test_pix_sempre_recusado(self):
        for total in ('100.00', '100.90', '100.01'):
            resultado = self.autorizar(MetodoPagamento.PIX, total)
            self.assertFalse(resultado.sucesso)
            self.assertEqual(resultado.mensagem, 'Pagamento PIX recusado automaticamente pelo gateway de teste.')

    def test_cartao_com_centavos_00_ou_90(self):
        for total in ('100.00', '100.90'):
            resultado = self.autorizar(MetodoPagamento.CARTAO, total)
            self.assertTrue(resultado.sucesso)
            self.assertEqual(resultado.mensagem, 'Pagamento aprovado com sucesso!')

    def test_cartao_com_outros_centavos_cai_no_fallback(self):
        resultado = self.autorizar(MetodoPagamento.CARTAO, '100.01')

        self.assertTrue(resultado.sucesso)
        self.assertEqual(resultado.mensagem, 'Pagamento aprovado (fallback para cartão).')

    def test_transacao_id_gerada_sempre(self):
        resultado = self.autorizar(MetodoPagamento.PIX, '50.00')

        self.assertTrue(resultado.transacao_id.startswith('PAG_'))
        self.assertTrue(resultado.transacao_id[4:].isdigit())

    def test_centavos(self):
        self.assertEqual(PagamentoSimuladoGateway.centavos(Decimal('199.90')), 90)
        self.assertEqual(PagamentoSimuladoGateway.centavos(Decimal('149.00')), 0)
        self.assertEqual(PagamentoSimuladoGateway.centavos(Decimal('0.07')), 7)


class LoadInitialDataCommandTestCase(TestCase):

    def test_carrega_cursos_e_pedido_pendente_uma_unica_vez(self):
        saida = StringIO()

        call_command('load_initial_data', stdout=saida)
        call_command('load_initial_data', stdout=saida)

        self.assertEqual(ProdutoModel.objects.count(), 7)
        self.assertEqual(ProdutoModel.objects.filter(status='Ativo').count(), 5)
        pendentes = PedidoModel.objects.filter(status='pending')
        self.assertEqual(pendentes.count(), 1)
        pedido = pendentes.get()
        self.assertTrue(pedido.id.startswith('init-order-'))
        self.assertEqual(pedido.cliente_email, 'guilhermeteste@eduqi.com')
        self.assertEqual(pedido.itens.count(), 1)


@skipUnless(connection.vendor == 'postgresql', 'select_for_update só bloqueia linhas no PostgreSQL')
class BaixaEstoqueConcorrenteTestCase(TransactionTestCase):
    """
    Baixas simultâneas sobre o mesmo produto, cada uma na sua conexão.
    O select_for_update serializa as transações; sem ele alguma leitura
    repetiria o estoque antigo e unidades vendidas se perderiam.
    """

    def test_baixas_simultaneas_nao_perdem_atualizacao(self):
        # ARRANGE
        produto = ProdutoModel.objects.create(
            titulo='Direito Administrativo', preco=Decimal('199.90'), estoque=10, categoria='Direito'
        )
        repository = ProdutoRepositoryDjango()
        vendas_simultaneas = 6
        barreira = threading.Barrier(vendas_simultaneas)
        erros = []

        def vender():
            try:
                barreira.wait()
                repository.aplicar_baixas_estoque([BaixaEstoque(produto.id, 1)])
            except Exception as e:
                erros.append(e)
            finally:
                connections.close_all()

        # ACT
        threads = [threading.Thread(target=vender) for _ in range(vendas_simultaneas)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        # ASSERT
        self.assertEqual(erros, [])
        produto.refresh_from_db()
        self.assertEqual(produto.estoque, 4)

    def test_ultima_unidade_disputada_nunca_fica_negativa(self):
        produto = ProdutoModel.objects.create(
            titulo='Informática', preco=Decimal('129.90'), estoque=1, categoria='Tecnologia'
        )
        repository = ProdutoRepositoryDjango()
        barreira = threading.Barrier(2)

        def vender():
            try:
                barreira.wait()
                repository.aplicar_baixas_estoque([BaixaEstoque(produto.id, 1)])
            finally:
                connections.close_all()

        threads = [threading.Thread(target=vender) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        produto.refresh_from_db()
        self.assertEqual(produto.estoque, 0)
