# novacheckout/presentation/testes.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import RequestFactory, TestCase, override_settings
from django.contrib.sessions.backends.db import SessionStore
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from novacheckout.catalog.models import Produto as ProdutoModel
from novacheckout.vendas.models import Pedido as PedidoModel
from novacheckout.core.entities import (
    Carrinho, ItemCarrinho, Pedido, ItemPedido, Cliente, Endereco, MetodoPagamento
)
from novacheckout.infrastructure.instances import pedido_repo
from novacheckout.presentation.cart_manager import SessaoCarrinhoStorage


DADOS_CLIENTE = {
    'nome': 'Ana Lima',
    'email': 'ana@exemplo.com',
    'telefone': '(21) 99876-5432',
    'cpf': '111.222.333-44',
}

DADOS_ENDERECO = {
    'rua': 'Rua do Catete',
    'numero': '200',
    'complemento': '',
    'bairro': 'Catete',
    'cidade': 'Rio de Janeiro',
    'estado': 'RJ',
    'cep': '22220-000',
}


def criar_admin():
    return get_user_model().objects.create_user(
        username='operador', email='operador@exemplo.com', password='senha-forte-123', is_staff=True
    )


class ProdutoAPITestCase(APITestCase):

    def setUp(self):
        self.admin = criar_admin()
        self.produto = ProdutoModel.objects.create(
            titulo='Contabilidade Geral', preco=Decimal('229.90'), estoque=5, categoria='Contabilidade'
        )

    def test_listagem_publica(self):
        response = self.client.get(reverse('api_produtos'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['titulo'], 'Contabilidade Geral')
        self.assertEqual(response.data[0]['preco'], '229.90')
        self.assertEqual(response.data[0]['status'], 'Ativo')
        self.assertTrue(response.data[0]['disponivel_para_compra'])

    def test_vitrine_lista_apenas_disponiveis(self):
        """
        Cenário: A vitrine pede só o que pode ser comprado; a listagem completa continua com tudo.
        """
        # ARRANGE
        ProdutoModel.objects.create(titulo='Esgotado', preco=Decimal('99.90'), estoque=0, categoria='X')
        ProdutoModel.objects.create(
            titulo='Inativo', preco=Decimal('99.90'), estoque=4, categoria='X', status='Inativo'
        )

        # ACT
        vitrine = self.client.get(reverse('api_produtos'), {'disponiveis': '1'})
        completa = self.client.get(reverse('api_produtos'))

        # ASSERT
        self.assertEqual([p['titulo'] for p in vitrine.data], ['Contabilidade Geral'])
        self.assertEqual(len(completa.data), 3)

    def test_cadastro_exige_admin(self):
        dados = {'titulo': 'Novo', 'preco': '10.00', 'estoque': 1, 'categoria': 'X'}

        response = self.client.post(reverse('api_produtos'), dados, format='json')
        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))

        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('api_produtos'), dados, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(ProdutoModel.objects.filter(titulo='Novo').exists())

    def test_cadastro_com_dados_invalidos(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(reverse('api_produtos'), {'titulo': 'X', 'preco': '-1', 'estoque': -2}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('estoque', response.data)

    def test_atualizacao_parcial_e_remocao(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse('api_produto_detalhe', args=[self.produto.id])

        response = self.client.put(url, {'estoque': 9}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['estoque'], 9)
        self.assertEqual(response.data['status'], 'Ativo')

        response = self.client.delete(url)
        self.assertEqual(response.data, {'id': self.produto.id})
        self.assertEqual(self.client.get(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_baixa_de_estoque(self):
        self.client.force_authenticate(user=self.admin)
        url = reverse('api_baixa_estoque')

        response = self.client.post(url, {'baixas': [{'produto_id': self.produto.id, 'quantidade_vendida': 2}]}, format='json')
        self.assertEqual(response.data, {'success': True})
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 3)

    def test_baixa_com_produto_inexistente_nao_altera_nada(self):
        """
        Cenário: O lote tem um id inexistente; a resposta é 404 e o estoque fica intacto.
        """
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(reverse('api_baixa_estoque'), {'baixas': [
            {'produto_id': self.produto.id, 'quantidade_vendida': 1},
            {'produto_id': 999, 'quantidade_vendida': 1},
        ]}, format='json')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn('999', response.data['error'])
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 5)


@override_settings(PAGAMENTO_LATENCIA_SEGUNDOS=0)
class CheckoutAPITestCase(APITestCase):

    def setUp(self):
        self.produto = ProdutoModel.objects.create(
            titulo='Direito Constitucional', preco=Decimal('249.90'), estoque=15, categoria='Direito'
        )
        self.inativo = ProdutoModel.objects.create(
            titulo='Fora de linha', preco=Decimal('99.90'), estoque=5, categoria='X', status='Inativo'
        )

    def adicionar(self, produto_id):
        return self.client.post(reverse('api_carrinho'), {'produto_id': produto_id}, format='json')

    def checkout(self, metodo='card', cartao='4111 1111 1111 1111', **extras):
        dados = {
            'cliente': dict(DADOS_CLIENTE, **extras.get('cliente', {})),
            'endereco': DADOS_ENDERECO,
            'metodo_pagamento': metodo,
            'numero_cartao': cartao,
        }
        return self.client.post(reverse('api_checkout'), dados, format='json')

    def test_carrinho_adicionar_ajustar_e_esvaziar(self):
        response = self.adicionar(self.produto.id)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.adicionar(self.produto.id)

        response = self.client.get(reverse('api_carrinho'))
        self.assertEqual(response.data['quantidade_total'], 2)
        self.assertEqual(response.data['total'], '499.80')
        self.assertEqual(response.data['frete'], '0.00')

        response = self.client.patch(reverse('api_carrinho'), {'produto_id': self.produto.id, 'quantidade': 50}, format='json')
        self.assertEqual(response.data['itens'][0]['quantidade'], 15)

        response = self.client.delete(reverse('api_carrinho'), {'produto_id': self.produto.id}, format='json')
        self.assertEqual(response.data['itens'], [])

    def test_produto_inativo_nao_entra_no_carrinho(self):
        response = self.adicionar(self.inativo.id)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.adicionar(999)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_checkout_cartao_aprovado(self):
        """
        Cenário: Compra com cartão. Pedido aprovado, estoque baixado, carrinho vazio.
        """
        # ARRANGE
        self.adicionar(self.produto.id)

        # ACT
        response = self.checkout()

        # ASSERT
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['sucesso'])
        self.assertTrue(response.data['transacao_id'].startswith('PAG_'))

        pedido = PedidoModel.objects.get(pk=response.data['pedido_id'])
        self.assertEqual(pedido.status, 'approved')
        self.assertEqual(pedido.total, Decimal('249.90'))
        self.assertEqual(pedido.itens.count(), 1)
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 14)
        self.assertEqual(self.client.get(reverse('api_carrinho')).data['itens'], [])

    def test_checkout_pix_recusado_preserva_carrinho(self):
        self.adicionar(self.produto.id)

        response = self.checkout(metodo='pix', cartao=None)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['sucesso'])
        pedido = PedidoModel.objects.get(pk=response.data['pedido_id'])
        self.assertEqual(pedido.status, 'failed')
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 15)
        self.assertEqual(len(self.client.get(reverse('api_carrinho')).data['itens']), 1)

    def test_checkout_com_campos_invalidos(self):
        self.adicionar(self.produto.id)

        response = self.checkout(cartao='1234', cliente={'cpf': '123'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['erros']['cpf'], 'CPF deve conter 11 dígitos.')
        self.assertEqual(response.data['erros']['numero_cartao'], 'Cartão deve conter 16 dígitos.')
        self.assertFalse(PedidoModel.objects.exists())

    def test_checkout_com_carrinho_vazio(self):
        response = self.checkout()

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(PedidoModel.objects.exists())

    def test_pedido_consultavel_pelo_id(self):
        self.adicionar(self.produto.id)
        pedido_id = self.checkout().data['pedido_id']

        response = self.client.get(reverse('api_pedido_detalhe', args=[pedido_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'approved')
        self.assertEqual(response.data['metodo_pagamento'], 'card')
        self.assertEqual(response.data['cliente']['email'], 'ana@exemplo.com')

        response = self.client.get(reverse('api_pedido_detalhe', args=['order-inexistente']))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class AdminPedidosAPITestCase(APITestCase):

    def setUp(self):
        self.admin = criar_admin()
        self.produto = ProdutoModel.objects.create(
            titulo='Matemática', preco=Decimal('189.90'), estoque=20, categoria='Matemática'
        )
        self.client.force_authenticate(user=self.admin)
        response = self.client.post(reverse('api_pedidos'), {
            'cliente': DADOS_CLIENTE,
            'endereco': DADOS_ENDERECO,
            'metodo_pagamento': 'card',
            'itens': [{
                'produto_id': self.produto.id,
                'titulo': 'Matemática',
                'preco_unitario': '189.90',
                'quantidade': 3,
            }],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.pedido_id = response.data['id']

    def test_pedido_registrado_como_pending(self):
        response = self.client.get(reverse('api_admin_pedidos'), {'status': 'pending'})

        self.assertEqual([p['id'] for p in response.data], [self.pedido_id])
        self.assertEqual(response.data[0]['total'], '569.70')

    def test_aprovar_baixa_estoque_e_segunda_aprovacao_e_conflito(self):
        """
        Cenário: Duplo clique no botão de aprovar. A baixa acontece uma única vez.
        """
        url = reverse('api_admin_aprovar', args=[self.pedido_id])

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'approved')

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 17)

    def test_recusar(self):
        response = self.client.post(reverse('api_admin_recusar', args=[self.pedido_id]))

        self.assertEqual(response.data['status'], 'failed')
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 20)

    def test_atualizar_status_pela_rota_de_status(self):
        url = reverse('api_pedido_status', args=[self.pedido_id])

        self.assertEqual(self.client.put(url, {'status': 'shipped'}, format='json').status_code,
                         status.HTTP_400_BAD_REQUEST)
        response = self.client.put(url, {'status': 'failed'}, format='json')
        self.assertEqual(response.data['status'], 'failed')

    def test_painel_exige_admin(self):
        self.client.force_authenticate(user=None)

        response = self.client.get(reverse('api_admin_pedidos'))

        self.assertIn(response.status_code, (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN))


class PedidoAdminActionsTestCase(TestCase):
    """Ações em lote do Django Admin passam pelo mesmo caso de uso da API."""

    def setUp(self):
        superuser = get_user_model().objects.create_superuser(
            username='root', email='root@exemplo.com', password='senha-forte-123'
        )
        self.client.force_login(superuser)
        self.produto = ProdutoModel.objects.create(
            titulo='Português', preco=Decimal('159.90'), estoque=30, categoria='Português'
        )
        self.pedido = pedido_repo.criar(Pedido(
            cliente=Cliente(**DADOS_CLIENTE),
            endereco=Endereco(**DADOS_ENDERECO),
            itens=[ItemPedido(self.produto.id, 'Português', Decimal('159.90'), 2)],
            metodo_pagamento=MetodoPagamento.PIX,
        ))

    def executar_acao(self, acao):
        return self.client.post(reverse('admin:vendas_pedido_changelist'), {
            'action': acao,
            '_selected_action': [self.pedido.id],
        })

    def test_acao_aprovar(self):
        response = self.executar_acao('aprovar_pedidos')

        self.assertEqual(response.status_code, 302)
        self.assertEqual(PedidoModel.objects.get(pk=self.pedido.id).status, 'approved')
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 28)

    def test_acao_em_pedido_terminal_nao_quebra_o_lote(self):
        self.executar_acao('recusar_pedidos')

        response = self.executar_acao('aprovar_pedidos')

        self.assertEqual(response.status_code, 302)
        self.assertEqual(PedidoModel.objects.get(pk=self.pedido.id).status, 'failed')
        self.produto.refresh_from_db()
        self.assertEqual(self.produto.estoque, 30)


@override_settings(CORS_ALLOWED_ORIGINS=['http://localhost:5173'])
class CorsAPITestCase(APITestCase):
    """O frontend roda em outra origem e precisa ler as respostas com o cookie de sessão."""

    ORIGEM_FRONTEND = 'http://localhost:5173'

    def test_get_da_origem_do_frontend(self):
        response = self.client.get(reverse('api_produtos'), HTTP_ORIGIN=self.ORIGEM_FRONTEND)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Access-Control-Allow-Origin'], self.ORIGEM_FRONTEND)
        self.assertEqual(response['Access-Control-Allow-Credentials'], 'true')

    def test_preflight_do_checkout(self):
        response = self.client.options(
            reverse('api_checkout'),
            HTTP_ORIGIN=self.ORIGEM_FRONTEND,
            HTTP_ACCESS_CONTROL_REQUEST_METHOD='POST',
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Access-Control-Allow-Origin'], self.ORIGEM_FRONTEND)
        self.assertIn('POST', response['Access-Control-Allow-Methods'])

    def test_origem_desconhecida_nao_recebe_cabecalho(self):
        response = self.client.get(reverse('api_produtos'), HTTP_ORIGIN='http://site-malicioso.example')

        self.assertNotIn('Access-Control-Allow-Origin', response)


class HealthCheckAPITestCase(APITestCase):

    @override_settings(AMBIENTE='test')
    def test_health(self):
        response = self.client.get(reverse('api_health'))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'OK')
        self.assertEqual(response.data['environment'], 'test')
        self.assertIn('timestamp', response.data)


class SessaoCarrinhoStorageTestCase(TestCase):

    def setUp(self):
        self.request = RequestFactory().get('/')
        self.request.session = SessionStore()
        self.storage = SessaoCarrinhoStorage(self.request)

    def test_carrinho_sobrevive_a_sessao(self):
        carrinho = Carrinho(itens=[ItemCarrinho(7, 'Português', Decimal('159.90'), 2, 30, 'Português')])

        self.storage.salvar(carrinho)

        self.assertEqual(SessaoCarrinhoStorage(self.request).carregar(), carrinho)
        self.assertEqual(self.request.session[SessaoCarrinhoStorage.SESSION_KEY][0]['preco_unitario'], '159.90')

    def test_salvar_vazio_limpa_a_sessao(self):
        self.storage.salvar(Carrinho(itens=[ItemCarrinho(7, 'Português', Decimal('159.90'), 1, 30)]))

        self.storage.salvar(Carrinho())

        self.assertNotIn(SessaoCarrinhoStorage.SESSION_KEY, self.request.session)
        self.assertTrue(self.storage.carregar().esta_vazio)
