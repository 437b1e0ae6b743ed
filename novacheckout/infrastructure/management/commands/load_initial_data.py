from decimal import Decimal

from django.core.management.base import BaseCommand

from novacheckout.catalog.models import Produto
from novacheckout.vendas.models import Pedido as PedidoModel
from novacheckout.core.entities import (
    Pedido, Cliente, Endereco, ItemPedido, MetodoPagamento, agora_em_ms
)
from novacheckout.infrastructure.instances import pedido_repo

# (título, preço, estoque, status, categoria, semente da imagem, descrição)
PRODUTOS_INICIAIS = [
    ('Administração Pública e Gerencial', Decimal('199.90'), 0, 'Inativo', 'Administração', 'admin',
     'Curso completo de Administração Pública com foco em gestão gerencial e políticas públicas.'),
    ('Contabilidade Geral e Pública', Decimal('229.90'), 5, 'Inativo', 'Contabilidade', 'contabil',
     'Fundamentos de contabilidade geral e aplicada ao setor público para concursos.'),
    ('Curso Preparatório - Analista de Sistemas', Decimal('299.90'), 10, 'Ativo', 'Tecnologia', 'tech',
     'Preparatório para cargos de Analista de Sistemas: desenvolvimento, banco de dados e redes.'),
    ('Direito Constitucional - Teoria e Prática', Decimal('249.90'), 15, 'Ativo', 'Direito', 'direito',
     'Teoria e questões comentadas de Direito Constitucional para as principais bancas.'),
    ('Matemática para Concursos - Nível Superior', Decimal('189.90'), 20, 'Ativo', 'Matemática', 'mat',
     'Matemática básica e avançada com resolução de provas anteriores.'),
    ('Português - Gramática e Interpretação', Decimal('159.90'), 30, 'Ativo', 'Português', 'port',
     'Gramática, interpretação de textos e redação oficial.'),
    ('Raciocínio Lógico - Método Avançado', Decimal('149.90'), 25, 'Ativo', 'Raciocínio Lógico', 'logica',
     'Lógica proposicional, sequências e problemas com método de resolução rápida.'),
]


class Command(BaseCommand):
    help = 'Carrega os cursos iniciais e um pedido pendente de exemplo'

    def handle(self, *args, **kwargs):
        self.stdout.write('Criando dados iniciais...')

        primeiro = None
        for titulo, preco, estoque, status, categoria, semente, descricao in PRODUTOS_INICIAIS:
            produto, created = Produto.objects.get_or_create(
                titulo=titulo,
                defaults={
                    'preco': preco,
                    'estoque': estoque,
                    'status': status,
                    'categoria': categoria,
                    'imagem': f'https://picsum.photos/seed/{semente}/400/300',
                    'descricao': descricao,
                }
            )
            primeiro = primeiro or produto
            if created:
                self.stdout.write(self.style.SUCCESS(f'Criado produto "{produto.titulo}"'))

        if PedidoModel.objects.filter(status='pending').exists():
            self.stdout.write('Já existe pedido pendente; pedido inicial não criado.')
            return

        item = ItemPedido(
            produto_id=primeiro.id,
            titulo=primeiro.titulo,
            preco_unitario=primeiro.preco,
            quantidade=1,
            categoria=primeiro.categoria,
            imagem=primeiro.imagem,
            estoque_disponivel=primeiro.estoque,
        )
        pedido = pedido_repo.criar(Pedido(
            id=f'init-order-{agora_em_ms()}',
            cliente=Cliente(
                nome='Guilherme',
                email='guilhermeteste@eduqi.com',
                telefone='',
                cpf='12345678901',
            ),
            endereco=Endereco(
                rua='Rua Teste',
                numero='99',
                bairro='Bairro',
                cidade='Cidade',
                estado='ST',
                cep='00000-000',
            ),
            itens=[item],
            metodo_pagamento=MetodoPagamento.CARTAO,
            total=Pedido.calcular_total([item]),
        ))
        self.stdout.write(self.style.SUCCESS(f'Criado pedido pendente "{pedido.id}"'))
        self.stdout.write(self.style.SUCCESS('Dados iniciais carregados com sucesso!'))
