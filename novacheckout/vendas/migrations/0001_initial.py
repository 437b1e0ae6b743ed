import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Pedido',
            fields=[
                ('id', models.CharField(editable=False, max_length=64, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('pending', 'Pendente'), ('approved', 'Aprovado'), ('failed', 'Falhou')], db_index=True, default='pending', max_length=10)),
                ('data_criacao', models.DateTimeField()),
                ('data_modificacao', models.DateTimeField(auto_now=True)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('metodo_pagamento', models.CharField(choices=[('card', 'Cartão de Crédito'), ('pix', 'PIX')], max_length=10)),
                ('transacao_id', models.CharField(blank=True, max_length=100, null=True)),
                ('cliente_nome', models.CharField(max_length=255)),
                ('cliente_email', models.EmailField(max_length=254)),
                ('cliente_telefone', models.CharField(max_length=20)),
                ('cliente_cpf', models.CharField(max_length=14)),
                ('rua', models.CharField(max_length=255)),
                ('numero', models.CharField(max_length=20)),
                ('complemento', models.CharField(blank=True, max_length=100, null=True)),
                ('bairro', models.CharField(max_length=100)),
                ('cidade', models.CharField(max_length=100)),
                ('estado', models.CharField(max_length=2)),
                ('cep', models.CharField(max_length=9)),
            ],
            options={
                'verbose_name': 'Pedido',
                'verbose_name_plural': 'Pedidos',
                'db_table': 'vendas_pedido',
                'ordering': ['-data_criacao'],
            },
        ),
        migrations.CreateModel(
            name='ItemPedido',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('titulo', models.CharField(max_length=255)),
                ('preco_unitario', models.DecimalField(decimal_places=2, max_digits=10)),
                ('quantidade', models.PositiveIntegerField()),
                ('categoria', models.CharField(blank=True, max_length=100)),
                ('imagem', models.URLField(blank=True, max_length=500)),
                ('estoque_disponivel', models.PositiveIntegerField(default=0)),
                ('pedido', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='itens', to='vendas.pedido')),
                ('produto', models.ForeignKey(db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING, related_name='itens_venda', to='catalog.produto')),
            ],
            options={
                'verbose_name': 'Item do Pedido',
                'verbose_name_plural': 'Itens do Pedido',
                'db_table': 'vendas_item_pedido',
                'ordering': ['id'],
            },
        ),
    ]
