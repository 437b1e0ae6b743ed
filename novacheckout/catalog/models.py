from django.db import models

# ====================================================================
# Produto (Curso)
# ====================================================================

class Produto(models.Model):
    """Modelo para representar um produto (curso) no catálogo."""

    STATUS_ATIVO = 'Ativo'
    STATUS_INATIVO = 'Inativo'
    STATUS_CHOICES = [
        (STATUS_ATIVO, 'Ativo'),
        (STATUS_INATIVO, 'Inativo'),
    ]

    titulo = models.CharField(max_length=255, verbose_name="Título")
    descricao = models.TextField(blank=True, null=True, verbose_name="Descrição")
    categoria = models.CharField(max_length=100, verbose_name="Categoria")
    imagem = models.URLField(max_length=500, blank=True, verbose_name="Imagem")

    # Preço, Estoque e Disponibilidade
    preco = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="Preço de Venda")
    estoque = models.PositiveIntegerField(default=0, verbose_name="Estoque Atual")
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ATIVO)

    # Datas
    data_criacao = models.DateTimeField(auto_now_add=True)
    data_atualizacao = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ['-data_criacao', '-id']
        db_table = 'catalogo_produto'

    def __str__(self):
        return self.titulo

    @property
    def disponivel_para_compra(self):
        return self.status == self.STATUS_ATIVO and self.estoque > 0
