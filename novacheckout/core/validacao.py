"""
Validação dos dados de checkout. Roda antes de qualquer acesso ao banco ou ao gateway.
"""
import re
from typing import Dict, Optional

from novacheckout.core.entities import Cliente, Endereco, MetodoPagamento
from novacheckout.core.exceptions import DadosInvalidosError

EMAIL_REGEX = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def somente_digitos(valor: Optional[str]) -> str:
    return re.sub(r'\D', '', valor or '')


def _vazio(valor: Optional[str]) -> bool:
    return not (valor or '').strip()


def validar_dados_checkout(
    cliente: Cliente,
    endereco: Endereco,
    metodo_pagamento,
    numero_cartao: Optional[str] = None,
) -> None:
    """Levanta DadosInvalidosError com as mensagens por campo, se houver alguma."""
    erros: Dict[str, str] = {}

    if _vazio(cliente.nome):
        erros['nome'] = 'Nome é obrigatório'

    if _vazio(cliente.email):
        erros['email'] = 'Email é obrigatório'
    elif not EMAIL_REGEX.match(cliente.email.strip()):
        erros['email'] = 'Email inválido'

    telefone = somente_digitos(cliente.telefone)
    if not telefone:
        erros['telefone'] = 'Telefone é obrigatório'
    elif len(telefone) < 10:
        erros['telefone'] = 'Telefone inválido. Deve ter 10 ou 11 dígitos.'

    cpf = somente_digitos(cliente.cpf)
    if not cpf:
        erros['cpf'] = 'CPF é obrigatório'
    elif len(cpf) != 11:
        erros['cpf'] = 'CPF deve conter 11 dígitos.'

    obrigatorios = (
        ('rua', endereco.rua, 'Rua é obrigatória'),
        ('numero', endereco.numero, 'Número é obrigatório'),
        ('bairro', endereco.bairro, 'Bairro é obrigatório'),
        ('cidade', endereco.cidade, 'Cidade é obrigatória'),
        ('estado', endereco.estado, 'Estado é obrigatório'),
    )
    for campo, valor, mensagem in obrigatorios:
        if _vazio(valor):
            erros[campo] = mensagem

    cep = somente_digitos(endereco.cep)
    if not cep:
        erros['cep'] = 'CEP é obrigatório'
    elif len(cep) != 8:
        erros['cep'] = 'CEP deve conter 8 dígitos.'

    try:
        metodo = MetodoPagamento(metodo_pagamento)
    except ValueError:
        metodo = None
        erros['metodo_pagamento'] = 'Método de pagamento inválido.'

    if metodo is MetodoPagamento.CARTAO:
        cartao = somente_digitos(numero_cartao)
        if not cartao:
            erros['numero_cartao'] = 'Número do cartão é obrigatório'
        elif len(cartao) != 16:
            erros['numero_cartao'] = 'Cartão deve conter 16 dígitos.'

    if erros:
        raise DadosInvalidosError("Verifique os campos do formulário.", erros=erros)


def validar_baixas(baixas) -> None:
    """Quantidades vendidas precisam ser inteiros não negativos."""
    for baixa in baixas:
        if not isinstance(baixa.quantidade_vendida, int) or baixa.quantidade_vendida < 0:
            raise DadosInvalidosError(
                f"Quantidade vendida inválida para o produto {baixa.produto_id}.",
                erros={'quantidade_vendida': 'Deve ser um inteiro maior ou igual a zero.'},
            )
