import pytest

from compras.domain.models import Produto
from compras.domain.policies import Motivo, REGRAS, primeira_violacao


def _produto(**kw):
    base = dict(product_id=1, nome="Caneta", habilitado=True, em_estoque=10, minimo=2, maximo=5)
    base.update(kw)
    return Produto(**base)


@pytest.mark.parametrize("qtd", [2, 3, 5])
def test_quantidade_dentro_dos_limites_e_valida(qtd):
    assert primeira_violacao(_produto(), qtd) is None


@pytest.mark.parametrize(
    "qtd,esperado",
    [
        (1, Motivo.ABAIXO_MINIMO),   # um abaixo do mínimo
        (6, Motivo.EXCEDE_MAXIMO),   # um acima do máximo
        (11, Motivo.EXCEDE_ESTOQUE),
    ],
)
def test_limites_sao_inclusivos(qtd, esperado):
    assert primeira_violacao(_produto(), qtd) == esperado


def test_produto_desabilitado_vence_todas_as_regras():
    p = _produto(habilitado=False, em_estoque=0)
    assert primeira_violacao(p, 100) == Motivo.NAO_DISPONIVEL
    assert primeira_violacao(_produto(habilitado=False), 3) == Motivo.NAO_DISPONIVEL


def test_estoque_insuficiente_antes_de_minimo_e_maximo():
    # quantidade 8: acima do estoque (7) e do máximo (5)
    assert primeira_violacao(_produto(em_estoque=7), 8) == Motivo.EXCEDE_ESTOQUE
    # quantidade 1: acima do estoque (0) e abaixo do mínimo (2)
    assert primeira_violacao(_produto(em_estoque=0), 1) == Motivo.EXCEDE_ESTOQUE


def test_minimo_antes_de_maximo_quando_limites_invertidos():
    p = _produto(minimo=5, maximo=2)
    assert primeira_violacao(p, 3) == Motivo.ABAIXO_MINIMO


def test_ordem_das_regras():
    assert [m for _, m in REGRAS] == [
        Motivo.NAO_DISPONIVEL,
        Motivo.EXCEDE_ESTOQUE,
        Motivo.ABAIXO_MINIMO,
        Motivo.EXCEDE_MAXIMO,
    ]


def test_mensagens():
    assert Motivo.NAO_DISPONIVEL.mensagem == "The product is not available"
    assert Motivo.EXCEDE_ESTOQUE.mensagem == "The amount requested is not in the inventory"
    assert Motivo.ABAIXO_MINIMO.mensagem == "The amount requested doesn't have the minimum to buy"
    assert Motivo.EXCEDE_MAXIMO.mensagem == "The amount requested exceeds the maximum allowed per buy"
