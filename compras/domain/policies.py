"""
Regras de negócio aplicadas a cada item de uma compra.

Este módulo contém a lista ordenada de regras (predicado → motivo) usada
pela validação de compras. A ordem das regras define qual motivo é
reportado quando um item viola mais de uma regra: a primeira que falhar
é a única reportada.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Tuple

from compras.domain.models import Produto


class Motivo(Enum):
    """Motivos de rejeição de uma compra, com a mensagem exibida ao cliente."""

    NAO_DISPONIVEL = "The product is not available"
    EXCEDE_ESTOQUE = "The amount requested is not in the inventory"
    ABAIXO_MINIMO = "The amount requested doesn't have the minimum to buy"
    EXCEDE_MAXIMO = "The amount requested exceeds the maximum allowed per buy"

    @property
    def mensagem(self) -> str:
        return self.value


Regra = Tuple[Callable[[Produto, int], bool], Motivo]

# Ordem fixa: disponibilidade, estoque, mínimo, máximo.
REGRAS: List[Regra] = [
    (lambda p, qtd: not p.habilitado, Motivo.NAO_DISPONIVEL),
    (lambda p, qtd: qtd > p.em_estoque, Motivo.EXCEDE_ESTOQUE),
    (lambda p, qtd: qtd < p.minimo, Motivo.ABAIXO_MINIMO),
    (lambda p, qtd: qtd > p.maximo, Motivo.EXCEDE_MAXIMO),
]


def primeira_violacao(produto: Produto, quantidade: int) -> Optional[Motivo]:
    """Retorna o primeiro motivo violado por um item, ou ``None``.

    Regras, avaliadas nesta ordem:
        - produto desabilitado → ``NAO_DISPONIVEL``
        - ``quantidade > em_estoque`` → ``EXCEDE_ESTOQUE``
        - ``quantidade < minimo`` → ``ABAIXO_MINIMO``
        - ``quantidade > maximo`` → ``EXCEDE_MAXIMO``

    Os limites ``minimo`` e ``maximo`` são inclusivos.

    Args:
        produto: Produto do catálogo no estado atual.
        quantidade: Quantidade solicitada do produto.

    Returns:
        O ``Motivo`` da primeira regra violada, ou ``None`` se o item
        atende a todas as regras.
    """
    for violada, motivo in REGRAS:
        if violada(produto, quantidade):
            return motivo
    return None
