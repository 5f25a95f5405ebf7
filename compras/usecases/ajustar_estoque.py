# compras/usecases/ajustar_estoque.py
"""
UC: Baixar do estoque as quantidades de uma compra já registrada.

Obs.:
- Cada item relê o produto (leitura independente da validação).
- Não é atômico entre itens: uma falha no item N mantém a baixa dos
  itens anteriores e propaga a exceção.
- Itens cujo produto não existe são ignorados.
"""

from __future__ import annotations

from typing import Iterable

from compras.domain.models import ItemCompra
from compras.infra.logger import log_compra
from compras.infra.repositories import ProdutoRepo


class AjustadorEstoque:
    def __init__(self, produtos: ProdutoRepo):
        self.produtos = produtos

    def deduzir(self, itens: Iterable[ItemCompra]) -> None:
        for item in itens:
            produto = self.produtos.find_by_id(item.product_id)
            if produto is None:
                log_compra("ignorado", item.product_id, item.quantidade, etapa="baixa")
                continue
            anterior = produto.em_estoque
            produto.em_estoque = anterior - item.quantidade
            self.produtos.save(produto)
            log_compra("baixa", item.product_id, item.quantidade,
                       estoque_anterior=anterior, estoque_atual=produto.em_estoque)
