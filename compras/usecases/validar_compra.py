# compras/usecases/validar_compra.py
"""
UC: Validar os itens de um pedido de compra contra o catálogo.

- Percorre os itens na ordem do pedido e para no primeiro item inválido.
- Em cada item aplica as regras de `compras.domain.policies` na ordem
  fixa; só o primeiro motivo é reportado.
- Itens cujo produto não existe são ignorados (não invalidam o pedido).
- Somente leitura.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from compras.domain.models import ItemCompra
from compras.domain.policies import Motivo, primeira_violacao
from compras.infra.logger import log_compra
from compras.infra.repositories import ProdutoRepo


@dataclass(frozen=True)
class ResultadoValidacao:
    motivo: Optional[Motivo] = None

    @property
    def valido(self) -> bool:
        return self.motivo is None

    @classmethod
    def ok(cls) -> "ResultadoValidacao":
        return cls()

    @classmethod
    def invalido(cls, motivo: Motivo) -> "ResultadoValidacao":
        return cls(motivo=motivo)


class ValidadorCompra:
    def __init__(self, produtos: ProdutoRepo):
        self.produtos = produtos

    def validar(self, itens: Iterable[ItemCompra]) -> ResultadoValidacao:
        for item in itens:
            produto = self.produtos.find_by_id(item.product_id)
            if produto is None:
                # TODO: decidir se produto inexistente deve invalidar o pedido inteiro
                log_compra("ignorado", item.product_id, item.quantidade, etapa="validacao")
                continue
            motivo = primeira_violacao(produto, item.quantidade)
            if motivo is not None:
                log_compra("rejeitado", item.product_id, item.quantidade, motivo=motivo.name)
                return ResultadoValidacao.invalido(motivo)
        return ResultadoValidacao.ok()
