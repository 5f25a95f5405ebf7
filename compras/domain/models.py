# compras/domain/models.py
"""
Modelos (dataclasses) do domínio de compras.

Observação importante:
- Os itens de uma compra referenciam o produto apenas pelo id; nome e
  demais dados do produto não são copiados no momento da compra.
- `DetalheCompra` e `CompraResumo` são projeções de leitura usadas na
  listagem, não são persistidas.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Produto:
    """Registro de produto do catálogo."""
    product_id: int
    nome: Optional[str] = None
    habilitado: bool = True
    em_estoque: int = 0          # não há restrição de não-negatividade
    minimo: int = 1              # quantidade mínima por compra
    maximo: int = 1              # quantidade máxima por compra


@dataclass(frozen=True)
class ItemCompra:
    """Par (produto, quantidade) solicitado em uma compra."""
    product_id: int
    quantidade: int


@dataclass
class Compra:
    """Compra registrada: cabeçalho do cliente + itens."""
    data: Optional[str]
    tipo_id_cliente: Optional[str]
    id_cliente: Optional[str]
    nome_cliente: Optional[str]
    itens: List[ItemCompra] = field(default_factory=list)
    compra_id: Optional[int] = None


@dataclass
class PedidoCompra:
    """Pedido de compra recebido de um adapter (CLI, JSON, planilha)."""
    data: Optional[str]
    tipo_id_cliente: Optional[str]
    id_cliente: Optional[str]
    nome_cliente: Optional[str]
    itens: List[ItemCompra] = field(default_factory=list)


@dataclass
class DetalheCompra:
    product_id: int
    nome: Optional[str]
    quantidade: int


@dataclass
class CompraResumo:
    data: Optional[str]
    tipo_id_cliente: Optional[str]
    id_cliente: Optional[str]
    nome_cliente: Optional[str]
    produtos: List[DetalheCompra] = field(default_factory=list)
