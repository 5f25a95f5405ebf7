# compras/infra/repositories.py
"""
Repositórios (DAO) para acesso e manipulação de dados no SQLite.

Classes:
- ProdutoRepo
- CompraRepo

Ambos aceitam uma conexão compartilhada opcional (`conn`). Sem ela,
cada operação abre e fecha a própria conexão; com ela, o commit fica
a cargo de quem abriu a conexão.
"""

from __future__ import annotations

import sqlite3
from dataclasses import asdict, is_dataclass
from typing import Any, Dict, List, Optional

from .db import session
from .logger import log_database_operation
from compras.domain.models import Compra, ItemCompra, Produto


# -------------------------
# Helpers
# -------------------------

def _as_dict(row: Any) -> Dict[str, Any]:
    if isinstance(row, dict):
        return row
    if is_dataclass(row):
        return asdict(row)
    raise TypeError("row must be dict or dataclass")


def _row_to_produto(row: sqlite3.Row) -> Produto:
    return Produto(
        product_id=row["product_id"],
        nome=row["nome"],
        habilitado=bool(row["habilitado"]),
        em_estoque=row["em_estoque"],
        minimo=row["minimo"],
        maximo=row["maximo"],
    )


# -------------------------
# Produto
# -------------------------

class ProdutoRepo:
    def __init__(self, db_path: str, conn: Optional[sqlite3.Connection] = None):
        self.db_path = db_path
        self.conn = conn

    def find_by_id(self, product_id: int) -> Optional[Produto]:
        with session(self.db_path, self.conn) as c:
            row = c.execute(
                """SELECT product_id, nome, habilitado, em_estoque, minimo, maximo
                   FROM produto WHERE product_id = ?""",
                (product_id,),
            ).fetchone()
        return _row_to_produto(row) if row else None

    def find_all(self) -> List[Produto]:
        with session(self.db_path, self.conn) as c:
            cur = c.execute(
                """SELECT product_id, nome, habilitado, em_estoque, minimo, maximo
                   FROM produto ORDER BY product_id"""
            )
            return [_row_to_produto(r) for r in cur.fetchall()]

    def save(self, produto: Produto) -> Produto:
        """Upsert pelo product_id."""
        r = dict(_as_dict(produto))
        r["habilitado"] = 1 if r.get("habilitado") else 0
        with session(self.db_path, self.conn) as c:
            c.execute(
                """
                INSERT INTO produto
                    (product_id, nome, habilitado, em_estoque, minimo, maximo)
                VALUES
                    (:product_id, :nome, :habilitado, :em_estoque, :minimo, :maximo)
                ON CONFLICT(product_id) DO UPDATE SET
                    nome=excluded.nome,
                    habilitado=excluded.habilitado,
                    em_estoque=excluded.em_estoque,
                    minimo=excluded.minimo,
                    maximo=excluded.maximo
                """,
                r,
            )
        log_database_operation("produto", "UPSERT", 1, product_id=r["product_id"])
        return produto if isinstance(produto, Produto) else Produto(**_as_dict(produto))


# -------------------------
# Compra
# -------------------------

class CompraRepo:
    def __init__(self, db_path: str, conn: Optional[sqlite3.Connection] = None):
        self.db_path = db_path
        self.conn = conn

    def save(self, compra: Compra) -> Compra:
        """Insere o cabeçalho e os itens; preenche `compra.compra_id`."""
        with session(self.db_path, self.conn) as c:
            cur = c.execute(
                """
                INSERT INTO compra (data, tipo_id_cliente, id_cliente, nome_cliente)
                VALUES (?, ?, ?, ?)
                """,
                (compra.data, compra.tipo_id_cliente, compra.id_cliente, compra.nome_cliente),
            )
            compra.compra_id = cur.lastrowid
            c.executemany(
                "INSERT INTO compra_item (compra_id, product_id, quantidade) VALUES (?, ?, ?)",
                [(compra.compra_id, it.product_id, it.quantidade) for it in compra.itens],
            )
        log_database_operation("compra", "INSERT", 1, compra_id=compra.compra_id, itens=len(compra.itens))
        return compra

    def find_all(self) -> List[Compra]:
        with session(self.db_path, self.conn) as c:
            compras = [
                Compra(
                    data=r["data"],
                    tipo_id_cliente=r["tipo_id_cliente"],
                    id_cliente=r["id_cliente"],
                    nome_cliente=r["nome_cliente"],
                    compra_id=r["compra_id"],
                )
                for r in c.execute(
                    """SELECT compra_id, data, tipo_id_cliente, id_cliente, nome_cliente
                       FROM compra ORDER BY compra_id"""
                ).fetchall()
            ]
            por_id = {cp.compra_id: cp for cp in compras}
            for r in c.execute(
                "SELECT compra_id, product_id, quantidade FROM compra_item ORDER BY id"
            ).fetchall():
                compra = por_id.get(r["compra_id"])
                if compra is not None:
                    compra.itens.append(ItemCompra(r["product_id"], r["quantidade"]))
        return compras

    def delete(self, compra_id: int) -> None:
        """Remove a compra; os itens saem via ON DELETE CASCADE."""
        with session(self.db_path, self.conn) as c:
            cur = c.execute("DELETE FROM compra WHERE compra_id = ?", (compra_id,))
        log_database_operation("compra", "DELETE", cur.rowcount, compra_id=compra_id)
