# compras/infra/migrations.py
"""
Migrações de schema usando PRAGMA user_version.

V1: produto, compra e itens da compra
V2: índice de itens por produto
"""

from __future__ import annotations

from typing import List
from .db import connect


SCHEMA_V1: List[str] = [
    # Catálogo de produtos
    """
    CREATE TABLE IF NOT EXISTS produto (
        product_id INTEGER PRIMARY KEY,
        nome TEXT,
        habilitado INTEGER NOT NULL DEFAULT 1,
        em_estoque INTEGER NOT NULL DEFAULT 0,
        minimo INTEGER NOT NULL DEFAULT 1,
        maximo INTEGER NOT NULL DEFAULT 1
    );
    """,
    # Cabeçalho da compra
    """
    CREATE TABLE IF NOT EXISTS compra (
        compra_id INTEGER PRIMARY KEY AUTOINCREMENT,
        data TEXT,
        tipo_id_cliente TEXT,
        id_cliente TEXT,
        nome_cliente TEXT
    );
    """,
    # Itens da compra (removidos junto com a compra).
    # product_id sem FK: itens de produtos inexistentes são gravados mesmo assim.
    """
    CREATE TABLE IF NOT EXISTS compra_item (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        compra_id INTEGER NOT NULL,
        product_id INTEGER NOT NULL,
        quantidade INTEGER NOT NULL,
        FOREIGN KEY (compra_id) REFERENCES compra(compra_id) ON DELETE CASCADE
    );
    """,
]

SCHEMA_V2: List[str] = [
    "CREATE INDEX IF NOT EXISTS idx_compra_item_compra ON compra_item(compra_id);",
    "CREATE INDEX IF NOT EXISTS idx_compra_item_produto ON compra_item(product_id);",
]


def _apply(conn, scripts: List[str]) -> None:
    for sql in scripts:
        conn.executescript(sql)


def apply_migrations(db_path: str) -> None:
    """Aplica migrações incrementais de acordo com PRAGMA user_version."""
    with connect(db_path) as conn:
        ver = conn.execute("PRAGMA user_version;").fetchone()[0] or 0

        if ver < 1:
            _apply(conn, SCHEMA_V1)
            conn.execute("PRAGMA user_version = 1;")
            ver = 1

        if ver < 2:
            _apply(conn, SCHEMA_V2)
            conn.execute("PRAGMA user_version = 2;")
            ver = 2
