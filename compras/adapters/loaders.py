# compras/adapters/loaders.py
"""
Loaders de pedidos de compra (JSON) e de itens de compra (XLSX).

Essas funções:
- leem o pedido de um JSON ou os itens de uma planilha XLSX (pandas);
- aceitam tanto as chaves em português quanto as chaves camelCase do
  formato antigo (date, clientIdType, clientId, clientName, products,
  productId, quantity);
- normalizam cabeçalhos da planilha (acentos, variações, sinônimos);
- devolvem `PedidoCompra` / `ItemCompra` prontos para o caso de uso.

Entradas malformadas (JSON inválido, item sem produto, quantidade não
inteira) geram ValueError.
"""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from compras.config import DEFAULTS
from compras.domain.models import ItemCompra, PedidoCompra
from compras.infra.logger import log_file_operation


# ---------------------------
# utilitários de normalização
# ---------------------------

_ALIASES_PEDIDO = {
    "data": ("data", "date"),
    "tipo_id_cliente": ("tipo_id_cliente", "clientIdType"),
    "id_cliente": ("id_cliente", "clientId"),
    "nome_cliente": ("nome_cliente", "clientName"),
    "itens": ("itens", "products"),
}

_ALIASES_ITEM = {
    "product_id": ("product_id", "productId"),
    "quantidade": ("quantidade", "quantity"),
}

_ALIASES_COLUNAS = {
    "codigo": "product_id",
    "cod": "product_id",
    "id": "product_id",
    "produto": "product_id",
    "product id": "product_id",
    "productid": "product_id",

    "quantidade": "quantidade",
    "qtde": "quantidade",
    "qtd": "quantidade",
    "quantity": "quantidade",
}


def _slug(s: str) -> str:
    """Normaliza cabeçalhos: minúsculas, sem acentos, sem não-alfanumérico."""
    if s is None:
        return ""
    s = str(s).strip().lower()
    acentos = dict(zip("áàâãäéèêëíìîïóòôõöúùûüç", "aaaaaeeeeiiiiooooouuuuc"))
    s = "".join(acentos.get(ch, ch) for ch in s)
    s = re.sub(r"[^a-z0-9]+", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def _pick(d: Dict[str, Any], keys) -> Any:
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return None


def _normalize_str(x: Any) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def _to_int(val: Any, campo: str) -> int:
    """Converte para int aceitando '3', '3.0' e 3.0; rejeita frações e texto."""
    if val is None or isinstance(val, bool):
        raise ValueError(f"{campo} ausente ou inválido: {val!r}")
    try:
        num = float(str(val).strip().replace(",", "."))
    except ValueError:
        raise ValueError(f"{campo} não numérico: {val!r}") from None
    if not num.is_integer():
        raise ValueError(f"{campo} deve ser inteiro: {val!r}")
    return int(num)


def to_date_iso(val: Any) -> Optional[str]:
    """Converte para data ISO (YYYY-MM-DD) quando possível; senão mantém o texto."""
    s = _normalize_str(val)
    if s is None:
        return None
    for fmt in ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%d/%m/%y"):
        try:
            return datetime.strptime(s, fmt).date().isoformat()
        except ValueError:
            continue
    d = pd.to_datetime(s, dayfirst=True, errors="coerce")
    if pd.isna(d):
        return s
    return d.date().isoformat()


# ---------------------------
# pedidos (dict / JSON)
# ---------------------------

def item_from_dict(d: Dict[str, Any]) -> ItemCompra:
    if not isinstance(d, dict):
        raise ValueError(f"item de compra inválido: {d!r}")
    return ItemCompra(
        product_id=_to_int(_pick(d, _ALIASES_ITEM["product_id"]), "product_id"),
        quantidade=_to_int(_pick(d, _ALIASES_ITEM["quantidade"]), "quantidade"),
    )


def pedido_from_dict(d: Dict[str, Any]) -> PedidoCompra:
    """Monta um PedidoCompra a partir de um dict (chaves PT ou camelCase)."""
    if not isinstance(d, dict):
        raise ValueError("pedido deve ser um objeto JSON")
    itens = _pick(d, _ALIASES_PEDIDO["itens"]) or []
    if not isinstance(itens, list):
        raise ValueError("itens deve ser uma lista")
    return PedidoCompra(
        data=to_date_iso(_pick(d, _ALIASES_PEDIDO["data"])),
        tipo_id_cliente=_normalize_str(_pick(d, _ALIASES_PEDIDO["tipo_id_cliente"])) or DEFAULTS.tipo_id_cliente,
        id_cliente=_normalize_str(_pick(d, _ALIASES_PEDIDO["id_cliente"])),
        nome_cliente=_normalize_str(_pick(d, _ALIASES_PEDIDO["nome_cliente"])),
        itens=[item_from_dict(i) for i in itens],
    )


def load_pedido_from_json(path: str) -> PedidoCompra:
    """Lê um pedido de compra de um arquivo JSON."""
    log_file_operation("import", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON inválido em {path}: {e}") from e
    pedido = pedido_from_dict(data)
    log_file_operation("import", path, rows_processed=len(pedido.itens))
    return pedido


# ---------------------------
# itens (XLSX)
# ---------------------------

def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Renomeia colunas com base em sinônimos/variações."""
    new_cols = {}
    for col in df.columns:
        key = _slug(col)
        new_cols[col] = _ALIASES_COLUNAS.get(key, key)
    return df.rename(columns=new_cols)


def load_itens_from_xlsx(path: str) -> List[ItemCompra]:
    """Lê XLSX de itens (colunas código/produto e quantidade).

    Linhas totalmente vazias são descartadas; linhas com produto ou
    quantidade ausente geram ValueError com o número da linha.
    """
    log_file_operation("import", path)
    df = pd.read_excel(path, dtype="string")
    df = _normalize_columns(df)
    for col in ("product_id", "quantidade"):
        if col not in df.columns:
            raise ValueError(f"coluna obrigatória ausente na planilha: {col}")
    df = df.dropna(how="all")

    out: List[ItemCompra] = []
    for idx, row in df.iterrows():
        linha = int(idx) + 2  # cabeçalho é a linha 1
        pid = row.get("product_id")
        qtd = row.get("quantidade")
        pid = None if pd.isna(pid) else pid
        qtd = None if pd.isna(qtd) else qtd
        try:
            out.append(ItemCompra(_to_int(pid, "product_id"), _to_int(qtd, "quantidade")))
        except ValueError as e:
            raise ValueError(f"linha {linha}: {e}") from e
    log_file_operation("import", path, rows_processed=len(out))
    return out
