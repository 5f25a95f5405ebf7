import json

import pandas as pd
import pytest

from compras.adapters.loaders import (
    load_itens_from_xlsx,
    load_pedido_from_json,
    pedido_from_dict,
    to_date_iso,
)
from compras.domain.models import ItemCompra


def test_pedido_com_chaves_em_portugues():
    pedido = pedido_from_dict({
        "data": "01/03/2024",
        "tipo_id_cliente": "CC",
        "id_cliente": " 1032456 ",
        "nome_cliente": "Ana Souza",
        "itens": [{"product_id": 1, "quantidade": 3}, {"product_id": "2", "quantidade": "2"}],
    })
    assert pedido.data == "2024-03-01"
    assert pedido.id_cliente == "1032456"
    assert pedido.itens == [ItemCompra(1, 3), ItemCompra(2, 2)]


def test_pedido_com_chaves_do_formato_antigo():
    pedido = pedido_from_dict({
        "date": "2024-03-01",
        "clientIdType": "NIT",
        "clientId": "900123",
        "clientName": "Papelaria Central",
        "products": [{"productId": 7, "quantity": 4.0}],
    })
    assert pedido.tipo_id_cliente == "NIT"
    assert pedido.nome_cliente == "Papelaria Central"
    assert pedido.itens == [ItemCompra(7, 4)]


def test_tipo_id_cliente_padrao():
    assert pedido_from_dict({"itens": []}).tipo_id_cliente == "CC"


@pytest.mark.parametrize(
    "item",
    [
        {"product_id": 1},
        {"quantidade": 1},
        {"product_id": 1, "quantidade": 2.5},
        {"product_id": "abc", "quantidade": 1},
        {"product_id": 1, "quantidade": True},
        "1x2",
    ],
)
def test_item_malformado(item):
    with pytest.raises(ValueError):
        pedido_from_dict({"itens": [item]})


def test_itens_precisa_ser_lista():
    with pytest.raises(ValueError):
        pedido_from_dict({"itens": {"product_id": 1}})


def test_data_sem_formato_conhecido_e_mantida():
    assert to_date_iso("ontem") == "ontem"
    assert to_date_iso("  ") is None


def test_load_pedido_from_json(tmp_path):
    path = tmp_path / "pedido.json"
    path.write_text(json.dumps({"nome_cliente": "Ana", "itens": [{"product_id": 1, "quantidade": 2}]}), encoding="utf-8")
    pedido = load_pedido_from_json(str(path))
    assert pedido.nome_cliente == "Ana"
    assert pedido.itens == [ItemCompra(1, 2)]


def test_load_pedido_json_invalido(tmp_path):
    path = tmp_path / "pedido.json"
    path.write_text("{nao e json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_pedido_from_json(str(path))


def test_load_itens_from_xlsx_normaliza_cabecalhos(tmp_path):
    path = tmp_path / "itens.xlsx"
    pd.DataFrame({"Código": ["1", "2", None], "Qtde": ["3", "2", None]}).to_excel(path, index=False)

    assert load_itens_from_xlsx(str(path)) == [ItemCompra(1, 3), ItemCompra(2, 2)]


def test_load_itens_from_xlsx_sem_coluna_quantidade(tmp_path):
    path = tmp_path / "itens.xlsx"
    pd.DataFrame({"Produto": ["1"]}).to_excel(path, index=False)
    with pytest.raises(ValueError, match="quantidade"):
        load_itens_from_xlsx(str(path))


def test_load_itens_from_xlsx_linha_incompleta(tmp_path):
    path = tmp_path / "itens.xlsx"
    pd.DataFrame({"Produto": ["1", "2"], "Quantidade": ["1", None]}).to_excel(path, index=False)
    with pytest.raises(ValueError, match="linha 3"):
        load_itens_from_xlsx(str(path))
