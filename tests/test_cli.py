import json
from pathlib import Path

from typer.testing import CliRunner

from compras.adapters.cli import app
from compras.domain.models import Produto
from compras.infra.repositories import ProdutoRepo

runner = CliRunner()


def _prepare(tmp_path: Path) -> str:
    db_path = str(tmp_path / "compras_test.sqlite")
    result = runner.invoke(app, ["migrate", "--db", db_path])
    assert result.exit_code == 0, result.output
    repo = ProdutoRepo(db_path)
    repo.save(Produto(1, "Caneta", True, 10, 1, 5))
    repo.save(Produto(2, "Lápis", True, 5, 1, 5))
    return db_path


def _pedido_json(tmp_path: Path, itens) -> str:
    path = tmp_path / "pedido.json"
    path.write_text(json.dumps({
        "date": "2024-03-01",
        "clientIdType": "CC",
        "clientId": "1032456",
        "clientName": "Ana Souza",
        "products": [{"productId": pid, "quantity": qtd} for pid, qtd in itens],
    }), encoding="utf-8")
    return str(path)


def test_cli_comprar_e_listar(tmp_path: Path):
    db_path = _prepare(tmp_path)

    result = runner.invoke(app, ["comprar", _pedido_json(tmp_path, [(1, 3), (2, 2)]), "--db", db_path])
    assert result.exit_code == 0, result.output
    assert "Compra registrada" in result.output

    result = runner.invoke(app, ["compras", "listar", "--db", db_path, "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert len(data) == 1
    assert data[0]["nome_cliente"] == "Ana Souza"
    assert data[0]["produtos"] == [
        {"product_id": 1, "nome": "Caneta", "quantidade": 3},
        {"product_id": 2, "nome": "Lápis", "quantidade": 2},
    ]

    result = runner.invoke(app, ["produtos", "listar", "--db", db_path, "--json"])
    estoque = {p["product_id"]: p["em_estoque"] for p in json.loads(result.stdout)}
    assert estoque == {1: 7, 2: 3}


def test_cli_comprar_rejeitada(tmp_path: Path):
    db_path = _prepare(tmp_path)

    result = runner.invoke(app, ["comprar", _pedido_json(tmp_path, [(1, 6)]), "--db", db_path])
    assert result.exit_code == 1
    assert "The amount requested exceeds the maximum allowed per buy" in result.output


def test_cli_comprar_pedido_invalido(tmp_path: Path):
    db_path = _prepare(tmp_path)
    path = tmp_path / "pedido.json"
    path.write_text("[", encoding="utf-8")

    result = runner.invoke(app, ["comprar", str(path), "--db", db_path])
    assert result.exit_code == 2


def test_cli_comprar_planilha(tmp_path: Path):
    import pandas as pd

    db_path = _prepare(tmp_path)
    xlsx = tmp_path / "itens.xlsx"
    pd.DataFrame({"Código": ["2"], "Quantidade": ["5"]}).to_excel(xlsx, index=False)

    result = runner.invoke(app, [
        "comprar-planilha", str(xlsx),
        "--id-cliente", "900123",
        "--nome-cliente", "Papelaria Central",
        "--data", "02/03/2024",
        "--transacional",
        "--db", db_path,
    ])
    assert result.exit_code == 0, result.output
    assert ProdutoRepo(db_path).find_by_id(2).em_estoque == 0


def test_cli_listas_vazias(tmp_path: Path):
    db_path = str(tmp_path / "vazio.sqlite")
    runner.invoke(app, ["migrate", "--db", db_path])

    result = runner.invoke(app, ["compras", "listar", "--db", db_path])
    assert result.exit_code == 0, result.output
    assert "Nenhuma compra registrada" in result.output
