# compras/adapters/cli.py
"""
CLI do módulo de compras (Typer).

Comandos principais:
- migrate                    -> aplica migrações
- comprar <pedido.json>      -> registra uma compra a partir de um JSON
- comprar-planilha <xlsx>    -> registra uma compra com itens de um XLSX
- compras listar             -> lista as compras registradas
- produtos listar            -> mostra o catálogo (somente leitura)
- logs [tipo]                -> mostra as últimas linhas de um log

Códigos de saída de `comprar`/`comprar-planilha`:
  0 = compra registrada, 1 = compra rejeitada, 2 = erro (entrada inválida ou falha interna)
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from compras.config import DB_PATH, DEFAULTS
from compras.adapters.loaders import load_itens_from_xlsx, load_pedido_from_json, to_date_iso
from compras.domain.models import CompraResumo, PedidoCompra, Produto
from compras.infra.logger import get_log_summary
from compras.infra.migrations import apply_migrations
from compras.infra.repositories import ProdutoRepo
from compras.usecases.registrar_compra import (
    REJEITADA,
    SUCESSO,
    ResultadoCompra,
    listar_compras,
    registrar_compra,
)


app = typer.Typer(help="Compras de Estoque — CLI")
console = Console()

EXIT_REJEITADA = 1
EXIT_ERRO = 2


# -----------------------
# util
# -----------------------

def _print_json(obj) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2))


def _display_compras(compras: List[CompraResumo]) -> None:
    if not compras:
        console.print(Panel("Nenhuma compra registrada", title="Compras", border_style="yellow"))
        return

    table = Table(title="Compras", box=box.ROUNDED)
    for col in ["data", "tipo_id", "id_cliente", "cliente", "produto", "nome", "quantidade"]:
        table.add_column(col, justify="right" if col == "quantidade" else "left")

    for c in compras:
        # Cabeçalho só na primeira linha de cada compra
        cabecalho = [c.data or "", c.tipo_id_cliente or "", c.id_cliente or "", c.nome_cliente or ""]
        if not c.produtos:
            table.add_row(*cabecalho, "", "", "")
        for i, p in enumerate(c.produtos):
            prefixo = cabecalho if i == 0 else ["", "", "", ""]
            table.add_row(*prefixo, str(p.product_id), p.nome or "?", str(p.quantidade))
        table.add_section()

    console.print(table)


def _display_produtos(produtos: List[Produto]) -> None:
    if not produtos:
        console.print(Panel("Nenhum produto cadastrado", title="Produtos", border_style="yellow"))
        return

    table = Table(title="Produtos", box=box.ROUNDED)
    table.add_column("id", justify="right")
    table.add_column("nome")
    table.add_column("disponível", justify="center")
    table.add_column("estoque", justify="right")
    table.add_column("mín", justify="right")
    table.add_column("máx", justify="right")
    for p in produtos:
        estoque = str(p.em_estoque)
        if p.em_estoque <= 0:
            estoque = f"[bold red]{estoque}[/]"
        table.add_row(
            str(p.product_id),
            p.nome or "",
            "[green]sim[/]" if p.habilitado else "[red]não[/]",
            estoque,
            str(p.minimo),
            str(p.maximo),
        )
    console.print(table)


def _finalizar(res: ResultadoCompra) -> None:
    """Imprime o resultado da compra e define o código de saída."""
    if res.status == SUCESSO:
        typer.echo(f">> Compra registrada (id {res.compra_id}).")
        return
    typer.echo(res.mensagem, err=True)
    raise typer.Exit(code=EXIT_REJEITADA if res.status == REJEITADA else EXIT_ERRO)


# -----------------------
# comandos de infra
# -----------------------

@app.command("migrate")
def cmd_migrate(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Aplica migrações do banco."""
    apply_migrations(db_path)
    typer.echo(f">> Migrações aplicadas em: {db_path}")


@app.command("logs")
def cmd_logs(
    tipo: str = typer.Argument("transactions", help="transactions | compras | database | system"),
    linhas: int = typer.Option(50, help="Número de linhas"),
):
    """Mostra as últimas linhas de um arquivo de log."""
    typer.echo(get_log_summary(tipo, lines=linhas))


# -----------------------
# comandos de compra
# -----------------------

@app.command("comprar")
def cmd_comprar(
    path: str = typer.Argument(..., help="Caminho do JSON do pedido"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
    transacional: bool = typer.Option(DEFAULTS.transacional, help="Grava compra e baixas numa única transação"),
):
    """Registra uma compra descrita em um arquivo JSON."""
    try:
        pedido = load_pedido_from_json(path)
    except (OSError, ValueError) as e:
        typer.echo(f"Pedido inválido: {e}", err=True)
        raise typer.Exit(code=EXIT_ERRO)
    _finalizar(registrar_compra(pedido, db_path=db_path, transacional=transacional))


@app.command("comprar-planilha")
def cmd_comprar_planilha(
    path: str = typer.Argument(..., help="Caminho do XLSX com os itens"),
    data: Optional[str] = typer.Option(None, help="Data da compra (YYYY-MM-DD ou DD/MM/AAAA)"),
    tipo_id_cliente: str = typer.Option(DEFAULTS.tipo_id_cliente, help="Tipo do documento do cliente"),
    id_cliente: str = typer.Option(..., help="Documento do cliente"),
    nome_cliente: str = typer.Option(..., help="Nome do cliente"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
    transacional: bool = typer.Option(DEFAULTS.transacional, help="Grava compra e baixas numa única transação"),
):
    """Registra uma compra com os itens lidos de um XLSX."""
    try:
        itens = load_itens_from_xlsx(path)
    except (OSError, ValueError) as e:
        typer.echo(f"Planilha inválida: {e}", err=True)
        raise typer.Exit(code=EXIT_ERRO)
    pedido = PedidoCompra(
        data=to_date_iso(data),
        tipo_id_cliente=tipo_id_cliente,
        id_cliente=id_cliente,
        nome_cliente=nome_cliente,
        itens=itens,
    )
    _finalizar(registrar_compra(pedido, db_path=db_path, transacional=transacional))


compras_app = typer.Typer(help="Consultar compras registradas.")
app.add_typer(compras_app, name="compras")


@compras_app.command("listar")
def cmd_compras_listar(
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Lista as compras com seus itens."""
    compras = listar_compras(db_path=db_path)
    if as_json:
        _print_json([asdict(c) for c in compras])
    else:
        _display_compras(compras)


produtos_app = typer.Typer(help="Consultar o catálogo de produtos.")
app.add_typer(produtos_app, name="produtos")


@produtos_app.command("listar")
def cmd_produtos_listar(
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
    as_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
):
    """Mostra os produtos com estoque e limites por compra."""
    produtos = ProdutoRepo(db_path).find_all()
    if as_json:
        _print_json([asdict(p) for p in produtos])
    else:
        _display_produtos(produtos)


# Entry point opcional:
def main():
    app()


if __name__ == "__main__":
    main()
