# compras/usecases/registrar_compra.py
"""
UC: Registrar uma compra e listar compras registradas.

- registrar_compra(pedido): valida os itens, grava a compra e baixa o
  estoque. Rejeições de validação voltam como resultado; falhas
  inesperadas são registradas no log e devolvidas como erro genérico.
- listar_compras(): projeção das compras com o nome atual de cada produto.

Modos:
- padrão (não transacional): cada leitura/gravação usa a própria conexão.
  Uma falha na baixa de estoque não desfaz a compra já gravada nem as
  baixas anteriores.
- transacional: validação, gravação e baixas compartilham uma conexão
  SQLite e são confirmadas ou desfeitas juntas.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import List, Optional

from compras.config import DB_PATH, DEFAULTS
from compras.domain.models import Compra, CompraResumo, DetalheCompra, PedidoCompra
from compras.domain.policies import Motivo
from compras.infra.db import connect
from compras.infra.logger import log_system_event, log_transaction
from compras.infra.repositories import CompraRepo, ProdutoRepo
from compras.usecases.ajustar_estoque import AjustadorEstoque
from compras.usecases.validar_compra import ValidadorCompra


ERRO_GENERICO = "Erro interno ao registrar a compra"

SUCESSO = "sucesso"
REJEITADA = "rejeitada"
ERRO = "erro"


@dataclass(frozen=True)
class ResultadoCompra:
    status: str
    motivo: Optional[Motivo] = None
    compra_id: Optional[int] = None

    @property
    def mensagem(self) -> Optional[str]:
        if self.status == REJEITADA:
            return self.motivo.mensagem
        if self.status == ERRO:
            return ERRO_GENERICO
        return None

    @classmethod
    def sucesso(cls, compra_id: Optional[int]) -> "ResultadoCompra":
        return cls(SUCESSO, compra_id=compra_id)

    @classmethod
    def rejeitada(cls, motivo: Motivo) -> "ResultadoCompra":
        return cls(REJEITADA, motivo=motivo)

    @classmethod
    def falha(cls) -> "ResultadoCompra":
        return cls(ERRO)


def _executar(pedido: PedidoCompra, produtos: ProdutoRepo, compras: CompraRepo) -> ResultadoCompra:
    resultado = ValidadorCompra(produtos).validar(pedido.itens)
    if not resultado.valido:
        return ResultadoCompra.rejeitada(resultado.motivo)

    compra = Compra(
        data=pedido.data,
        tipo_id_cliente=pedido.tipo_id_cliente,
        id_cliente=pedido.id_cliente,
        nome_cliente=pedido.nome_cliente,
        itens=list(pedido.itens),
    )
    compras.save(compra)
    AjustadorEstoque(produtos).deduzir(pedido.itens)
    return ResultadoCompra.sucesso(compra.compra_id)


def registrar_compra(
    pedido: PedidoCompra,
    db_path: str = DB_PATH,
    transacional: Optional[bool] = None,
) -> ResultadoCompra:
    """Valida, grava e baixa o estoque de um pedido de compra."""
    if transacional is None:
        transacional = DEFAULTS.transacional
    dados = asdict(pedido)
    log_system_event("registrar_compra_start", {"transacional": transacional, "itens": len(pedido.itens)})

    try:
        if transacional:
            with connect(db_path) as conn:
                res = _executar(pedido, ProdutoRepo(db_path, conn), CompraRepo(db_path, conn))
        else:
            res = _executar(pedido, ProdutoRepo(db_path), CompraRepo(db_path))
    except Exception as e:
        error_msg = str(e)
        log_transaction("registrar_compra", dados, error=error_msg)
        log_system_event("registrar_compra_error", {"error": error_msg}, level="error")
        return ResultadoCompra.falha()

    if res.status == REJEITADA:
        log_transaction("registrar_compra", dados, result={"rejeitada": res.motivo.name})
    else:
        log_transaction("registrar_compra", dados, result={"compra_id": res.compra_id})
    log_system_event("registrar_compra_end", {"status": res.status})
    return res


def listar_compras(db_path: str = DB_PATH) -> List[CompraResumo]:
    """Lista todas as compras com os itens e o nome atual de cada produto."""
    log_system_event("listar_compras_start")
    try:
        nomes = {p.product_id: p.nome for p in ProdutoRepo(db_path).find_all()}
        resumo = [
            CompraResumo(
                data=c.data,
                tipo_id_cliente=c.tipo_id_cliente,
                id_cliente=c.id_cliente,
                nome_cliente=c.nome_cliente,
                produtos=[
                    DetalheCompra(it.product_id, nomes.get(it.product_id), it.quantidade)
                    for it in c.itens
                ],
            )
            for c in CompraRepo(db_path).find_all()
        ]
    except Exception as e:
        error_msg = str(e)
        log_transaction("listar_compras", {}, error=error_msg)
        log_system_event("listar_compras_error", {"error": error_msg}, level="error")
        raise

    log_transaction("listar_compras", {}, result={"compras": len(resumo)})
    return resumo
