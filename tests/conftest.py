import os
import tempfile

# Logs dos testes vão para um diretório temporário (lido na importação de compras.config)
os.environ.setdefault("COMPRAS_LOGS_DIR", tempfile.mkdtemp(prefix="compras-logs-"))

import pytest

from compras.domain.models import Produto
from compras.infra.migrations import apply_migrations
from compras.infra.repositories import ProdutoRepo


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "compras_test.sqlite")
    apply_migrations(path)
    return path


@pytest.fixture
def seed(db_path):
    """Cadastra produtos direto no repositório e devolve o repo."""
    repo = ProdutoRepo(db_path)

    def _seed(*produtos: Produto) -> ProdutoRepo:
        for p in produtos:
            repo.save(p)
        return repo

    return _seed
