# compras/config.py
"""
Configurações globais e valores padrão do módulo de compras.
"""

import os
from dataclasses import dataclass
from pathlib import Path


# Caminho padrão do banco de dados SQLite
DB_PATH = os.environ.get("COMPRAS_DB", os.path.join(os.getcwd(), "compras.db"))

# Diretório dos arquivos de log
LOGS_DIR = Path(os.environ.get("COMPRAS_LOGS_DIR", os.path.join(os.getcwd(), "logs")))


@dataclass
class DefaultConfig:
    """Valores padrão para o fluxo de compra."""
    transacional: bool = False     # False reproduz o fluxo em passos independentes
    tipo_id_cliente: str = "CC"    # tipo de documento assumido quando omitido


# Instância global dos valores padrão
DEFAULTS = DefaultConfig()
