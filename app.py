# app.py
"""
Entrypoint da aplicação.

Uso:
  python app.py migrate --db compras.db
  python app.py produtos listar
  python app.py comprar pedido.json
  python app.py comprar-planilha itens.xlsx --id-cliente 123 --nome-cliente "Ana"
  python app.py compras listar
"""

from compras.adapters.cli import main

if __name__ == "__main__":
    main()
