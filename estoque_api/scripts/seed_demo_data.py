"""
Seed demo data (categoria, produto, estoque) into the configured DB.

Run from the repo root:
- `python -m estoque_api.scripts.seed_demo_data`

Rows are only created when a row with the same name does not exist yet, so
the script can be re-run safely.
"""
import asyncio
import logging

from estoque_api.core.config import settings
from estoque_api.db.database import EntityStore
from estoque_api.services.categoria import CategoriaManager
from estoque_api.services.estoque import EstoqueManager
from estoque_api.services.produto import ProdutoManager

logger = logging.getLogger(__name__)

DEMO_DATA = [
    # (categoria, produto, preco, quantidade)
    ("Eletrônicos", "Celular", 1200.0, 50),
    ("Informática", "Notebook", 5000.0, 10),
    ("Informática", "Teclado", 200.0, 50),
]


async def get_or_create_categoria(manager: CategoriaManager, nome: str):
    for categoria in await manager.list():
        if categoria.nome.lower() == nome.lower():
            return categoria
    return await manager.create(nome)


async def get_or_create_produto(manager: ProdutoManager, categoria_id: int, nome: str, preco: float, quantidade: int):
    for produto in await manager.list():
        if produto.categoria_id == categoria_id and produto.nome.lower() == nome.lower():
            return produto, False
    return await manager.create(nome, preco, quantidade, categoria_id), True


async def seed(store: EntityStore):
    categorias = CategoriaManager(store)
    produtos = ProdutoManager(store)
    estoques = EstoqueManager(store)

    for categoria_nome, produto_nome, preco, quantidade in DEMO_DATA:
        categoria = await get_or_create_categoria(categorias, categoria_nome)
        produto, created = await get_or_create_produto(produtos, categoria.id, produto_nome, preco, quantidade)
        if created:
            # Opening stock matches the produto's starting quantity
            await estoques.create(produto.id, quantidade)
        logger.info("Seeded %s / %s (produto %s)", categoria.nome, produto.nome, produto.id)


async def main():
    store = EntityStore(settings.database_url, echo=settings.database_echo)
    await store.init()
    try:
        await seed(store)
    finally:
        await store.teardown()


if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    asyncio.run(main())
