import pytest
from httpx import ASGITransport, AsyncClient

from estoque_api.db.database import EntityStore
from estoque_api.main import app


@pytest.fixture
async def store(tmp_path):
    """File-backed SQLite store, fresh for every test."""
    store = EntityStore(f"sqlite+aiosqlite:///{tmp_path / 'estoque.db'}")
    await store.init()
    yield store
    await store.teardown()


@pytest.fixture
async def client(store):
    # ASGITransport does not run the lifespan, so the store is attached directly
    app.state.store = store
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    del app.state.store


@pytest.fixture
async def celular(client):
    """Categoria "Eletrônicos" with produto "Celular" and a matching estoque record."""
    categoria = (await client.post("/api/categoria", json={"nome": "Eletrônicos"})).json()
    produto = (await client.post("/api/produto", json={
        "nome": "Celular",
        "preco": 1200.0,
        "quantidade": 50,
        "categoriaId": categoria["id"],
    })).json()
    estoque = (await client.post("/api/estoque", json={"produtoId": produto["id"], "quantidade": 50})).json()
    return {"categoria": categoria, "produto": produto, "estoque": estoque}
