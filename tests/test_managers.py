"""Manager-level tests: validation, references and transactional behaviour."""
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from estoque_api.db.categoria import Categoria
from estoque_api.db.estoque import Estoque
from estoque_api.db.produto import Produto
from estoque_api.services.categoria import CategoriaManager
from estoque_api.services.estoque import EstoqueManager
from estoque_api.services.exceptions import (
    ConflictError,
    ForeignKeyError,
    NotFoundError,
    ValidationError,
)
from estoque_api.services.produto import ProdutoManager


@pytest.fixture
def managers(store):
    return CategoriaManager(store), ProdutoManager(store), EstoqueManager(store)


@pytest.fixture
async def seeded(managers):
    categorias, produtos, estoques = managers
    categoria = await categorias.create("Eletrônicos")
    produto = await produtos.create("Celular", 1200.0, 50, categoria.id)
    estoque = await estoques.create(produto.id, 50)
    return categoria, produto, estoque


async def test_create_strips_nome(managers):
    categorias, _, _ = managers

    categoria = await categorias.create("  Livros ")

    assert categoria.nome == "Livros"
    assert (await categorias.get(categoria.id)).nome == "Livros"


async def test_update_rejects_empty_nome(managers, seeded):
    categorias, _, _ = managers
    categoria, _, _ = seeded

    with pytest.raises(ValidationError):
        await categorias.update(categoria.id, nome="")
    assert (await categorias.get(categoria.id)).nome == "Eletrônicos"


async def test_produto_preco_is_rounded_to_cents(managers, seeded):
    _, produtos, _ = managers
    categoria, _, _ = seeded

    produto = await produtos.create("Cabo", "19.999", 1, categoria.id)

    assert produto.preco == Decimal("20.00")


async def test_produto_validation_runs_before_reference_check(managers):
    _, produtos, _ = managers

    with pytest.raises(ValidationError):
        await produtos.create("Cabo", -1, 1, 999)


async def test_produto_unknown_categoria(managers):
    _, produtos, _ = managers

    with pytest.raises(ForeignKeyError):
        await produtos.create("Cabo", 10, 1, 999)
    assert await produtos.list() == []


async def test_get_missing_rows(managers):
    categorias, produtos, estoques = managers

    for manager in managers:
        with pytest.raises(NotFoundError):
            await manager.get(1)
    with pytest.raises(NotFoundError):
        await estoques.update(1, 5)
    with pytest.raises(NotFoundError):
        await produtos.delete(1)
    with pytest.raises(NotFoundError):
        await categorias.delete(1)


async def test_delete_veto_leaves_rows(managers, seeded):
    categorias, produtos, _ = managers
    categoria, produto, _ = seeded

    with pytest.raises(ConflictError):
        await categorias.delete(categoria.id)
    with pytest.raises(ConflictError):
        await produtos.delete(produto.id)

    assert [c.id for c in await categorias.list()] == [categoria.id]
    assert [p.id for p in await produtos.list()] == [produto.id]


async def test_estoque_update_sets_produto_quantidade(managers, seeded):
    _, produtos, estoques = managers
    _, produto, estoque = seeded

    updated = await estoques.update(estoque.id, 30)

    assert updated.quantidade == 30
    assert (await produtos.get(produto.id)).quantidade == 30


async def test_estoque_update_is_atomic(managers, seeded, monkeypatch):
    _, produtos, estoques = managers
    _, produto, estoque = seeded

    async def broken_reconcile(session, produto_id, quantidade):
        raise RuntimeError("reconciliation failed")

    monkeypatch.setattr(estoques, "_reconcile_produto", broken_reconcile)

    with pytest.raises(RuntimeError):
        await estoques.update(estoque.id, 5)

    assert (await estoques.get(estoque.id)).quantidade == 50
    assert (await produtos.get(produto.id)).quantidade == 50


async def test_estoque_delete_does_not_reconcile(managers, seeded):
    _, produtos, estoques = managers
    _, produto, estoque = seeded

    await estoques.delete(estoque.id)

    assert await estoques.list() == []
    assert (await produtos.get(produto.id)).quantidade == 50


async def test_foreign_key_is_enforced_by_the_store(store):
    """Rows written around the managers still hit the FK constraint."""
    with pytest.raises(IntegrityError):
        async with store.transaction() as session:
            session.add(Produto(nome="Orfão", preco=1, quantidade=0, categoria_id=999))

    with pytest.raises(IntegrityError):
        async with store.transaction() as session:
            session.add(Estoque(produto_id=999, quantidade=1))


async def test_store_refuses_delete_of_referenced_categoria(store, seeded):
    categoria, _, _ = seeded

    with pytest.raises(IntegrityError):
        async with store.transaction() as session:
            row = await session.get(Categoria, categoria.id)
            await session.delete(row)

    assert len(await CategoriaManager(store).list()) == 1
