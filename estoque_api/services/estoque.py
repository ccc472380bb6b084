import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.estoque import Estoque
from ..db.produto import Produto
from .base import BaseManager
from .exceptions import ForeignKeyError, ValidationError
from .validation import validate_estoque

logger = logging.getLogger(__name__)


class EstoqueManager(BaseManager):
    """Stock records and their one-way sync onto Produto.quantidade.

    Updating an estoque row copies its quantity onto the produto inside the
    same transaction. Creating or deleting an estoque row leaves the produto
    untouched.
    """

    model = Estoque
    label = "Estoque"

    async def _reconcile_produto(self, session: AsyncSession, produto_id: int, quantidade: int) -> Produto:
        produto = await self._fetch(session, Produto, produto_id, lock="update")
        if produto is None:
            raise ForeignKeyError(f"Produto {produto_id} does not exist")
        produto.quantidade = quantidade
        await session.flush()
        return produto

    async def create(self, produto_id: int, quantidade: int) -> Estoque:
        data = validate_estoque(produto_id, quantidade)
        async with self.store.transaction() as session:
            produto = await self._fetch(session, Produto, data["produto_id"], lock="share")
            if produto is None:
                raise ForeignKeyError(f"Produto {data['produto_id']} does not exist")
            estoque = Estoque(**data)
            session.add(estoque)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ForeignKeyError(f"Produto {data['produto_id']} does not exist") from e
        logger.info("Created estoque %s for produto %s", estoque.id, estoque.produto_id)
        return estoque

    async def update(self, estoque_id: int, quantidade: int) -> Estoque:
        if quantidade is None:
            raise ValidationError("quantidade is required")
        data = validate_estoque(quantidade=quantidade, partial=True)
        async with self.store.transaction() as session:
            estoque = await self._fetch(session, Estoque, estoque_id, lock="update")
            if estoque is None:
                raise self._not_found(estoque_id)
            estoque.quantidade = data["quantidade"]
            await session.flush()
            await self._reconcile_produto(session, estoque.produto_id, estoque.quantidade)
        logger.info(
            "Updated estoque %s to %s; produto %s quantidade reconciled",
            estoque_id, estoque.quantidade, estoque.produto_id,
        )
        return estoque

    async def delete(self, estoque_id: int) -> None:
        async with self.store.transaction() as session:
            estoque = await self._fetch(session, Estoque, estoque_id, lock="update")
            if estoque is None:
                raise self._not_found(estoque_id)
            await session.delete(estoque)
            await session.flush()
        logger.info("Deleted estoque %s", estoque_id)
