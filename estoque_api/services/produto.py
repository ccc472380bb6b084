import logging
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.categoria import Categoria
from ..db.estoque import Estoque
from ..db.produto import Produto
from .base import BaseManager
from .exceptions import ConflictError, ForeignKeyError
from .validation import validate_produto

logger = logging.getLogger(__name__)


class ProdutoManager(BaseManager):
    model = Produto
    label = "Produto"

    async def _require_categoria(self, session: AsyncSession, categoria_id: int) -> Categoria:
        # Shared lock: a concurrent delete of this categoria waits for our commit
        categoria = await self._fetch(session, Categoria, categoria_id, lock="share")
        if categoria is None:
            raise ForeignKeyError(f"Categoria {categoria_id} does not exist")
        return categoria

    async def _flush_checked(self, session: AsyncSession, categoria_id: int):
        try:
            await session.flush()
        except IntegrityError as e:
            raise ForeignKeyError(f"Categoria {categoria_id} does not exist") from e

    async def create(self, nome: str, preco: Any, quantidade: int, categoria_id: int) -> Produto:
        data = validate_produto(nome, preco, quantidade, categoria_id)
        async with self.store.transaction() as session:
            await self._require_categoria(session, data["categoria_id"])
            produto = Produto(**data)
            session.add(produto)
            await self._flush_checked(session, data["categoria_id"])
        logger.info("Created produto %s in categoria %s", produto.id, produto.categoria_id)
        return produto

    async def update(
        self,
        produto_id: int,
        nome: Optional[str] = None,
        preco: Any = None,
        quantidade: Optional[int] = None,
        categoria_id: Optional[int] = None,
    ) -> Produto:
        """Apply the supplied fields; fields left as None keep their value.

        A new categoria_id must point to an existing categoria.
        """
        data = validate_produto(nome, preco, quantidade, categoria_id, partial=True)
        async with self.store.transaction() as session:
            produto = await self._fetch(session, Produto, produto_id, lock="update")
            if produto is None:
                raise self._not_found(produto_id)
            if "categoria_id" in data:
                await self._require_categoria(session, data["categoria_id"])
            for field, value in data.items():
                setattr(produto, field, value)
            await self._flush_checked(session, produto.categoria_id)
        logger.info("Updated produto %s (%s)", produto_id, ", ".join(sorted(data)) or "no changes")
        return produto

    async def delete(self, produto_id: int) -> None:
        async with self.store.transaction() as session:
            produto = await self._fetch(session, Produto, produto_id, lock="update")
            if produto is None:
                raise self._not_found(produto_id)

            in_use = await self._count_references(session, Estoque.produto_id, produto_id)
            if in_use:
                logger.warning("Refusing to delete produto %s: %d estoque record(s) reference it", produto_id, in_use)
                raise ConflictError(f"Produto {produto_id} is referenced by {in_use} estoque record(s)")

            await session.delete(produto)
            try:
                await session.flush()
            except IntegrityError as e:
                raise ConflictError(f"Produto {produto_id} is referenced by estoque records") from e
        logger.info("Deleted produto %s", produto_id)
