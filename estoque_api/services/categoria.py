import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from ..db.categoria import Categoria
from ..db.produto import Produto
from .base import BaseManager
from .exceptions import ConflictError
from .validation import validate_categoria

logger = logging.getLogger(__name__)


class CategoriaManager(BaseManager):
    model = Categoria
    label = "Categoria"

    async def create(self, nome: str) -> Categoria:
        data = validate_categoria(nome)
        async with self.store.transaction() as session:
            categoria = Categoria(**data)
            session.add(categoria)
            await session.flush()
        logger.info("Created categoria %s", categoria.id)
        return categoria

    async def update(self, categoria_id: int, nome: Optional[str] = None) -> Categoria:
        data = validate_categoria(nome, partial=True)
        async with self.store.transaction() as session:
            categoria = await self._fetch(session, Categoria, categoria_id, lock="update")
            if categoria is None:
                raise self._not_found(categoria_id)
            for field, value in data.items():
                setattr(categoria, field, value)
            await session.flush()
        logger.info("Updated categoria %s", categoria_id)
        return categoria

    async def delete(self, categoria_id: int) -> None:
        async with self.store.transaction() as session:
            categoria = await self._fetch(session, Categoria, categoria_id, lock="update")
            if categoria is None:
                raise self._not_found(categoria_id)

            in_use = await self._count_references(session, Produto.categoria_id, categoria_id)
            if in_use:
                logger.warning("Refusing to delete categoria %s: %d produto(s) reference it", categoria_id, in_use)
                raise ConflictError(f"Categoria {categoria_id} is referenced by {in_use} produto(s)")

            await session.delete(categoria)
            try:
                await session.flush()
            except IntegrityError as e:
                # A produto was attached after the count; the FK refused the delete
                raise ConflictError(f"Categoria {categoria_id} is referenced by produtos") from e
        logger.info("Deleted categoria %s", categoria_id)
