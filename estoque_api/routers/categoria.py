from fastapi import APIRouter, Depends, Path, Response, status
from typing import Annotated, List

from ..db.database import EntityStore, get_entity_store
from ..schemas.common import MAX_INT
from ..schemas.categoria import CategoriaRead, CategoriaCreate, CategoriaUpdate
from ..services.categoria import CategoriaManager

router = APIRouter(prefix="/api/categoria", tags=["categoria"])


def get_categoria_manager(store: EntityStore = Depends(get_entity_store)) -> CategoriaManager:
    return CategoriaManager(store)


@router.get("", response_model=List[CategoriaRead])
async def list_categorias(manager: CategoriaManager = Depends(get_categoria_manager)):
    categorias = await manager.list()
    return [CategoriaRead(**c.to_schema) for c in categorias]


@router.get("/{categoria_id}", response_model=CategoriaRead)
async def get_categoria(categoria_id: Annotated[int, Path(ge=1, le=MAX_INT)], manager: CategoriaManager = Depends(get_categoria_manager)):
    categoria = await manager.get(categoria_id)
    return CategoriaRead(**categoria.to_schema)


@router.post("", response_model=CategoriaRead, status_code=status.HTTP_201_CREATED)
async def create_categoria(
    payload: CategoriaCreate,
    manager: CategoriaManager = Depends(get_categoria_manager),
):
    categoria = await manager.create(payload.nome)
    return CategoriaRead(**categoria.to_schema)


@router.put("/{categoria_id}", response_model=CategoriaRead)
async def update_categoria(
    categoria_id: Annotated[int, Path(ge=1, le=MAX_INT)],
    payload: CategoriaUpdate,
    manager: CategoriaManager = Depends(get_categoria_manager),
):
    data = payload.model_dump(exclude_unset=True)
    categoria = await manager.update(categoria_id, nome=data.get("nome"))
    return CategoriaRead(**categoria.to_schema)


@router.delete("/{categoria_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_categoria(categoria_id: Annotated[int, Path(ge=1, le=MAX_INT)], manager: CategoriaManager = Depends(get_categoria_manager)):
    """Delete a categoria; refused with 409 while produtos reference it."""
    await manager.delete(categoria_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
