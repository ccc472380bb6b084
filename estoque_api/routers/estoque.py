from fastapi import APIRouter, Depends, Path, Response, status
from typing import Annotated, List

from ..db.database import EntityStore, get_entity_store
from ..schemas.common import MAX_INT
from ..schemas.estoque import EstoqueRead, EstoqueCreate, EstoqueUpdate
from ..services.estoque import EstoqueManager

router = APIRouter(prefix="/api/estoque", tags=["estoque"])


def get_estoque_manager(store: EntityStore = Depends(get_entity_store)) -> EstoqueManager:
    return EstoqueManager(store)


@router.get("", response_model=List[EstoqueRead])
async def list_estoques(manager: EstoqueManager = Depends(get_estoque_manager)):
    estoques = await manager.list()
    return [EstoqueRead(**e.to_schema) for e in estoques]


@router.get("/{estoque_id}", response_model=EstoqueRead)
async def get_estoque(estoque_id: Annotated[int, Path(ge=1, le=MAX_INT)], manager: EstoqueManager = Depends(get_estoque_manager)):
    estoque = await manager.get(estoque_id)
    return EstoqueRead(**estoque.to_schema)


@router.post("", response_model=EstoqueRead, status_code=status.HTTP_201_CREATED)
async def create_estoque(
    payload: EstoqueCreate,
    manager: EstoqueManager = Depends(get_estoque_manager),
):
    estoque = await manager.create(produto_id=payload.produtoId, quantidade=payload.quantidade)
    return EstoqueRead(**estoque.to_schema)


@router.put("/{estoque_id}", response_model=EstoqueRead)
async def update_estoque(
    estoque_id: Annotated[int, Path(ge=1, le=MAX_INT)],
    payload: EstoqueUpdate,
    manager: EstoqueManager = Depends(get_estoque_manager),
):
    """Set the stock quantity and copy it onto the referenced produto."""
    estoque = await manager.update(estoque_id, quantidade=payload.quantidade)
    return EstoqueRead(**estoque.to_schema)


@router.delete("/{estoque_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_estoque(estoque_id: Annotated[int, Path(ge=1, le=MAX_INT)], manager: EstoqueManager = Depends(get_estoque_manager)):
    """Delete a stock record. The produto's quantidade is left as it is."""
    await manager.delete(estoque_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
