from fastapi import APIRouter, Depends, Path, Response, status
from typing import Annotated, List

from ..db.database import EntityStore, get_entity_store
from ..schemas.common import MAX_INT
from ..schemas.produto import ProdutoRead, ProdutoCreate, ProdutoUpdate
from ..services.produto import ProdutoManager

router = APIRouter(prefix="/api/produto", tags=["produto"])


def get_produto_manager(store: EntityStore = Depends(get_entity_store)) -> ProdutoManager:
    return ProdutoManager(store)


@router.get("", response_model=List[ProdutoRead])
async def list_produtos(manager: ProdutoManager = Depends(get_produto_manager)):
    produtos = await manager.list()
    return [ProdutoRead(**p.to_schema) for p in produtos]


@router.get("/{produto_id}", response_model=ProdutoRead)
async def get_produto(produto_id: Annotated[int, Path(ge=1, le=MAX_INT)], manager: ProdutoManager = Depends(get_produto_manager)):
    produto = await manager.get(produto_id)
    return ProdutoRead(**produto.to_schema)


@router.post("", response_model=ProdutoRead, status_code=status.HTTP_201_CREATED)
async def create_produto(
    payload: ProdutoCreate,
    manager: ProdutoManager = Depends(get_produto_manager),
):
    """Create a produto under an existing categoria (400 if categoriaId is unknown)."""
    produto = await manager.create(
        nome=payload.nome,
        preco=payload.preco,
        quantidade=payload.quantidade,
        categoria_id=payload.categoriaId,
    )
    return ProdutoRead(**produto.to_schema)


@router.put("/{produto_id}", response_model=ProdutoRead)
async def update_produto(
    produto_id: Annotated[int, Path(ge=1, le=MAX_INT)],
    payload: ProdutoUpdate,
    manager: ProdutoManager = Depends(get_produto_manager),
):
    data = payload.model_dump(exclude_unset=True)
    produto = await manager.update(
        produto_id,
        nome=data.get("nome"),
        preco=data.get("preco"),
        quantidade=data.get("quantidade"),
        categoria_id=data.get("categoriaId"),
    )
    return ProdutoRead(**produto.to_schema)


@router.delete("/{produto_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_produto(produto_id: Annotated[int, Path(ge=1, le=MAX_INT)], manager: ProdutoManager = Depends(get_produto_manager)):
    await manager.delete(produto_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
