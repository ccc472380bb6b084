"""Field checks run by the managers before touching the store.

Each ``validate_*`` function builds the entity's pydantic schema, so the
rules are the same ones the API applies to request bodies, and returns the
cleaned values keyed by column name. ``partial=True`` validates only the
fields that were supplied (None means "not supplied").
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from ..schemas.categoria import CategoriaCreate, CategoriaUpdate
from ..schemas.estoque import EstoqueCreate, EstoqueUpdate
from ..schemas.produto import ProdutoCreate, ProdutoUpdate
from .exceptions import ValidationError

# JSON field name -> column name
COLUMNS = {"categoriaId": "categoria_id", "produtoId": "produto_id"}


def _check(schema: type[BaseModel], **values) -> Dict[str, Any]:
    try:
        model = schema(**values)
    except SchemaError as e:
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(detail) from e
    return {COLUMNS.get(k, k): v for k, v in model.model_dump(exclude_none=True).items()}


def validate_categoria(nome: Optional[str] = None, partial: bool = False) -> Dict[str, Any]:
    return _check(CategoriaUpdate if partial else CategoriaCreate, nome=nome)


def validate_produto(
    nome: Optional[str] = None,
    preco: Any = None,
    quantidade: Optional[int] = None,
    categoria_id: Optional[int] = None,
    partial: bool = False,
) -> Dict[str, Any]:
    return _check(
        ProdutoUpdate if partial else ProdutoCreate,
        nome=nome,
        preco=preco,
        quantidade=quantidade,
        categoriaId=categoria_id,
    )


def validate_estoque(
    produto_id: Optional[int] = None,
    quantidade: Optional[int] = None,
    partial: bool = False,
) -> Dict[str, Any]:
    if partial:
        # produtoId is fixed once created; only quantidade can change
        if quantidade is None:
            return {}
        return _check(EstoqueUpdate, quantidade=quantidade)
    return _check(EstoqueCreate, produtoId=produto_id, quantidade=quantidade)
