from pydantic import BaseModel

from .common import Quantidade, RowId


class EstoqueRead(BaseModel):
    id: int
    produtoId: int
    quantidade: int


class EstoqueCreate(BaseModel):
    produtoId: RowId
    quantidade: Quantidade


class EstoqueUpdate(BaseModel):
    quantidade: Quantidade
