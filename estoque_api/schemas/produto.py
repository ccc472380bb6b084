from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import Quantidade, RowId, clean_nome, clean_preco

# Field names follow the JSON contract (categoriaId, not categoria_id)


class ProdutoRead(BaseModel):
    id: int
    nome: str
    preco: float
    quantidade: int
    categoriaId: int


class ProdutoCreate(BaseModel):
    nome: str
    preco: Decimal = Field(ge=0)
    quantidade: Quantidade
    categoriaId: RowId

    @field_validator("nome")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return clean_nome(v)

    @field_validator("preco", mode="before")
    @classmethod
    def _preco_is_number(cls, v):
        if isinstance(v, bool):
            raise ValueError("preco must be a number")
        return v

    @field_validator("preco")
    @classmethod
    def _preco_cents(cls, v: Decimal) -> Decimal:
        return clean_preco(v)


class ProdutoUpdate(BaseModel):
    nome: Optional[str] = None
    preco: Optional[Decimal] = Field(default=None, ge=0)
    quantidade: Optional[Quantidade] = None
    categoriaId: Optional[RowId] = None

    @field_validator("nome")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return clean_nome(v)

    @field_validator("preco", mode="before")
    @classmethod
    def _preco_is_number(cls, v):
        if isinstance(v, bool):
            raise ValueError("preco must be a number")
        return v

    @field_validator("preco")
    @classmethod
    def _preco_cents(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is None:
            return None
        return clean_preco(v)
