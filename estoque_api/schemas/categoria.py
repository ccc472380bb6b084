from pydantic import BaseModel, field_validator
from typing import Optional

from .common import clean_nome


class CategoriaRead(BaseModel):
    id: int
    nome: str


class CategoriaCreate(BaseModel):
    nome: str

    @field_validator("nome")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return clean_nome(v)


class CategoriaUpdate(BaseModel):
    nome: Optional[str] = None

    @field_validator("nome")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return clean_nome(v)
