from decimal import Decimal
from typing import Annotated

from pydantic import Field

# Column limits: INTEGER is 32-bit on PostgreSQL, preco is Numeric(10, 2)
MAX_INT = 2**31 - 1
PRECO_LIMIT = Decimal("1E8")
CENTS = Decimal("0.01")

Quantidade = Annotated[int, Field(strict=True, ge=0, le=MAX_INT)]
RowId = Annotated[int, Field(strict=True, ge=1, le=MAX_INT)]


def clean_nome(v: str) -> str:
    v = (v or "").strip()
    if not v:
        raise ValueError("nome is required")
    return v


def clean_preco(v: Decimal) -> Decimal:
    if not v.is_finite() or v >= PRECO_LIMIT:
        raise ValueError(f"preco must be below {PRECO_LIMIT:f}")
    v = v.quantize(CENTS)
    if v >= PRECO_LIMIT:
        raise ValueError(f"preco must be below {PRECO_LIMIT:f}")
    return v
