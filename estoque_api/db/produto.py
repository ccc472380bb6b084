from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from .database import Base


class Produto(Base):
    __tablename__ = "produtos"
    __table_args__ = (
        CheckConstraint("preco >= 0", name="ck_produtos_preco_non_negative"),
        CheckConstraint("quantidade >= 0", name="ck_produtos_quantidade_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)
    preco = Column(Numeric(10, 2), nullable=False)
    # Denormalized copy of the stock count, overwritten when an estoque row is updated
    quantidade = Column(Integer, nullable=False, default=0)
    categoria_id = Column(
        Integer,
        ForeignKey("categorias.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    categoria = relationship("Categoria", back_populates="produtos")
    estoques = relationship("Estoque", back_populates="produto", passive_deletes="all")

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "nome": self.nome,
            "preco": float(self.preco),
            "quantidade": self.quantidade,
            "categoriaId": self.categoria_id,
        }
