from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from .database import Base


class Estoque(Base):
    __tablename__ = "estoques"
    __table_args__ = (
        CheckConstraint("quantidade >= 0", name="ck_estoques_quantidade_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    produto_id = Column(
        Integer,
        ForeignKey("produtos.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    quantidade = Column(Integer, nullable=False, default=0)

    produto = relationship("Produto", back_populates="estoques")

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "produtoId": self.produto_id,
            "quantidade": self.quantidade,
        }
