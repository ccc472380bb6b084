from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from .database import Base


class Categoria(Base):
    __tablename__ = "categorias"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String, nullable=False)

    # Deleting a referenced categoria must fail on the FK, never null out produtos
    produtos = relationship("Produto", back_populates="categoria", passive_deletes="all")

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "nome": self.nome,
        }
