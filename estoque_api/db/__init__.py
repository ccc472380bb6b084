from .database import Base, EntityStore, get_entity_store
from .categoria import Categoria
from .produto import Produto
from .estoque import Estoque

__all__ = ["Base", "EntityStore", "get_entity_store", "Categoria", "Produto", "Estoque"]
