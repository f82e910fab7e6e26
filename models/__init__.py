from models._base import db
from models.alliance import Alliance
from models.catalog import Division, Product
from models.inquiry import Inquiry

__all__ = [
    "db",
    "Alliance",
    "Division",
    "Product",
    "Inquiry",
]
