from .errors import InvalidProduct, ProductNotFound, ProductServiceError
from .models import MISSING, Product, ProductDraft, ProductPatch
from .server import create_app, main
from .store import ProductStore

__version__ = "1.0.0"

__all__ = [
    "MISSING",
    "InvalidProduct",
    "Product",
    "ProductDraft",
    "ProductNotFound",
    "ProductPatch",
    "ProductServiceError",
    "ProductStore",
    "create_app",
    "main",
]
