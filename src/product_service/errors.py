from typing import Optional


class ProductServiceError(Exception):
    default_message = "Product service error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.args[0])


class InvalidProduct(ProductServiceError):
    """A create request is missing one of name, price or stock."""

    default_message = "Please provide name, price, and stock"


class ProductNotFound(ProductServiceError):
    default_message = "Product not found"
