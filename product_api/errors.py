# product_api/errors.py
# Domain errors raised by the record store and the CRUD operations.
# The HTTP layer maps them to status codes in main.py.


class ProductStoreError(Exception):
    """Base class for every error the product store raises."""


class NotFound(ProductStoreError):
    def __init__(self, product_id: str):
        super().__init__(f"product not found: {product_id}")
        self.product_id = product_id


class PersistenceFailure(ProductStoreError):
    """Writing the collection to the durable file failed."""


class StorageUnavailable(ProductStoreError):
    """The durable file could not be read or created at startup."""
