import secrets
import string
import logging
from typing import Dict, Any, List

from .database import RecordStore
from .errors import NotFound, PersistenceFailure

# CRUD operations over a RecordStore. Nothing in here knows about HTTP.

logger = logging.getLogger(__name__)

ID_ALPHABET = string.ascii_letters + string.digits
DEFAULT_ID_LENGTH = 5
MAX_ID_ATTEMPTS = 100


def generate_product_id(length: int = DEFAULT_ID_LENGTH) -> str:
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def _new_unique_id(store: RecordStore, length: int) -> str:
    taken = store.ids()
    for _ in range(MAX_ID_ATTEMPTS):
        pid = generate_product_id(length)
        if pid not in taken:
            return pid
        logger.warning("Generated id %s already taken, retrying", pid)
    raise PersistenceFailure(f"could not generate a free id of length {length}")


def _make_product_dict(product_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    product = {"id": product_id}
    product.update({k: v for k, v in fields.items() if k != "id"})
    return product


# Product operations
def list_products_logic(store: RecordStore) -> List[Dict[str, Any]]:
    return store.snapshot()


def get_product_logic(store: RecordStore, product_id: str) -> Dict[str, Any]:
    p = store.find_by_id(product_id)
    if p is None:
        raise NotFound(product_id)
    return p


def create_product_logic(store: RecordStore, fields: Dict[str, Any],
                         id_length: int = DEFAULT_ID_LENGTH) -> Dict[str, Any]:
    # the id check and the append share the store lock, so a concurrent
    # create cannot take the same id in between
    with store.lock:
        pid = _new_unique_id(store, id_length)
        product = store.append(_make_product_dict(pid, fields))
    logger.info("Created product %s", pid)
    return product


def update_product_logic(store: RecordStore, product_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    merged = store.merge_fields(product_id, fields)
    if merged is None:
        raise NotFound(product_id)
    logger.info("Updated product %s", product_id)
    return merged


def delete_product_logic(store: RecordStore, product_id: str) -> None:
    # deleting an unknown id is a successful no-op
    if store.remove_by_id(product_id):
        logger.info("Deleted product %s", product_id)
    return None
