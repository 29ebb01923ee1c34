import copy
import json
import logging
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Set, Union

from .errors import PersistenceFailure, StorageUnavailable

# This file holds the product collection and keeps db.json in sync with it.

logger = logging.getLogger(__name__)

COLLECTION_KEY = "products"

ProductDict = Dict[str, Any]


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


class RecordStore:
    """In-memory product collection mirrored to a single JSON file.

    Every mutation is staged on a copy of the collection, written to disk,
    and only then swapped in, so a failed write leaves memory as it was.
    Mutations hold one lock for the whole read-modify-write cycle; two
    concurrent creates can no longer overwrite each other.

    ``path=None`` gives a memory-only store (nothing is ever written).
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, indent: Optional[int] = 2):
        self.path = Path(path) if path is not None else None
        self.indent = indent
        self._products: List[ProductDict] = []
        # top-level keys of db.json other than the collection, written back untouched
        self._document: Dict[str, Any] = {}
        self.lock = threading.RLock()

    # ---------------------------
    # Loading / persistence
    # ---------------------------
    def load(self) -> None:
        if self.path is None:
            return

        with self.lock:
            if not self.path.exists():
                logger.info("No data file at %s, starting with an empty collection", self.path)
                self._create_empty()
                return

            try:
                with self.path.open("r", encoding="utf-8") as f:
                    document = json.load(f, parse_constant=_reject_constant)
            except (OSError, ValueError) as e:
                raise StorageUnavailable(f"cannot read {self.path}: {e}") from e

            if not isinstance(document, dict):
                raise StorageUnavailable(f"{self.path} does not hold a JSON object")

            products = document.pop(COLLECTION_KEY, None)
            self._document = document
            if products is None:
                logger.info("%s has no '%s' key, writing the default", self.path, COLLECTION_KEY)
                self._create_empty()
                return

            if not isinstance(products, list):
                raise StorageUnavailable(f"'{COLLECTION_KEY}' in {self.path} is not a list")

            self._products = products
            logger.info("Loaded %d products from %s", len(products), self.path)

    def _create_empty(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._write([])
        except (OSError, PersistenceFailure) as e:
            raise StorageUnavailable(str(e)) from e
        self._products = []

    def _write(self, products: List[ProductDict]) -> None:
        if self.path is None:
            return
        document = dict(self._document)
        document[COLLECTION_KEY] = products
        try:
            # NaN and Infinity are not valid JSON
            payload = json.dumps(document, indent=self.indent, allow_nan=False)
            self.path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise PersistenceFailure(f"could not write {self.path}: {e}") from e

    def _commit(self, mutate: Callable[[List[ProductDict]], Any]) -> Any:
        with self.lock:
            staged = copy.deepcopy(self._products)
            result = mutate(staged)
            self._write(staged)
            self._products = staged
            return result

    # ---------------------------
    # Reads
    # ---------------------------
    def snapshot(self) -> List[ProductDict]:
        with self.lock:
            return copy.deepcopy(self._products)

    def find_by_id(self, product_id: str) -> Optional[ProductDict]:
        with self.lock:
            for p in self._products:
                if p.get("id") == product_id:
                    return copy.deepcopy(p)
        return None

    def ids(self) -> Set[str]:
        with self.lock:
            return {p.get("id") for p in self._products}

    def __len__(self) -> int:
        with self.lock:
            return len(self._products)

    # ---------------------------
    # Writes
    # ---------------------------
    def append(self, product: ProductDict) -> ProductDict:
        record = copy.deepcopy(product)

        def _append(items: List[ProductDict]) -> ProductDict:
            items.append(record)
            return copy.deepcopy(record)

        created = self._commit(_append)
        logger.debug("Appended product %s", record.get("id"))
        return created

    def merge_fields(self, product_id: str, fields: Dict[str, Any]) -> Optional[ProductDict]:
        updates = {k: v for k, v in fields.items() if k != "id"}

        with self.lock:
            if self.find_by_id(product_id) is None:
                return None

            def _merge(items: List[ProductDict]) -> ProductDict:
                for p in items:
                    if p.get("id") == product_id:
                        p.update(copy.deepcopy(updates))
                        return copy.deepcopy(p)

            merged = self._commit(_merge)
        logger.debug("Merged %s into product %s", sorted(updates), product_id)
        return merged

    def remove_by_id(self, product_id: str) -> bool:
        def _remove(items: List[ProductDict]) -> bool:
            for i, p in enumerate(items):
                if p.get("id") == product_id:
                    del items[i]
                    return True
            return False

        removed = self._commit(_remove)
        logger.debug("Remove product %s: %s", product_id, "removed" if removed else "absent")
        return removed
