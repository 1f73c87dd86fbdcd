import threading
from collections.abc import Callable

from datamint.logging.logger import Log


class CollectionCache:
    """Holds the dataset collection id and creates it at most once.

    Concurrent callers that arrive before the id exists block on the lock
    and reuse the id the first caller created. A failed creation leaves the
    cache empty so the next request can try again.
    """

    def __init__(self, collection_id: str | None = None) -> None:
        self._collection_id = collection_id
        self._lock = threading.Lock()

    @property
    def collection_id(self) -> str | None:
        return self._collection_id

    def get_or_create(self, create: Callable[[], str]) -> str:
        cached = self._collection_id
        if cached is not None:
            return cached
        with self._lock:
            if self._collection_id is None:
                self._collection_id = create()
                Log.info(f"Created dataset collection {self._collection_id}")
            else:
                Log.debug(f"Using existing collection {self._collection_id}")
            return self._collection_id
