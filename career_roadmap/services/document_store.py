"""Document store interface for candidate and roadmap records, plus an in-memory implementation."""

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple


class DocumentStore(ABC):
    """Abstract document database: JSON-like documents addressed by (collection, id)."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document or None if it does not exist."""
        ...

    @abstractmethod
    def set(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        """Write a document; merge=True updates top-level fields instead of replacing."""
        ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Delete a document; deleting a missing document is not an error."""
        ...

    @abstractmethod
    def query(self, collection: str, field: str, value: Any) -> List[Tuple[str, Dict[str, Any]]]:
        """Return (doc_id, document) pairs whose top-level field equals value."""
        ...


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store; documents are deep-copied on the way in and out."""

    def __init__(self) -> None:
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self._collections.get(collection, {}).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], merge: bool = False) -> None:
        docs = self._collections.setdefault(collection, {})
        if merge and doc_id in docs:
            docs[doc_id].update(copy.deepcopy(data))
        else:
            docs[doc_id] = copy.deepcopy(data)

    def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)

    def query(self, collection: str, field: str, value: Any) -> List[Tuple[str, Dict[str, Any]]]:
        return [
            (doc_id, copy.deepcopy(doc))
            for doc_id, doc in self._collections.get(collection, {}).items()
            if doc.get(field) == value
        ]

    def size(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))
