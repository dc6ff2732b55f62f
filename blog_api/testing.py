# blog_api/testing.py
"""
Helpers for exercising the services without Firestore.
"""

from copy import deepcopy
from typing import Any, Dict, List, Optional

from blog_api.models.attachment import Attachment


class MemoryCollection:
    """In-memory document store with the same five methods as FirestoreCollection."""

    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}

    def create(self, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        self.docs[doc_id] = deepcopy(data)
        return deepcopy(data)

    def find_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(doc_id)
        return deepcopy(doc) if doc is not None else None

    def find(self, filters: Optional[Dict[str, Any]] = None, order_by: Optional[str] = None,
             descending: bool = True) -> List[Dict[str, Any]]:
        docs = [
            deepcopy(doc) for doc in self.docs.values()
            if all(doc.get(key) == value for key, value in (filters or {}).items())
        ]
        if order_by:
            docs.sort(key=lambda doc: doc[order_by], reverse=descending)
        return docs

    def update_by_id(self, doc_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if doc_id not in self.docs:
            return None
        self.docs[doc_id].update(deepcopy(data))
        return deepcopy(self.docs[doc_id])

    def delete_by_id(self, doc_id: str) -> bool:
        return self.docs.pop(doc_id, None) is not None


def make_attachment(size: int, filename: str = "cover.png") -> Attachment:
    """An Attachment of exactly `size` bytes."""
    return Attachment(filename=filename, data=b"\x89" * size)
