# blog_api/services/firestore_service.py
import logging
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import GoogleAPICallError, NotFound

from blog_api.core.errors import InternalError
from blog_api.utils.datetime_utils import DateTimeUtils

class FirestoreCollection:
    """
    Document store for one Firestore collection.

    Documents are plain dicts keyed by the id passed to ``create``. The services
    only talk to this interface, so any object with the same five methods can
    stand in for it.
    """

    def __init__(self, collection_name: str, client=None):
        """
        :param collection_name: Firestore collection, e.g. 'posts'
        :param client: Firestore client; defaults to the firebase_admin app's client
        """
        self.name = collection_name
        self.db = client or firestore.client()
        self.ref = self.db.collection(collection_name)

    def create(self, doc_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new document under doc_id and return what was written."""
        payload = DateTimeUtils.for_firestore(data)
        try:
            self.ref.document(doc_id).set(payload)
        except GoogleAPICallError as e:
            logging.error(f"Firestore create failed (Collection: {self.name}, Doc ID: {doc_id}): {e}", exc_info=True)
            raise InternalError("Could not save the document.") from e
        logging.info(f"Firestore create succeeded (Collection: {self.name}, Doc ID: {doc_id})")
        return payload

    def find_by_id(self, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self.ref.document(doc_id).get()
        except GoogleAPICallError as e:
            logging.error(f"Firestore read failed (Collection: {self.name}, Doc ID: {doc_id}): {e}", exc_info=True)
            raise InternalError("Could not read the document.") from e
        if not doc.exists:
            return None
        return DateTimeUtils.from_firestore(doc.to_dict())

    def find(self, filters: Optional[Dict[str, Any]] = None, order_by: Optional[str] = None,
             descending: bool = True) -> List[Dict[str, Any]]:
        """
        Documents whose fields equal every value in ``filters``, optionally sorted.

        :param filters: field -> required value
        :param order_by: field to sort on
        :param descending: sort direction when order_by is given
        """
        query = self.ref
        for field_name, value in (filters or {}).items():
            query = query.where(field_name, '==', value)
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        try:
            return [DateTimeUtils.from_firestore(doc.to_dict()) for doc in query.stream()]
        except GoogleAPICallError as e:
            logging.error(f"Firestore query failed (Collection: {self.name}, filters: {filters}): {e}", exc_info=True)
            raise InternalError("Could not query documents.") from e

    def update_by_id(self, doc_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge fields into an existing document. Returns the updated document, or None if it does not exist."""
        doc_ref = self.ref.document(doc_id)
        try:
            doc_ref.update(DateTimeUtils.for_firestore(data))
            updated = doc_ref.get()
        except NotFound:
            logging.warning(f"Firestore update skipped, document missing (Collection: {self.name}, Doc ID: {doc_id})")
            return None
        except GoogleAPICallError as e:
            logging.error(f"Firestore update failed (Collection: {self.name}, Doc ID: {doc_id}): {e}", exc_info=True)
            raise InternalError("Could not update the document.") from e
        return DateTimeUtils.from_firestore(updated.to_dict()) if updated.exists else None

    def delete_by_id(self, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        doc_ref = self.ref.document(doc_id)
        try:
            if not doc_ref.get().exists:
                return False
            doc_ref.delete()
        except GoogleAPICallError as e:
            logging.error(f"Firestore delete failed (Collection: {self.name}, Doc ID: {doc_id}): {e}", exc_info=True)
            raise InternalError("Could not delete the document.") from e
        logging.info(f"Firestore delete succeeded (Collection: {self.name}, Doc ID: {doc_id})")
        return True
