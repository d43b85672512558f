"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import COLLECTION_DOCUMENTS

    db = get_firestore_client()
    if db:
        snapshot = await db.collection(COLLECTION_DOCUMENTS).document(doc_id).get()
"""

COLLECTION_DOCUMENTS = "documents"

# Field names on COLLECTION_DOCUMENTS items (camelCase, shared with other clients).
FIELD_COMPLAINANT_NAME = "complainantName"
FIELD_SUBJECT = "subject"
FIELD_SOURCE = "source"
FIELD_RECEIVED_DATE = "receivedDate"
FIELD_NOTES = "notes"
FIELD_FILE_NAME = "fileName"
FIELD_FILE_URL = "fileUrl"
FIELD_FILE_PATH = "filePath"
