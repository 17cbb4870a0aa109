"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Task documents (collection "tasks", document id = task id):
    title, description, status, owner_id: string
    created_at, updated_at: timestamp
    deleted_at: timestamp, or null while the task is live
    search_terms: array of lower-cased word tokens of title and description
"""

COLLECTION_TASKS = "tasks"
