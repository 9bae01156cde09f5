"""
Document Service - CRUD for the `documents` MongoDB collection.

Documents (proposals, MOUs, invoices, certificates...) point at a college,
trainer and/or requirement in the relational store. MongoDB can't enforce
those references, so:
- create() checks the referenced rows exist
- deleting a requirement removes its documents (delete_for_requirement)
- purge_orphans() sweeps documents whose references disappeared
"""

import logging
import re
from datetime import datetime
from typing import Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from pymongo import DESCENDING
from pymongo.collection import Collection
from sqlalchemy import select
from sqlalchemy.orm import Session

from trainermatch.db.mongodb import get_collection, COLLECTIONS
from trainermatch.models import College, Requirement, Trainer
from trainermatch.schemas.schemas import (
    CollegeSummary, DocumentCreate, DocumentResponse, RequirementSummary, TrainerSummary
)

logger = logging.getLogger(__name__)

# Listing filter value meaning "every type"
ALL_TYPES = "ALL"

# reference field -> relational model it points at
REFERENCES = {
    "college_id": College,
    "trainer_id": Trainer,
    "requirement_id": Requirement,
}


def _parse_object_id(document_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError):
        return None


class DocumentService:
    """
    Handles document storage and listing.
    Joined summaries are loaded from the relational session.
    """

    def __init__(self, db: Session, collection: Collection = None):
        self.db = db
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["documents"])
        )

    # ------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------

    def _existing_ids(self, model, ids) -> set:
        ids = {i for i in ids if i}
        if not ids:
            return set()
        return set(self.db.scalars(select(model.id).where(model.id.in_(ids))).all())

    def _summaries(self, docs: List[dict]) -> Dict[str, dict]:
        """Batch-load college / trainer / requirement summaries for a page of documents."""
        out = {}
        college_ids = {d.get("college_id") for d in docs} - {None}
        trainer_ids = {d.get("trainer_id") for d in docs} - {None}
        requirement_ids = {d.get("requirement_id") for d in docs} - {None}

        out["college"] = {
            c.id: CollegeSummary.model_validate(c)
            for c in self.db.scalars(select(College).where(College.id.in_(college_ids))).all()
        } if college_ids else {}
        out["trainer"] = {
            t.id: TrainerSummary.model_validate(t)
            for t in self.db.scalars(select(Trainer).where(Trainer.id.in_(trainer_ids))).all()
        } if trainer_ids else {}
        out["requirement"] = {
            r.id: RequirementSummary.model_validate(r)
            for r in self.db.scalars(select(Requirement).where(Requirement.id.in_(requirement_ids))).all()
        } if requirement_ids else {}
        return out

    @staticmethod
    def _to_response(doc: dict, summaries: Dict[str, dict] = None) -> DocumentResponse:
        summaries = summaries or {}
        return DocumentResponse(
            id=str(doc["_id"]),
            title=doc["title"],
            type=doc.get("type", "OTHER"),
            url=doc["url"],
            folder_name=doc.get("folder_name"),
            college_id=doc.get("college_id"),
            trainer_id=doc.get("trainer_id"),
            requirement_id=doc.get("requirement_id"),
            created_at=doc["created_at"],
            college=summaries.get("college", {}).get(doc.get("college_id")),
            trainer=summaries.get("trainer", {}).get(doc.get("trainer_id")),
            requirement=summaries.get("requirement", {}).get(doc.get("requirement_id")),
        )

    # ------------------------------------------------------------
    # operations
    # ------------------------------------------------------------

    def create(self, data: DocumentCreate) -> DocumentResponse:
        """Insert a document after checking its references exist."""
        for field, model in REFERENCES.items():
            ref = getattr(data, field)
            if ref and not self._existing_ids(model, [ref]):
                raise HTTPException(status_code=400, detail=f"{model.__name__} '{ref}' not found")

        doc = {
            "title": data.title,
            "type": data.type,
            "url": data.url,
            "folder_name": data.folder_name,
            "college_id": data.college_id,
            "trainer_id": data.trainer_id,
            "requirement_id": data.requirement_id,
            "created_at": datetime.utcnow(),
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Document %s created (%s)", result.inserted_id, data.title)
        return self._to_response(doc, self._summaries([doc]))

    def find_all(self, college_id: str = None, doc_type: str = None,
                 search_term: str = None) -> List[DocumentResponse]:
        """
        List documents, newest first.

        Args:
            college_id: only documents attached to this college
            doc_type: only this type; "ALL" or empty means no type filter
            search_term: case-insensitive substring of title or folder name
        """
        query = {}
        if college_id:
            query["college_id"] = college_id
        if doc_type and doc_type != ALL_TYPES:
            query["type"] = doc_type
        if search_term:
            pattern = {"$regex": re.escape(search_term), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"folder_name": pattern}]

        docs = list(self.collection.find(query).sort("created_at", DESCENDING))
        summaries = self._summaries(docs)
        return [self._to_response(d, summaries) for d in docs]

    def delete(self, document_id: str) -> DocumentResponse:
        """Delete one document; 404 when it doesn't exist."""
        oid = _parse_object_id(document_id)
        doc = self.collection.find_one({"_id": oid}) if oid else None
        if not doc:
            raise HTTPException(status_code=404, detail="Document not found")

        self.collection.delete_one({"_id": oid})
        logger.info("Document %s deleted", document_id)
        return self._to_response(doc)

    def delete_for_requirement(self, requirement_id: str) -> int:
        """Remove every document attached to a requirement (requirement deletion)."""
        result = self.collection.delete_many({"requirement_id": requirement_id})
        return result.deleted_count

    def purge_orphans(self) -> Dict[str, int]:
        """
        Delete documents whose college, trainer or requirement no longer exists.

        Returns:
            Deleted count per reference field.
        """
        deleted = {}
        for field, model in REFERENCES.items():
            referenced = [r for r in self.collection.distinct(field) if r]
            missing = set(referenced) - self._existing_ids(model, referenced)
            if not missing:
                deleted[field] = 0
                continue
            result = self.collection.delete_many({field: {"$in": sorted(missing)}})
            deleted[field] = result.deleted_count
            logger.warning("Purged %d documents with dangling %s", result.deleted_count, field)
        return deleted
