#!/usr/bin/env python3
"""
Orphaned Document Purge

MongoDB documents reference colleges, trainers and requirements by id but
can't carry foreign keys. This removes documents whose referenced row no
longer exists in the relational store.

Usage: python scripts/purge_orphaned_documents.py
"""
import sys
sys.path.insert(0, '.')

from trainermatch.core.logging_config import setup_logging
from trainermatch.db.postgres import get_db_session
from trainermatch.services.document_service import DocumentService


def main():
    setup_logging()
    with get_db_session() as db:
        deleted = DocumentService(db).purge_orphans()

    print("Orphaned documents removed:")
    for field, count in deleted.items():
        print(f"    {field}: {count}")
    print(f"Total: {sum(deleted.values())}")


if __name__ == "__main__":
    main()
