"""Flat-file persistence."""

from .filesystem import COLLECTIONS, RecordStore, get_record_store

__all__ = ["COLLECTIONS", "RecordStore", "get_record_store"]
