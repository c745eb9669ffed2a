"""Core commit message transformation components."""

from .agents import get_co_developed_by
from .change_id import generate_change_id, has_change_id
from .classifier import is_merge_commit, is_temporary_commit
from .normalizer import clean_commit_message
from .object_store import GitObjectStore, ObjectStore, ObjectStoreError, open_object_store
from .trailers import has_co_developed_by, insert_trailers

__all__ = [
    "GitObjectStore",
    "ObjectStore",
    "ObjectStoreError",
    "clean_commit_message",
    "generate_change_id",
    "get_co_developed_by",
    "has_change_id",
    "has_co_developed_by",
    "insert_trailers",
    "is_merge_commit",
    "is_temporary_commit",
    "open_object_store",
]
