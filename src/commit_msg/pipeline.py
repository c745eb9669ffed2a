"""Commit message processing pipeline.

``run_hook`` is what the installed hook executes once per ``git commit``:

1. skip merge commits entirely
2. clean the message (comments, diff, scissors, blank lines)
3. decide which trailers are still missing
4. merge them into the trailer block and write the file back if needed
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional, Union

from .config import GitConfig, load_git_config
from .core.agents import get_co_developed_by
from .core.change_id import generate_change_id, has_change_id
from .core.classifier import is_merge_commit, is_temporary_commit
from .core.normalizer import clean_commit_message
from .core.object_store import ObjectStore, open_object_store
from .core.trailers import has_co_developed_by, insert_trailers
from .pipeline_types import ProcessResult, TrailerSpec

logger = logging.getLogger(__name__)


def needs_change_id(message: str, create_change_id: bool) -> bool:
    """Check whether a Change-Id trailer should be inserted."""
    if not create_change_id:
        logger.info("Change-Id generation disabled by configuration")
        return False
    if is_temporary_commit(message):
        logger.info("Temporary commit detected, skipping Change-Id generation")
        return False
    if has_change_id(message):
        logger.info("Change-Id already exists, skipping generation")
        return False
    return True


def needs_co_developed_by(message: str, create_co_developed_by: bool) -> bool:
    """Check whether a Co-developed-by trailer should be inserted."""
    if not create_co_developed_by:
        logger.info("Co-developed-by generation disabled by configuration")
        return False
    if is_temporary_commit(message):
        logger.info("Temporary commit detected, skipping Co-developed-by generation")
        return False
    if has_co_developed_by(message):
        logger.info("Co-developed-by already exists, skipping generation")
        return False
    return True


def process_commit_message(
    message: str,
    config: Optional[GitConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    store: Optional[ObjectStore] = None,
) -> ProcessResult:
    """Clean ``message`` and add the trailers it is missing.

    Args:
        message: Raw message file contents.
        config: Hook settings. Defaults to all trailers enabled.
        env: Environment snapshot used for agent detection.
        store: Object store for the Change-Id; None selects the fallback hash.

    Returns:
        ProcessResult. ``ProcessResult("", False)`` for messages that are
        empty once cleaned, so Git aborts the commit on its own.
    """
    config = config or GitConfig()
    env = {} if env is None else env

    # Nothing saved by the user, let Git abort the commit
    if not message.strip():
        return ProcessResult("", False)

    cleaned = clean_commit_message(message, config.comment_char)
    if not cleaned.message.strip():
        return ProcessResult("", False)

    change_id = None
    if needs_change_id(cleaned.message, config.create_change_id):
        change_id = generate_change_id(cleaned.message, store)

    co_developed_by = None
    if needs_co_developed_by(cleaned.message, config.create_co_developed_by):
        co_developed_by = get_co_developed_by(env) or None

    spec = TrailerSpec(change_id=change_id, co_developed_by=co_developed_by)
    if spec.is_empty():
        return ProcessResult(cleaned.message, cleaned.should_save)

    return ProcessResult(insert_trailers(cleaned.message, spec), True)


def run_hook(
    message_file: Union[str, Path],
    config: Optional[GitConfig] = None,
    env: Optional[Mapping[str, str]] = None,
    store: Optional[ObjectStore] = None,
) -> Optional[ProcessResult]:
    """Run the commit-msg hook against ``message_file``.

    Args:
        message_file: Path Git passes as the hook's first argument.
        config: Hook settings; read from Git config when omitted.
        env: Environment snapshot; ``os.environ`` is copied when omitted.
        store: Object store; the repository around the current directory
               when omitted.

    Returns:
        The ProcessResult, or None when a merge commit was skipped.

    Raises:
        FileNotFoundError: If the message file does not exist.
    """
    path = Path(message_file)
    if not path.is_file():
        raise FileNotFoundError(f"Commit message file not found: {message_file}")

    logger.info(f"Executing commit-msg hook on file: {path}")
    # Undecodable bytes (legacy i18n.commitEncoding) are carried through unchanged
    message = path.read_text(encoding="utf-8", errors="surrogateescape")

    if store is None:
        store = open_object_store()

    if is_merge_commit(path, message, store):
        logger.info("Merge commit detected, skipping commit-msg hook processing")
        return None

    if config is None:
        config = load_git_config()
    if env is None:
        env = dict(os.environ)

    result = process_commit_message(message, config, env, store)

    if result.should_save:
        path.write_text(result.message, encoding="utf-8", errors="surrogateescape")
        logger.info("Commit message processed and saved")
    else:
        logger.info("Commit message processed, no changes needed")
    return result
