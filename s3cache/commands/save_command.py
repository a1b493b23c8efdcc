"""Cache save command implementation."""
from __future__ import annotations

import logging

from ..cache.orchestrator import CacheOutcome, SaveOptions
from ..cache.utils import is_exact_key_match
from ..constants import Inputs, State
from ..errors import CacheError, CacheTransferError, InputRequiredError, ValidationError
from ..host.context import HostContext
from .cli_utils import OrchestratorFactory, check_event

logger = logging.getLogger(__name__)


def save_command(context: HostContext, orchestrator_factory: OrchestratorFactory) -> int:
    """Handle the save subcommand.

    Reads the keys recorded by the restore step. Everything short of
    missing storage configuration is reported as a warning so a cache
    problem never fails the build.

    Args:
        context: Host context providing inputs and state
        orchestrator_factory: Builds the cache orchestrator

    Returns:
        Exit code (0 for success or soft failure, 1 for job failure)
    """
    try:
        if not check_event(context):
            return 0

        matched_key = context.get_state(State.CACHE_MATCHED_KEY)

        # Inputs are re-evaluated before the post action, so we want the original key used for restore
        primary_key = context.get_state(State.CACHE_PRIMARY_KEY)
        if not primary_key:
            logger.warning("Error retrieving key from state.")
            return 0

        if is_exact_key_match(primary_key, matched_key):
            logger.info(f"Cache hit occurred on the primary key {primary_key}, not saving cache.")
            return 0

        try:
            cache_paths = context.get_input_list(Inputs.PATH, required=True)
        except InputRequiredError as e:
            logger.warning(str(e))
            return 0

        options = SaveOptions(upload_chunk_size=context.get_input_int(Inputs.UPLOAD_CHUNK_SIZE))
        orchestrator = orchestrator_factory(context)

        try:
            result = orchestrator.save(cache_paths, primary_key, matched_key, options)
        except (ValidationError, CacheTransferError) as e:
            logger.warning(str(e))
            return 0

        if result.outcome in (CacheOutcome.SAVED, CacheOutcome.ALREADY_CACHED):
            logger.info(result.message)
        else:
            logger.warning(result.message)
        return 0

    except CacheError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Save command failed: {e}")
        return 1
