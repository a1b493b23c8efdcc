"""Cache restore command implementation."""
from __future__ import annotations

import logging

from ..constants import Inputs, State
from ..errors import CacheError, CacheTransferError, ValidationError
from ..host.context import HostContext
from .cli_utils import OrchestratorFactory, check_event, set_cache_hit_output

logger = logging.getLogger(__name__)


def restore_command(context: HostContext, orchestrator_factory: OrchestratorFactory) -> int:
    """Handle the restore subcommand.

    Args:
        context: Host context providing inputs, state and outputs
        orchestrator_factory: Builds the cache orchestrator

    Returns:
        Exit code (0 for success or soft failure, 1 for job failure)
    """
    try:
        if not check_event(context):
            return 0

        primary_key = context.get_input(Inputs.KEY, required=True)
        context.save_state(State.CACHE_PRIMARY_KEY, primary_key)

        restore_keys = context.get_input_list(Inputs.RESTORE_KEYS)
        cache_paths = context.get_input_list(Inputs.PATH, required=True)

        orchestrator = orchestrator_factory(context)

        try:
            result = orchestrator.restore(cache_paths, primary_key, restore_keys)
        except (ValidationError, CacheTransferError) as e:
            logger.warning(str(e))
            set_cache_hit_output(context, False)
            return 0

        if not result.is_hit:
            logger.info(
                f"Cache not found for input keys: {', '.join([primary_key, *restore_keys])}"
            )
            return 0

        # Store the matched cache key
        context.save_state(State.CACHE_MATCHED_KEY, result.key)
        set_cache_hit_output(context, result.exact_match)

        logger.info(f"Cache restored from key: {result.key}")
        return 0

    except CacheError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"Restore command failed: {e}")
        return 1
