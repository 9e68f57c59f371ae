"""
remove-stale
Deletes stale/offline runners of the configured groups after confirmation.
"""
import logging
import sys

from gitlabctl.core.constants import EXIT_OK, EXIT_TRANSPORT_ERROR
from gitlabctl.services.stale_reaper import reap_stale_runners

logger = logging.getLogger(__name__)


def _print_dot(runner, ok: bool) -> None:
    sys.stderr.write("." if ok else "x")
    sys.stderr.flush()


def remove_stale(client, settings, args, confirm=None) -> int:
    result = reap_stale_runners(client, settings.group_ids, confirm=confirm or input, on_progress=_print_dot)
    if result.candidates:
        sys.stderr.write("\n")

    if result.failed:
        logger.error(
            "Removed %d of %d runner(s); failed: %s",
            result.succeeded, result.candidates, ", ".join(str(i) for i in result.failed),
        )
        return EXIT_TRANSPORT_ERROR

    logger.info("Done: removed %d runner(s)", result.succeeded)
    return EXIT_OK
