"""
Optimistic concurrency check based on ``updated_at``.
"""

from config.exceptions import ResourceNotFoundError, StaleWriteError


def ensure_current(model, pk, expected_updated_at):
    """
    Lock the row and reject the write if it changed since it was read.

    Must run inside ``transaction.atomic``. Does nothing when the caller
    did not send a version token.
    """
    if expected_updated_at is None:
        return

    current = (
        model.objects.select_for_update()
        .filter(pk=pk)
        .values_list('updated_at', flat=True)
        .first()
    )
    if current is None:
        raise ResourceNotFoundError()
    if current != expected_updated_at:
        raise StaleWriteError()
