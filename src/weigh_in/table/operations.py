"""Record operations triggered from the table: edit, delete, bulk delete."""

import logging
from typing import Callable, Protocol

from ..clients.gateway import GatewayError
from ..models.weight_entry import is_valid_object_id
from .selection import SelectionState, clear, selected_ids

logger = logging.getLogger(__name__)

# Above this many records the confirmation carries an extra warning
LARGE_DELETE_THRESHOLD = 25

Confirm = Callable[[str, str], bool]


class Notifier(Protocol):
    """User-facing notifications (toasts and alerts)."""

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def alert(self, message: str) -> None:
        ...


def delete_confirmation_message(count: int) -> str:
    """Confirmation text for deleting ``count`` selected records."""
    noun = "record" if count == 1 else "records"
    message = (
        f"Are you sure you want to delete {count} selected {noun}? "
        "This action cannot be undone."
    )
    if count > LARGE_DELETE_THRESHOLD:
        message += (
            f"\n\nYou are about to delete a large number of records ({count}). "
            "Please ensure this is what you want to do."
        )
    return message


class RecordOperations:
    """Runs edits and deletions against the API on behalf of the table.

    Only one operation runs at a time; ``busy`` is set for its duration.

    Args:
        delete_record: Deletes one entry by id; a False return is a failure
        confirm: Asks the user ``(title, message)``; False cancels
        notifier: Shows toasts and alerts
        delete_records: Batch delete, if the API offers one. Without it a
            bulk delete falls back to deleting one id at a time, with no
            rollback if a later id fails.
        update_record: Applies a partial update to one entry
    """

    def __init__(
        self,
        delete_record: Callable[[str], bool],
        confirm: Confirm,
        notifier: Notifier,
        delete_records: Callable[[list[str]], bool] | None = None,
        update_record: Callable[[str, dict], dict] | None = None,
    ):
        self.delete_record = delete_record
        self.delete_records = delete_records
        self.update_record = update_record
        self.confirm = confirm
        self.notifier = notifier
        self.busy = False

    def update_one(self, entry_id: str, updates: dict) -> dict | None:
        """Apply an edit. Returns the updated record, or None on failure."""
        if self.update_record is None or self.busy:
            return None
        if not is_valid_object_id(entry_id):
            self.notifier.alert(
                "This record cannot be edited because it doesn't have a valid database ID."
            )
            return None

        self.busy = True
        try:
            updated = self.update_record(entry_id, updates)
        except GatewayError as e:
            logger.error("Error updating record %s: %s", entry_id, e)
            self.notifier.error(f"Failed to update record: {e}")
            return None
        finally:
            self.busy = False

        self.notifier.success("Record updated successfully")
        return updated

    def delete_one(self, entry_id: str) -> bool:
        """Delete one record after confirmation."""
        if self.busy:
            return False
        if not is_valid_object_id(entry_id):
            logger.error("Cannot delete record with invalid ID: %s", entry_id)
            self.notifier.alert(
                "This record cannot be deleted because it doesn't have a valid database ID."
            )
            return False

        if not self.confirm(
            "Delete Record",
            "Are you sure you want to delete this record? This action cannot be undone.",
        ):
            return False

        self.busy = True
        try:
            if not self.delete_record(entry_id):
                raise GatewayError(f"Delete reported failure for {entry_id}")
        except GatewayError as e:
            logger.error("Error deleting record %s: %s", entry_id, e)
            self.notifier.error("An error occurred while deleting the record.")
            return False
        finally:
            self.busy = False

        self.notifier.success("Record deleted successfully")
        return True

    def delete_selected(self, state: SelectionState) -> tuple[SelectionState, bool]:
        """Delete every selected record after one confirmation.

        Returns:
            The new selection state (cleared only on full success) and
            whether every deletion went through
        """
        if self.busy:
            return state, False

        ids = selected_ids(state)
        if not ids:
            self.notifier.alert("No records selected.")
            return state, False

        if not self.confirm("Delete Selected Records", delete_confirmation_message(len(ids))):
            return state, False

        self.busy = True
        try:
            if self.delete_records is not None:
                if not self.delete_records(ids):
                    raise GatewayError("Batch delete reported failure")
            else:
                for entry_id in ids:
                    if not self.delete_record(entry_id):
                        raise GatewayError(f"Delete reported failure for {entry_id}")
        except GatewayError as e:
            logger.error("Error deleting selected records: %s", e)
            self.notifier.error("An error occurred while deleting the selected records.")
            return state, False
        finally:
            self.busy = False

        noun = "record" if len(ids) == 1 else "records"
        self.notifier.success(f"Deleted {len(ids)} {noun}")
        return clear(state), True
