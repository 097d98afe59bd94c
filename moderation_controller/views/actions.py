from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Sequence, Union

from ..models import ModerationAction
from ..services.controller import BULK_REASON_DEFAULT, ModerationController

BulkTrigger = Callable[[Sequence[str], Union[ModerationAction, str]], Awaitable[None]]


@dataclass(slots=True, frozen=True)
class ActionsView:
    perform_bulk_action: BulkTrigger
    is_processing: bool

    def as_contract(self) -> dict[str, Any]:
        return {"performBulkAction": self.perform_bulk_action, "isProcessing": self.is_processing}


def project_actions(controller: ModerationController) -> ActionsView:
    async def perform_bulk_action(ids: Sequence[str], action: Union[ModerationAction, str]) -> None:
        if not ids:
            controller.record_rejection("bulk_action", "No items selected", "Bulk action failed")
            return None
        await controller.bulk_action(ids, action, BULK_REASON_DEFAULT)

    return ActionsView(perform_bulk_action=perform_bulk_action, is_processing=controller.busy)


__all__ = ["ActionsView", "BulkTrigger", "project_actions"]
