"""
Edit access verification: token plus creator device binding
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from datepoll.services.repositories import EventRepo
from datepoll.utils.security import is_valid_public_id, tokens_match

GRANTED = "granted"
DEVICE_MISMATCH = "device_mismatch"
INVALID_TOKEN = "invalid_token"


@dataclass
class AccessDecision:
    can_edit: bool
    reason: str


class AccessService:
    """Decides whether the client may show edit controls.

    A token mismatch is an ordinary negative decision, never an exception.
    Only storage errors propagate.
    """

    @staticmethod
    def verify_edit_access(
        event_id: str,
        edit_token: Optional[str],
        fingerprint: Optional[str],
        db: Session
    ) -> AccessDecision:
        if not is_valid_public_id(event_id):
            return AccessDecision(can_edit=False, reason=INVALID_TOKEN)

        event = EventRepo.get_live(db, event_id)
        if not event or not tokens_match(edit_token, event.edit_token):
            return AccessDecision(can_edit=False, reason=INVALID_TOKEN)

        # A creator without a stored fingerprint can never match
        if not tokens_match(fingerprint, event.creator_fingerprint):
            return AccessDecision(can_edit=False, reason=DEVICE_MISMATCH)

        return AccessDecision(can_edit=True, reason=GRANTED)
