"""
Draft controller - the in-progress new product typed into the creation form.
Handles partial field edits, numeric coercion and submission.
"""

import logging
import math
import re
from typing import Optional

from app.models import DRAFT_FIELDS, ProductDraft, ProductPayload
from app.service import CollectionSynchronizer

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way a browser number parser reads "12.5kg" as 12.5.
_DECIMAL_PREFIX = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', re.ASCII)
_INTEGER_PREFIX = re.compile(r'^\s*[+-]?\d+', re.ASCII)


def parse_decimal(raw: str) -> Optional[float]:
    """
    Parse the leading decimal number of a raw form value.

    Args:
        raw: Text as typed by the user

    Returns:
        The parsed value, or None when the text has no finite leading number.
        None is sent to the server as JSON null.
    """
    match = _DECIMAL_PREFIX.match(raw or "")
    if not match:
        return None
    value = float(match.group())
    return value if math.isfinite(value) else None


def parse_integer(raw: str) -> Optional[int]:
    """
    Parse the leading integer of a raw form value ("3.9" -> 3).

    Returns:
        The parsed value, or None when the text has no leading digits
    """
    match = _INTEGER_PREFIX.match(raw or "")
    if not match:
        return None
    return int(match.group())


def build_payload(draft: ProductDraft) -> ProductPayload:
    """
    Coerce raw draft values into a wire payload.

    Text fields are copied verbatim. Price and quantity are parsed but not
    validated: an unparseable entry is forwarded as null and left for the
    server to reject.
    """
    price = parse_decimal(draft.price)
    quantity = parse_integer(draft.quantity)
    if price is None or quantity is None:
        logger.warning(
            f"Draft has non-numeric values (price={draft.price!r}, "
            f"quantity={draft.quantity!r}), forwarding as null"
        )
    return ProductPayload(
        name=draft.name,
        description=draft.description,
        price=price,
        quantity=quantity
    )


class DraftController:
    """
    Holds the draft and the creation form visibility.

    The draft exists only while the form is visible: it is reset when the
    form is cancelled and after a successful submission. A failed submission
    leaves both the form and the typed values untouched so the user can retry.
    """

    def __init__(self, synchronizer: CollectionSynchronizer):
        self.synchronizer = synchronizer
        self.draft = ProductDraft()
        self.visible = False

    def toggle(self) -> bool:
        """
        Show or hide the creation form. Hiding it discards the draft.

        Returns:
            The new visibility
        """
        self.visible = not self.visible
        if not self.visible:
            self.reset()
        return self.visible

    def reset(self) -> None:
        self.draft = ProductDraft()

    def update_field(self, field: str, raw_text: str) -> ProductDraft:
        """
        Replace a single draft field, leaving the others unchanged.

        Args:
            field: One of name, description, price, quantity
            raw_text: Text as typed, stored without coercion

        Returns:
            The updated draft

        Raises:
            ValueError: If field is not a draft field
        """
        if field not in DRAFT_FIELDS:
            raise ValueError(f"Unknown draft field: {field}")
        self.draft = self.draft.model_copy(update={field: raw_text})
        return self.draft

    def to_payload(self) -> ProductPayload:
        """Build the creation payload from the current draft."""
        return build_payload(self.draft)

    def _close(self) -> None:
        self.visible = False
        self.reset()

    async def submit(self) -> bool:
        """
        Submit the draft to the collection synchronizer.

        On success the form is hidden and the draft cleared before the
        refetch goes out. On failure the error banner is set by the
        synchronizer and nothing here changes.

        Returns:
            True if the product was created
        """
        payload = self.to_payload()
        return await self.synchronizer.create(payload, on_created=self._close)
