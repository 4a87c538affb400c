"""Exceptions raised by the service layer and mapped to HTTP in routers."""

from uuid import UUID


class StoreError(Exception):
    """A Supabase call failed (network, constraint violation, ...).

    ``user_message`` is the generic text shown to the caller; the underlying
    cause is only logged.
    """

    def __init__(self, user_message: str) -> None:
        super().__init__(user_message)
        self.user_message = user_message


class CardNotFoundError(Exception):
    """No card matched the given id (and owner, where scoped)."""

    def __init__(self, card_id: UUID | str) -> None:
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id


class ValidationError(Exception):
    """A request failed a service-level check before reaching the store."""


class PartialSaveError(StoreError):
    """The card row was saved but its social links were not."""

    def __init__(self, card_id: UUID, user_message: str) -> None:
        super().__init__(user_message)
        self.card_id = card_id
