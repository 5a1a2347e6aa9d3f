"""Transaction domain service."""

import logging
from dataclasses import dataclass
from typing import Optional

from contable.backend.base import Backend
from contable.domain.account import AccountService
from contable.domain.entities import (
    Account,
    LoadResult,
    Party,
    Transaction,
    TransactionDraft,
    TransactionFilter,
)
from contable.domain.errors import BackendRejection, describe_submission_failure
from contable.domain.filtering import filter_transactions
from contable.domain.party import PartyService
from contable.domain.validation import build_payload, validate_draft

logger = logging.getLogger(__name__)

SAVE_FAILED = "Could not save the transaction"


class SubmissionError(BackendRejection):
    """A validated draft was refused by the backend.

    ``str(error)`` is the message to show the user; the original backend
    error is kept as ``__cause__``.
    """


@dataclass(frozen=True)
class ReferenceData:
    """Parties and active accounts a draft may reference."""

    parties: LoadResult[Party]
    accounts: LoadResult[Account]

    @property
    def ok(self) -> bool:
        return self.parties.ok and self.accounts.ok


class TransactionService:
    """Service for composing, submitting and listing transactions."""

    def __init__(self, backend: Backend):
        """Initialize transaction service.

        Args:
            backend: Backend instance
        """
        self.backend = backend

    def load_reference_data(self) -> ReferenceData:
        """Load parties and active accounts for the transaction form.

        Failures are reported in the result instead of raised, so the caller
        can still show the transaction list.
        """
        return ReferenceData(
            parties=PartyService(self.backend).load_parties(),
            accounts=AccountService(self.backend).load_active_accounts(),
        )

    def create_transaction(
        self,
        draft: TransactionDraft,
        accounts: list[Account],
        parties: list[Party],
    ) -> Transaction:
        """Validate a draft and submit it to the backend.

        Args:
            draft: Transaction being composed
            accounts: Active accounts the draft may reference
            parties: Known parties

        Returns:
            The transaction as stored by the backend

        Raises:
            ValidationError: If the draft breaks a double-entry rule; nothing
                is sent to the backend
            SubmissionError: If the backend refuses the transaction
            TransportError: If the backend cannot be reached
        """
        validate_draft(draft, accounts, parties)
        payload = build_payload(draft)
        logger.info(
            "Submitting transaction '%s' with %d entries",
            payload["descripcion"],
            len(payload["partidas"]),
        )
        try:
            return self.backend.create_transaction(payload)
        except BackendRejection as e:
            raise self._submission_error(e) from e

    def update_transaction(
        self,
        transaction_id: int,
        draft: TransactionDraft,
        accounts: list[Account],
        parties: list[Party],
    ) -> Transaction:
        """Validate a draft and replace an existing transaction with it.

        Raises:
            ValidationError: If the draft breaks a double-entry rule
            SubmissionError: If the backend refuses the transaction
        """
        validate_draft(draft, accounts, parties)
        try:
            return self.backend.update_transaction(transaction_id, build_payload(draft))
        except BackendRejection as e:
            raise self._submission_error(e) from e

    def _submission_error(self, error: BackendRejection) -> SubmissionError:
        message = describe_submission_failure(error, fallback=SAVE_FAILED)
        logger.info("Backend rejected transaction: %s", message)
        return SubmissionError(
            message, status_code=error.status_code, detail=error.detail
        )

    def get_transaction(self, transaction_id: int) -> Transaction:
        return self.backend.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        self.backend.delete_transaction(transaction_id)

    def list_transactions(
        self, filters: Optional[TransactionFilter] = None
    ) -> list[Transaction]:
        """List transactions, filtering client-side.

        The full list is fetched once and narrowed locally, so the same
        criteria give the same result as on the interactive screen.
        """
        transactions = self.backend.list_transactions()
        if filters is None or filters.is_empty:
            return transactions
        return filter_transactions(transactions, filters)

    def search_transactions(self, filters: TransactionFilter) -> list[Transaction]:
        """List transactions using the backend's own query filters."""
        return self.backend.list_transactions(filters)
