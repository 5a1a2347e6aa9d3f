"""Party domain service."""

import logging

from contable.backend.base import Backend
from contable.domain.entities import DocumentType, LoadResult, Party
from contable.domain.errors import DomainError, ValidationError

logger = logging.getLogger(__name__)


class PartyService:
    """Service for managing parties (third parties)."""

    def __init__(self, backend: Backend):
        """Initialize party service.

        Args:
            backend: Backend instance
        """
        self.backend = backend

    def _clean(self, name: str, document_type: str, document_number: str) -> tuple[str, str, str]:
        name = (name or "").strip()
        document_number = (document_number or "").strip()
        if not name:
            raise ValidationError("Party name is required")
        if not document_number:
            raise ValidationError("Document number is required")
        return name, DocumentType.parse(document_type).value, document_number

    def create_party(self, name: str, document_type: str, document_number: str) -> Party:
        """Create a new party.

        Args:
            name: Display name
            document_type: Document type code (CC, CE, NIT, TI, PP)
            document_number: Document number

        Returns:
            The party as stored by the backend

        Raises:
            ValidationError: If a field is empty or the document type is unknown
        """
        return self.backend.create_party(*self._clean(name, document_type, document_number))

    def get_party(self, party_id: int) -> Party:
        return self.backend.get_party(party_id)

    def list_parties(self) -> list[Party]:
        return self.backend.list_parties()

    def update_party(
        self, party_id: int, name: str, document_type: str, document_number: str
    ) -> Party:
        """Replace a party's fields.

        Raises:
            ValidationError: If a field is empty or the document type is unknown
        """
        return self.backend.update_party(
            party_id, *self._clean(name, document_type, document_number)
        )

    def delete_party(self, party_id: int) -> None:
        """Delete a party.

        The backend refuses to delete parties referenced by transactions; that
        rejection surfaces as a BackendRejection.
        """
        self.backend.delete_party(party_id)

    def load_parties(self) -> LoadResult[Party]:
        """Load parties, reporting any failure in the result instead of raising."""
        try:
            return LoadResult(items=self.backend.list_parties())
        except DomainError as e:
            logger.warning("Could not load parties: %s", e)
            return LoadResult.failure(e)
