"""Tests for TransactionService."""

from datetime import date
from decimal import Decimal

import pytest

from contable.domain.entities import (
    EntryLine,
    EntryRole,
    TransactionDraft,
    TransactionFilter,
)
from contable.domain.errors import (
    NEGATIVE_BALANCE_PREFIX,
    BackendNotFound,
    TransportError,
    ValidationError,
)
from contable.domain.transaction import SAVE_FAILED, SubmissionError
from contable.domain.validation import ViolationCode


def draft_for(ledger, debit_account, credit_account, amount="100", description="Venta"):
    return TransactionDraft(
        party_id=ledger["acme"]["id"],
        date=date(2024, 3, 5),
        description=description,
        entries=(
            EntryLine(account_id=debit_account["id"], role=EntryRole.DEBITO, amount=amount),
            EntryLine(account_id=credit_account["id"], role=EntryRole.CREDITO, amount=amount),
        ),
    )


@pytest.fixture
def reference(transaction_service, ledger):
    data = transaction_service.load_reference_data()
    assert data.ok
    return data


class TestLoadReferenceData:
    def test_loads_parties_and_active_accounts(self, transaction_service, ledger):
        data = transaction_service.load_reference_data()
        assert data.ok
        assert len(data.parties.items) == 2
        assert [a.code for a in data.accounts.items] == ["1105", "1110", "4135"]

    def test_failure_is_reported(self, transaction_service, server, ledger):
        server.reject_next(500, {"error": "Internal Server Error"})
        data = transaction_service.load_reference_data()
        assert not data.ok
        assert not data.parties.ok
        assert data.parties.items == []
        assert data.accounts.ok
        assert str(data.parties.error) == "Internal Server Error"

    def test_unknown_account_type_is_skipped(self, transaction_service, server, ledger):
        server.add_account("8105", "Cuentas de orden", "ORDEN")
        data = transaction_service.load_reference_data()
        assert data.ok
        assert [a.code for a in data.accounts.items] == ["1105", "1110", "4135"]

    def test_domain_error_is_reported(self, transaction_service, backend, monkeypatch, ledger):
        def broken():
            raise ValidationError("Unknown account type 'ORDEN'")

        monkeypatch.setattr(backend, "list_active_accounts", broken)
        data = transaction_service.load_reference_data()
        assert not data.accounts.ok
        assert isinstance(data.accounts.error, ValidationError)
        assert data.parties.ok


class TestCreateTransaction:
    def test_balanced_draft_is_submitted(self, transaction_service, server, ledger, reference):
        draft = draft_for(ledger, ledger["bank"], ledger["sales"])
        txn = transaction_service.create_transaction(
            draft, reference.accounts.items, reference.parties.items
        )
        assert txn.id in server.transactions
        assert txn.total_debits == Decimal("100")
        assert server.requests[-1]["json"]["partidas"][0] == {
            "cuentaContableId": ledger["bank"]["id"],
            "tipo": "DEBITO",
            "valor": 100.0,
        }

    def test_invalid_draft_never_reaches_backend(self, transaction_service, server, ledger, reference):
        draft = draft_for(ledger, ledger["bank"], ledger["sales"])
        draft = TransactionDraft(
            party_id=draft.party_id,
            date=draft.date,
            description=draft.description,
            entries=(draft.entries[0], EntryLine(ledger["sales"]["id"], EntryRole.CREDITO, "99.98")),
        )
        sent = len(server.requests)
        with pytest.raises(ValidationError) as excinfo:
            transaction_service.create_transaction(
                draft, reference.accounts.items, reference.parties.items
            )
        assert excinfo.value.violation.code == ViolationCode.UNBALANCED
        assert len(server.requests) == sent

    def test_inactive_account_is_unknown(self, transaction_service, server, ledger, reference):
        draft = draft_for(ledger, ledger["old"], ledger["sales"])
        with pytest.raises(ValidationError, match="Unknown account"):
            transaction_service.create_transaction(
                draft, reference.accounts.items, reference.parties.items
            )
        assert not server.transactions

    def test_negative_balance_rejection_is_prefixed(self, transaction_service, server, ledger, reference):
        # Crediting cash with no prior debits drives it below zero
        draft = draft_for(ledger, ledger["bank"], ledger["cash"])
        with pytest.raises(SubmissionError) as excinfo:
            transaction_service.create_transaction(
                draft, reference.accounts.items, reference.parties.items
            )
        assert str(excinfo.value) == (
            f"{NEGATIVE_BALANCE_PREFIX}La cuenta 'Caja general' no permite saldo negativo."
        )
        assert excinfo.value.status_code == 400
        assert not server.transactions

    def test_other_rejection_passed_through(self, transaction_service, server, ledger, reference):
        server.reject_next(422, {"message": "Periodo contable cerrado"})
        draft = draft_for(ledger, ledger["bank"], ledger["sales"])
        with pytest.raises(SubmissionError, match="^Periodo contable cerrado$"):
            transaction_service.create_transaction(
                draft, reference.accounts.items, reference.parties.items
            )

    def test_rejection_without_message_uses_fallback(self, transaction_service, server, ledger, reference):
        server.reject_next(500)
        draft = draft_for(ledger, ledger["bank"], ledger["sales"])
        with pytest.raises(SubmissionError) as excinfo:
            transaction_service.create_transaction(
                draft, reference.accounts.items, reference.parties.items
            )
        assert str(excinfo.value) == SAVE_FAILED
        assert excinfo.value.__cause__ is not None

    def test_transport_failure_propagates(self, transaction_service, server, ledger, reference):
        server.unreachable = True
        draft = draft_for(ledger, ledger["bank"], ledger["sales"])
        with pytest.raises(TransportError):
            transaction_service.create_transaction(
                draft, reference.accounts.items, reference.parties.items
            )


class TestUpdateAndDelete:
    def test_update_transaction(self, transaction_service, server, ledger, reference):
        created = transaction_service.create_transaction(
            draft_for(ledger, ledger["bank"], ledger["sales"]),
            reference.accounts.items,
            reference.parties.items,
        )
        updated = transaction_service.update_transaction(
            created.id,
            draft_for(ledger, ledger["bank"], ledger["sales"], amount="250", description="Ajuste"),
            reference.accounts.items,
            reference.parties.items,
        )
        assert updated.description == "Ajuste"
        assert updated.total_credits == Decimal("250")

    def test_update_validates_first(self, transaction_service, server, ledger, reference):
        draft = draft_for(ledger, ledger["bank"], ledger["sales"], description="  ")
        with pytest.raises(ValidationError, match="description"):
            transaction_service.update_transaction(
                1, draft, reference.accounts.items, reference.parties.items
            )
        assert server.requests[-1]["method"] == "GET"

    def test_delete_and_get_missing(self, transaction_service, ledger, reference):
        created = transaction_service.create_transaction(
            draft_for(ledger, ledger["bank"], ledger["sales"]),
            reference.accounts.items,
            reference.parties.items,
        )
        transaction_service.delete_transaction(created.id)
        with pytest.raises(BackendNotFound):
            transaction_service.get_transaction(created.id)


class TestListing:
    @pytest.fixture
    def seeded(self, server, ledger):
        bank, sales = ledger["bank"]["id"], ledger["sales"]["id"]
        entries = [
            {"cuentaContableId": bank, "tipo": "DEBITO", "valor": 10},
            {"cuentaContableId": sales, "tipo": "CREDITO", "valor": 10},
        ]
        server.add_transaction(ledger["acme"]["id"], "2024-03-01", "A", entries)
        server.add_transaction(ledger["ana"]["id"], "2024-03-05T08:00:00", "B", entries)
        server.add_transaction(ledger["acme"]["id"], "2024-03-05", "C", entries)
        server.add_transaction(ledger["ana"]["id"], "2024-04-02", "D", entries)

    def test_list_all(self, transaction_service, seeded):
        assert [t.description for t in transaction_service.list_transactions()] == [
            "A", "B", "C", "D"
        ]

    def test_list_filters_client_side(self, transaction_service, server, seeded):
        result = transaction_service.list_transactions(
            TransactionFilter(date_from="2024-03-05", date_to="2024-03-05")
        )
        assert [t.description for t in result] == ["B", "C"]
        assert server.requests[-1]["params"] == {}

    def test_list_by_party(self, transaction_service, ledger, seeded):
        result = transaction_service.list_transactions(
            TransactionFilter.from_strings(party_id=str(ledger["ana"]["id"]))
        )
        assert [t.description for t in result] == ["B", "D"]

    def test_zero_valued_entry_is_skipped(self, transaction_service, server, ledger):
        bank, sales = ledger["bank"]["id"], ledger["sales"]["id"]
        server.add_transaction(
            ledger["acme"]["id"],
            "2024-05-01",
            "Con partida vacia",
            [
                {"cuentaContableId": bank, "tipo": "DEBITO", "valor": 30},
                {"cuentaContableId": sales, "tipo": "CREDITO", "valor": 30},
                {"cuentaContableId": sales, "tipo": "CREDITO", "valor": 0},
            ],
        )
        [txn] = transaction_service.list_transactions()
        assert len(txn.entries) == 2
        assert txn.total_credits == Decimal("30")

    def test_search_uses_query_parameters(self, transaction_service, server, ledger, seeded):
        result = transaction_service.search_transactions(
            TransactionFilter(date_from="2024-03-02", party_id=ledger["ana"]["id"])
        )
        assert [t.description for t in result] == ["B", "D"]
        assert server.requests[-1]["params"] == {
            "fechaDesde": "2024-03-02",
            "terceroId": str(ledger["ana"]["id"]),
        }
