"""Shared pytest fixtures for contable tests."""

import json
import logging
from decimal import Decimal

import httpx
import pytest

from contable.backend.http_backend import HttpBackend
from contable.domain.account import AccountService
from contable.domain.balance import BalanceService
from contable.domain.party import PartyService
from contable.domain.transaction import TransactionService

BASE_URL = "http://backend.test/api"


class FakeAccountingServer:
    """In-memory stand-in for the accounting REST backend.

    Mirrors the backend's routes and JSON shapes closely enough for the
    client to be exercised end to end, including the negative-balance policy
    that only the backend enforces.
    """

    def __init__(self):
        self.parties: dict[int, dict] = {}
        self.accounts: dict[int, dict] = {}
        self.transactions: dict[int, dict] = {}
        self.requests: list[dict] = []
        self.forced_responses: list[httpx.Response] = []
        self.unreachable = False
        self._next_id = 1

    def _new_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def reject_next(self, status_code: int, body=None) -> None:
        """Answer the next request with the given status and JSON body."""
        if body is None:
            self.forced_responses.append(httpx.Response(status_code))
        else:
            self.forced_responses.append(httpx.Response(status_code, json=body))

    # Seeding helpers
    def add_party(self, name="Acme S.A.S.", document_type="NIT", document_number="900123456") -> dict:
        party = {
            "id": self._new_id(),
            "nombre": name,
            "tipoDocumento": document_type,
            "numeroDocumento": document_number,
        }
        self.parties[party["id"]] = party
        return party

    def add_account(
        self, code, name, account_type="ACTIVO", allow_negative=False, active=True
    ) -> dict:
        account = {
            "id": self._new_id(),
            "codigo": code,
            "nombre": name,
            "tipo": account_type,
            "permiteSaldoNegativo": allow_negative,
            "activo": active,
        }
        self.accounts[account["id"]] = account
        return account

    def add_transaction(self, party_id, fecha, descripcion, partidas) -> dict:
        txn = {
            "id": self._new_id(),
            "tercero": {"id": party_id, "nombre": self.parties.get(party_id, {}).get("nombre")},
            "fecha": fecha,
            "descripcion": descripcion,
            "partidas": partidas,
        }
        self.transactions[txn["id"]] = txn
        return txn

    # Backend computations
    def _balance(self, account: dict) -> dict:
        debits = Decimal("0")
        credits = Decimal("0")
        for txn in self.transactions.values():
            for entry in txn["partidas"]:
                if entry["cuentaContableId"] != account["id"]:
                    continue
                if entry["tipo"] == "DEBITO":
                    debits += Decimal(str(entry["valor"]))
                else:
                    credits += Decimal(str(entry["valor"]))
        return {
            "cuentaId": account["id"],
            "codigo": account["codigo"],
            "nombre": account["nombre"],
            "tipo": account["tipo"],
            "saldoValido": account["activo"],
            "totalDebitos": float(debits),
            "totalCreditos": float(credits),
            "saldo": float(debits - credits),
            "permiteSaldoNegativo": account["permiteSaldoNegativo"],
        }

    def _check_negative_balances(self, partidas: list[dict]):
        for account_id in {p["cuentaContableId"] for p in partidas}:
            account = self.accounts.get(account_id)
            if account is None:
                return httpx.Response(400, json={"error": f"Cuenta {account_id} no existe"})
            if account["permiteSaldoNegativo"]:
                continue
            current = Decimal(str(self._balance(account)["saldo"]))
            for p in partidas:
                if p["cuentaContableId"] == account_id:
                    sign = 1 if p["tipo"] == "DEBITO" else -1
                    current += sign * Decimal(str(p["valor"]))
            if current < 0:
                return httpx.Response(
                    400,
                    json={"message": f"La cuenta '{account['nombre']}' no permite saldo negativo."},
                )
        return None

    # Routing
    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        path = request.url.path.removeprefix("/api")
        self.requests.append(
            {
                "method": request.method,
                "path": path,
                "params": dict(request.url.params),
                "json": body,
            }
        )
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)
        if self.forced_responses:
            return self.forced_responses.pop(0)

        parts = [p for p in path.split("/") if p]
        method = request.method

        if parts == ["test"]:
            return httpx.Response(200, text="ok")
        if parts and parts[0] == "terceros":
            return self._parties(method, parts[1:], body)
        if parts and parts[0] == "cuentas":
            return self._accounts(method, parts[1:], body)
        if parts and parts[0] == "transacciones":
            return self._transactions(method, parts[1:], body, dict(request.url.params))
        if parts and parts[0] == "saldos":
            if len(parts) == 1:
                return httpx.Response(200, json=[self._balance(a) for a in self.accounts.values()])
            account = self.accounts.get(int(parts[2]))
            if account is None:
                return httpx.Response(404, json={"message": "Cuenta no encontrada"})
            return httpx.Response(200, json=self._balance(account))
        return httpx.Response(404, json={"error": "Not Found"})

    def _parties(self, method, rest, body):
        if not rest:
            if method == "GET":
                return httpx.Response(200, json=list(self.parties.values()))
            party = dict(body, id=self._new_id())
            self.parties[party["id"]] = party
            return httpx.Response(201, json=party)

        party_id = int(rest[0])
        if party_id not in self.parties:
            return httpx.Response(404, json={"message": "Tercero no encontrado"})
        if method == "GET":
            return httpx.Response(200, json=self.parties[party_id])
        if method == "PUT":
            self.parties[party_id] = dict(body, id=party_id)
            return httpx.Response(200, json=self.parties[party_id])
        if any(t["tercero"]["id"] == party_id for t in self.transactions.values()):
            return httpx.Response(
                409, json={"message": "El tercero tiene transacciones asociadas"}
            )
        del self.parties[party_id]
        return httpx.Response(204)

    def _accounts(self, method, rest, body):
        if not rest:
            if method == "GET":
                return httpx.Response(200, json=list(self.accounts.values()))
            account = dict(body, id=self._new_id())
            self.accounts[account["id"]] = account
            return httpx.Response(201, json=account)

        if rest == ["activas"]:
            return httpx.Response(
                200, json=[a for a in self.accounts.values() if a["activo"]]
            )

        account_id = int(rest[0])
        if account_id not in self.accounts:
            return httpx.Response(404, json={"message": "Cuenta no encontrada"})
        if rest[1:] == ["toggle-activo"]:
            self.accounts[account_id]["activo"] = not self.accounts[account_id]["activo"]
            return httpx.Response(200, json=self.accounts[account_id])
        if method == "GET":
            return httpx.Response(200, json=self.accounts[account_id])
        if method == "PUT":
            self.accounts[account_id] = dict(body, id=account_id)
            return httpx.Response(200, json=self.accounts[account_id])
        del self.accounts[account_id]
        return httpx.Response(204)

    def _transactions(self, method, rest, body, params):
        if not rest:
            if method == "GET":
                items = list(self.transactions.values())
                if "fechaDesde" in params:
                    items = [t for t in items if t["fecha"][:10] >= params["fechaDesde"]]
                if "fechaHasta" in params:
                    items = [t for t in items if t["fecha"][:10] <= params["fechaHasta"]]
                if "terceroId" in params:
                    items = [t for t in items if str(t["tercero"]["id"]) == params["terceroId"]]
                return httpx.Response(200, json=items)
            rejection = self._check_negative_balances(body["partidas"])
            if rejection is not None:
                return rejection
            txn = self.add_transaction(
                body["tercero"]["id"], body["fecha"], body["descripcion"], body["partidas"]
            )
            return httpx.Response(201, json=txn)

        txn_id = int(rest[0])
        if txn_id not in self.transactions:
            return httpx.Response(404, json={"message": "Transaccion no encontrada"})
        if method == "GET":
            return httpx.Response(200, json=self.transactions[txn_id])
        if method == "PUT":
            txn = self.transactions[txn_id]
            txn.update(
                tercero={"id": body["tercero"]["id"]},
                fecha=body["fecha"],
                descripcion=body["descripcion"],
                partidas=body["partidas"],
            )
            return httpx.Response(200, json=txn)
        del self.transactions[txn_id]
        return httpx.Response(204)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the CLI's logging.basicConfig(force=True) after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def server():
    """Create an empty fake backend."""
    return FakeAccountingServer()


@pytest.fixture
def backend(server):
    """Create an HttpBackend talking to the fake backend."""
    client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(server.handle))
    backend = HttpBackend(BASE_URL, client=client)
    yield backend
    client.close()


@pytest.fixture
def ledger(server):
    """Seed the fake backend with a small chart of accounts and two parties."""
    acme = server.add_party("Acme S.A.S.", "NIT", "900123456")
    ana = server.add_party("Ana Perez", "CC", "52123456")
    cash = server.add_account("1105", "Caja general", "ACTIVO")
    bank = server.add_account("1110", "Bancos", "ACTIVO", allow_negative=True)
    sales = server.add_account("4135", "Ventas", "INGRESO", allow_negative=True)
    old = server.add_account("1195", "Cuenta antigua", "ACTIVO", active=False)
    return {
        "acme": acme,
        "ana": ana,
        "cash": cash,
        "bank": bank,
        "sales": sales,
        "old": old,
    }


@pytest.fixture
def party_service(backend):
    """Create a PartyService on the fake backend."""
    return PartyService(backend)


@pytest.fixture
def account_service(backend):
    """Create an AccountService on the fake backend."""
    return AccountService(backend)


@pytest.fixture
def transaction_service(backend):
    """Create a TransactionService on the fake backend."""
    return TransactionService(backend)


@pytest.fixture
def balance_service(backend):
    """Create a BalanceService on the fake backend."""
    return BalanceService(backend)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def invoke(cli_runner, backend):
    """Invoke the CLI against the fake backend."""
    from contable.cli.main import cli

    def run(*args, input=None):
        return cli_runner.invoke(cli, list(args), obj={"backend": backend}, input=input)

    return run
