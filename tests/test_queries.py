from types import SimpleNamespace

import pytest

from flowcli.address import Address
from flowcli.model import Transaction
from flowcli.queries import (
    BlockQuery,
    BuildOptions,
    build,
    decode,
    get,
    get_address,
    get_system_transaction,
)
from flowcli.state import Account, AccountNotFoundError, MemoryReaderWriter, State

SERVICE = "f8d6e0586b0a20c7"
PAYLOAD = (
    b"f8aaf8a6b8617472616e73616374696f6e2829207b0a097072657061726528617574686f72697a65723a"
    b"20417574684163636f756e7429207b7d0a0965786563757465207b0a09096c65742078203d20310a0909"
    b"70616e696328227465737422290a097d0a7d0ac0a003d40910037d575d52831647b39814f445bc8cc7ba"
    b"8653286c0eb1473778c34f8203e888f8d6e0586b0a20c7808088f8d6e0586b0a20c7c988f8d6e0586b0a"
    b"20c7c0c0"
)


class FakeServices:
    def __init__(self, tx=None, result=None, block=None, system_error=None):
        self.tx = tx if tx is not None else Transaction()
        self.result = result
        self.block = block
        self.system_error = system_error
        self.calls = []

    def build_transaction(self, **kwargs):
        self.calls.append(("build", kwargs))
        return self.tx

    def get_transaction_by_id(self, tx_id, sealed):
        self.calls.append(("get", tx_id, sealed))
        return self.tx, self.result

    def get_block(self, query):
        self.calls.append(("block", query))
        return self.block

    def get_system_transaction(self, block_id):
        self.calls.append(("system", block_id))
        if self.system_error:
            raise self.system_error
        return self.tx, self.result


@pytest.fixture
def rw():
    reader_writer = MemoryReaderWriter()
    reader_writer.write_file(
        "transaction.cdc", b"transaction() {\n\tprepare(authorizer: &Account) {}\n}\n"
    )
    reader_writer.write_file(
        "arg_string.cdc",
        b"transaction(greeting: String) {\n\tprepare(authorizer: &Account) {}\n}\n",
    )
    return reader_writer


@pytest.fixture
def state(rw):
    st = State(rw)
    st.accounts.add_or_update(Account("emulator-account", Address.from_hex(SERVICE)))
    return st


def test_build_success(state):
    srv = FakeServices()
    report = build(["transaction.cdc"], BuildOptions(), srv, state, yes=True)
    kind, kwargs = srv.calls[0]
    assert kind == "build"
    assert kwargs["payer"].hex() == SERVICE
    assert kwargs["proposer"].hex() == SERVICE
    assert kwargs["authorizers"][0].hex() == SERVICE
    assert kwargs["proposer_key_index"] == 0
    assert kwargs["location"] == "transaction.cdc"
    assert report.tx is srv.tx
    assert report.include == ["code", "payload", "signatures"]


def test_build_not_approved(state):
    with pytest.raises(ValueError) as info:
        build(["transaction.cdc"], BuildOptions(), FakeServices(), state)
    assert str(info.value) == "transaction was not approved"


def test_build_approved_by_callback(state):
    seen = []
    srv = FakeServices()
    report = build(
        ["transaction.cdc"], BuildOptions(), srv, state, approve=lambda tx: seen.append(tx) or True
    )
    assert seen == [srv.tx]
    assert report.tx is srv.tx


def test_build_fail_parsing_json(state):
    options = BuildOptions(args_json="invalid")
    with pytest.raises(ValueError) as info:
        build(["arg_string.cdc"], options, FakeServices(), state)
    assert str(info.value) == (
        "error parsing transaction arguments: invalid character 'i' looking for beginning of value"
    )


def test_build_fail_invalid_file(state):
    with pytest.raises(ValueError) as info:
        build(["invalid"], BuildOptions(), FakeServices(), state)
    assert str(info.value) == "error loading transaction file: open invalid: file does not exist"


def test_build_json_arguments_passed_through(state):
    srv = FakeServices()
    options = BuildOptions(args_json='[{"type":"String","value":"Hi"}]')
    build(["arg_string.cdc"], options, srv, state, yes=True)
    assert srv.calls[0][1]["arguments"] == [b'{"type":"String","value":"Hi"}\n']


def test_build_typed_string_argument(state):
    srv = FakeServices()
    build(["arg_string.cdc", "Hello"], BuildOptions(), srv, state, yes=True)
    assert srv.calls[0][1]["arguments"] == [b'{"value":"Hello","type":"String"}\n']


def test_build_argument_count_mismatch(state):
    with pytest.raises(ValueError, match="error parsing transaction arguments"):
        build(["arg_string.cdc"], BuildOptions(), FakeServices(), state, yes=True)


def test_build_unknown_proposer(state):
    with pytest.raises(AccountNotFoundError):
        build(["transaction.cdc"], BuildOptions(proposer="nobody"), FakeServices(), state, yes=True)


def test_get_address_by_hex_and_name(state):
    assert get_address(SERVICE, state).hex() == SERVICE
    assert get_address("emulator-account", state).hex() == SERVICE
    with pytest.raises(AccountNotFoundError):
        get_address("missing", state)


def test_decode_success(rw):
    rw.write_file("test", PAYLOAD)
    report = decode(["test"], rw)
    assert report.tx.payer.hex() == SERVICE
    assert report.tx.authorizers[0].hex() == SERVICE
    assert report.tx.proposal_key.address.hex() == SERVICE
    assert report.tx.gas_limit == 1000


def test_decode_fail(rw):
    rw.write_file("test", b"invalid")
    with pytest.raises(ValueError) as info:
        decode(["test"], rw)
    assert str(info.value) == (
        "failed to decode partial transaction from invalid: encoding/hex: invalid byte: U+0069 'i'"
    )


def test_decode_fail_to_read(rw):
    with pytest.raises(ValueError) as info:
        decode(["invalid"], rw)
    assert str(info.value) == (
        "failed to read transaction from invalid: open invalid: file does not exist"
    )


def test_get_parses_id():
    srv = FakeServices()
    report = get(["0x01"], srv)
    _, tx_id, sealed = srv.calls[0]
    assert tx_id.hex() == "0100000000000000000000000000000000000000000000000000000000000000"
    assert sealed is True
    assert report.tx is srv.tx


def test_get_system_by_height():
    block_id = bytes.fromhex("7aa74143741c1c3b837d389fcffa7a5e251b67b4ffef6d6887b40cd9c803f537")
    srv = FakeServices(block=SimpleNamespace(id=block_id, height=100))
    report = get_system_transaction(["100"], srv)
    assert srv.calls[0][1].height == 100
    assert srv.calls[1] == ("system", block_id)
    assert report.tx is srv.tx


def test_get_system_invalid_query():
    srv = FakeServices(block=SimpleNamespace(id=bytes(32), height=100))
    with pytest.raises(ValueError, match="invalid query"):
        get_system_transaction([""], srv)


def test_get_system_propagates_service_error():
    srv = FakeServices(
        block=SimpleNamespace(id=bytes(32), height=1), system_error=RuntimeError("block not found")
    )
    with pytest.raises(RuntimeError, match="block not found"):
        get_system_transaction(["latest"], srv)


def test_block_query_forms():
    assert BlockQuery.parse("latest").latest is True
    assert BlockQuery.parse("100").height == 100
    block_hex = "7aa74143741c1c3b837d389fcffa7a5e251b67b4ffef6d6887b40cd9c803f537"
    assert BlockQuery.parse(block_hex).id == bytes.fromhex(block_hex)