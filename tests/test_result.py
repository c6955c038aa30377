import pytest

from flowcli.address import Address
from flowcli.model import (
    Event,
    EventField,
    ProposalKey,
    Transaction,
    TransactionResult,
    TransactionSignature,
    TransactionStatus,
)
from flowcli.result import OK_EMOJI, TransactionReport, new_transaction_result

TX_ID = "e913d1f3e431c7df49c99845bea9ebff9db11bbf25d507b9ad0fad45652d515f"
BLOCK_ID = "7aa74143741c1c3b837d389fcffa7a5e251b67b4ffef6d6887b40cd9c803f537"
ZERO_ID = "0" * 64
SIG = b"6cde7f812897d22ee7633b82b059070be24faccdc47997bc0f765420e6e28bb6"
PAYLOAD = (
    "f8dbf8498e7472616e73616374696f6e207b7dc0a06cde7f812897d22ee7633b82b059070be24faccdc47997bc0f"
    "765420e6e28bb682270f8800000000000000018001880000000000000002c0f846f8448080b84036636465376638"
    "313238393764323265653736333362383262303539303730626532346661636364633437393937626330663736353"
    "432306536653238626236f846f8448080b840366364653766383132383937643232656537363333623832623035"
    "39303730626532346661636364633437393937626330663736353432306536653238626236"
)


@pytest.fixture
def tx():
    return Transaction(
        script=b"transaction {}",
        reference_block_id=bytes.fromhex(
            "6cde7f812897d22ee7633b82b059070be24faccdc47997bc0f765420e6e28bb6"
        ),
        proposal_key=ProposalKey(Address.from_hex("0x01"), 0, 1),
        payer=Address.from_hex("0x02"),
        payload_signatures=[TransactionSignature(Address.from_hex("0x01"), SIG)],
        envelope_signatures=[TransactionSignature(Address.from_hex("0x01"), SIG)],
    )


def _event(index, type_):
    return Event(type_, index, [EventField("bar", "String", 1)])


EVENT_TYPES = [
    "A.foo",
    "A.1654653399040a61.FlowToken.TokensWithdrawn",
    "A.9a0766d93b6608b7.FungibleToken.TokensWithdrawn",
    "A.1654653399040a61.FlowToken.TokensDeposited",
    "A.9a0766d93b6608b7.FungibleToken.TokensDeposited",
    "A.f919ee77447b7497.FlowFees.FeesDeducted",
]


def _result(count):
    return TransactionResult(
        status=TransactionStatus.SEALED,
        events=[_event(i, t) for i, t in enumerate(EVENT_TYPES[:count])],
        block_id=bytes.fromhex(BLOCK_ID),
        block_height=1,
    )


TX_BLOCK = (
    f"ID\t\t{TX_ID}\n"
    "Payer\t\t0000000000000002\n"
    "Authorizers\t[]\n"
    "\n"
    "Proposal Key:\t\n"
    "    Address\t0000000000000001\n"
    "    Index\t0\n"
    "    Sequence\t1\n"
    "\n"
    "Payload Signature 0: 0000000000000001\n"
    "Envelope Signature 0: 0000000000000001\n"
    "Signatures (minimized, use --include signatures)\n"
)

RESULT_HEAD = (
    f"Block ID\t{BLOCK_ID}\n"
    "Block Height\t1\n"
    f"Status\t\t{OK_EMOJI} SEALED\n"
)


def _event_text(index, type_):
    return (
        f"    Index\t{index}\n"
        f"    Type\t{type_}\n"
        f"    Tx ID\t{ZERO_ID}\n"
        "    Values\n"
        "\t\t- bar (String): 1 \n"
    )


TAIL_CODE_PAYLOAD = (
    "\n\n\nCode (hidden, use --include code)\n"
    "\n"
    "Payload (hidden, use --include payload)"
)
FEE_NOTE = "\n\nFee Events (hidden, use --include fee-events)"


def test_no_result(tx):
    report = TransactionReport(tx=tx)
    expected = (
        TX_BLOCK
        + "\nCode (hidden, use --include code)\n\nPayload (hidden, use --include payload)"
        + FEE_NOTE
    )
    assert str(report) == expected
    assert report.to_json() == {
        "authorizers": "[]",
        "id": TX_ID,
        "payer": "0000000000000002",
        "payload": PAYLOAD,
    }


def test_with_result(tx):
    report = TransactionReport(tx=tx, result=_result(1))
    expected = (
        RESULT_HEAD + TX_BLOCK + "\nEvents:\t\t \n" + _event_text(0, "A.foo")
        + TAIL_CODE_PAYLOAD + FEE_NOTE
    )
    assert str(report) == expected
    values = bytes(
        [0x7b, 0x22, 0x76, 0x61, 0x6c, 0x75, 0x65, 0x22, 0x3a, 0x7b, 0x22, 0x69, 0x64, 0x22, 0x3a,
         0x22, 0x41, 0x2e, 0x66, 0x6f, 0x6f, 0x22, 0x2c, 0x22, 0x66, 0x69, 0x65, 0x6c, 0x64, 0x73,
         0x22, 0x3a, 0x5b, 0x7b, 0x22, 0x76, 0x61, 0x6c, 0x75, 0x65, 0x22, 0x3a, 0x7b, 0x22, 0x76,
         0x61, 0x6c, 0x75, 0x65, 0x22, 0x3a, 0x22, 0x31, 0x22, 0x2c, 0x22, 0x74, 0x79, 0x70, 0x65,
         0x22, 0x3a, 0x22, 0x49, 0x6e, 0x74, 0x22, 0x7d, 0x2c, 0x22, 0x6e, 0x61, 0x6d, 0x65, 0x22,
         0x3a, 0x22, 0x62, 0x61, 0x72, 0x22, 0x7d, 0x5d, 0x7d, 0x2c, 0x22, 0x74, 0x79, 0x70, 0x65,
         0x22, 0x3a, 0x22, 0x45, 0x76, 0x65, 0x6e, 0x74, 0x22, 0x7d, 0x0a]
    )
    assert report.to_json() == {
        "authorizers": "[]",
        "block_height": 1,
        "block_id": BLOCK_ID,
        "events": [{"index": 0, "type": "A.foo", "values": values}],
        "id": TX_ID,
        "payer": "0000000000000002",
        "payload": PAYLOAD,
        "status": "SEALED",
    }


def test_result_without_fee_events(tx):
    report = TransactionReport(tx=tx, result=_result(6))
    expected = (
        RESULT_HEAD + TX_BLOCK + "\nEvents:\t\t \n" + _event_text(0, "A.foo")
        + TAIL_CODE_PAYLOAD + FEE_NOTE
    )
    assert str(report) == expected


def test_result_with_fee_events(tx):
    report = TransactionReport(tx=tx, result=_result(6), include=["fee-events"])
    events = "\n".join(_event_text(i, t) for i, t in enumerate(EVENT_TYPES))
    expected = RESULT_HEAD + TX_BLOCK + "\nEvents:\t\t \n" + events + TAIL_CODE_PAYLOAD
    assert str(report) == expected


def test_oneliner(tx):
    report = new_transaction_result(tx, _result(1))
    text = report.oneliner()
    assert text.startswith(f"ID: {TX_ID}, Payer: 0000000000000002, Authorizer: []")
    assert ", Status: SEALED" in text


def test_include_payload_shows_hex(tx):
    report = TransactionReport(tx=tx, include=["payload"])
    assert str(report).endswith(FEE_NOTE)
    assert f"\n\nPayload:\n{PAYLOAD}" in str(report)