"""Transactions, results and events."""

from __future__ import annotations

import enum
import hashlib
import json
import string
from dataclasses import dataclass, field
from typing import Any, Optional

from flowcli import rlp
from flowcli.address import EMPTY_ADDRESS, Address

DEFAULT_GAS_LIMIT = 9999
_EMPTY_ID = bytes(32)


class TransactionStatus(enum.Enum):
    UNKNOWN = 0
    PENDING = 1
    FINALIZED = 2
    EXECUTED = 3
    SEALED = 4
    EXPIRED = 5

    def __str__(self) -> str:
        return self.name


@dataclass
class ProposalKey:
    address: Address = EMPTY_ADDRESS
    key_index: int = 0
    sequence_number: int = 0


@dataclass
class TransactionSignature:
    address: Address
    signature: bytes
    key_index: int = 0
    signer_index: int = 0


def _uint(data) -> int:
    if not isinstance(data, bytes):
        raise ValueError("rlp: expected string, got list")
    return int.from_bytes(data, "big")


def _addr(data) -> Address:
    if not isinstance(data, bytes) or len(data) > 8:
        raise ValueError("rlp: invalid address")
    return Address(data.rjust(8, b"\x00"))


def _hex_decode(text: str) -> bytes:
    for ch in text:
        if ch not in string.hexdigits:
            raise ValueError(f"encoding/hex: invalid byte: U+{ord(ch):04X} {ch!r}")
    if len(text) % 2:
        raise ValueError("encoding/hex: odd length hex string")
    return bytes.fromhex(text)


@dataclass
class Transaction:
    script: Optional[bytes] = None
    arguments: list[bytes] = field(default_factory=list)
    reference_block_id: bytes = _EMPTY_ID
    gas_limit: int = DEFAULT_GAS_LIMIT
    proposal_key: ProposalKey = field(default_factory=ProposalKey)
    payer: Address = EMPTY_ADDRESS
    authorizers: list[Address] = field(default_factory=list)
    payload_signatures: list[TransactionSignature] = field(default_factory=list)
    envelope_signatures: list[TransactionSignature] = field(default_factory=list)

    def _signers(self) -> list[Address]:
        signers: list[Address] = []
        candidates = []
        if self.proposal_key.address != EMPTY_ADDRESS:
            candidates.append(self.proposal_key.address)
        candidates.append(self.payer)
        candidates.extend(self.authorizers)
        for address in candidates:
            if address not in signers:
                signers.append(address)
        return signers

    def _payload(self) -> list:
        return [
            self.script or b"",
            list(self.arguments),
            self.reference_block_id,
            self.gas_limit,
            self.proposal_key.address.raw,
            self.proposal_key.key_index,
            self.proposal_key.sequence_number,
            self.payer.raw,
            [a.raw for a in self.authorizers],
        ]

    def _signatures(self, signatures) -> list:
        index = {address: i for i, address in enumerate(self._signers())}
        return [
            [index.get(s.address, s.signer_index), s.key_index, s.signature]
            for s in signatures
        ]

    def encode(self) -> bytes:
        """RLP encoding of the full transaction."""
        return rlp.encode(
            [
                self._payload(),
                self._signatures(self.payload_signatures),
                self._signatures(self.envelope_signatures),
            ]
        )

    def id(self) -> str:
        """Hex identifier: SHA3-256 of the encoded transaction."""
        return hashlib.sha3_256(self.encode()).hexdigest()

    @classmethod
    def from_payload(cls, payload: bytes) -> "Transaction":
        """Decode a hex-encoded RLP transaction."""
        text = payload.decode("utf-8", errors="replace").strip()
        try:
            item = rlp.decode(_hex_decode(text))
            return cls._from_item(item)
        except ValueError as err:
            raise ValueError(f"failed to decode partial transaction from {text}: {err}") from err

    @classmethod
    def _from_item(cls, item) -> "Transaction":
        if not isinstance(item, list):
            raise ValueError("rlp: expected list")
        if len(item) == 3 and isinstance(item[0], list):
            payload, payload_sigs, envelope_sigs = item
        else:
            payload, payload_sigs, envelope_sigs = item, [], []
        if len(payload) != 9 or not isinstance(payload[1], list) or not isinstance(payload[8], list):
            raise ValueError("rlp: invalid transaction payload")
        script, arguments, ref_id, gas, p_addr, p_index, p_seq, payer, auths = payload
        if not isinstance(script, bytes) or not isinstance(ref_id, bytes):
            raise ValueError("rlp: invalid transaction payload")
        tx = cls(
            script=script,
            arguments=[a for a in arguments],
            reference_block_id=ref_id.rjust(32, b"\x00"),
            gas_limit=_uint(gas),
            proposal_key=ProposalKey(_addr(p_addr), _uint(p_index), _uint(p_seq)),
            payer=_addr(payer),
            authorizers=[_addr(a) for a in auths],
        )
        signers = tx._signers()
        tx.payload_signatures = [_signature(s, signers) for s in payload_sigs]
        tx.envelope_signatures = [_signature(s, signers) for s in envelope_sigs]
        return tx


def _signature(item, signers: list[Address]) -> TransactionSignature:
    if not isinstance(item, list) or len(item) != 3:
        raise ValueError("rlp: invalid signature")
    signer_index = _uint(item[0])
    if signer_index >= len(signers):
        raise ValueError(f"signer index {signer_index} out of range")
    return TransactionSignature(signers[signer_index], item[2], _uint(item[1]), signer_index)


def _cadence_type(value: Any) -> str:
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, int):
        return "Int"
    return "String"


@dataclass
class EventField:
    name: str
    type: str
    value: Any
    value_type: Optional[str] = None

    @property
    def cadence_type(self) -> str:
        return self.value_type or _cadence_type(self.value)

    def _json(self) -> Any:
        return self.value if isinstance(self.value, bool) else str(self.value)


@dataclass
class Event:
    type: str
    index: int = 0
    fields: list[EventField] = field(default_factory=list)
    transaction_id: bytes = _EMPTY_ID

    def values_json(self) -> bytes:
        """JSON-Cadence encoding of the event value."""
        doc = {
            "value": {
                "id": self.type,
                "fields": [
                    {"value": {"value": f._json(), "type": f.cadence_type}, "name": f.name}
                    for f in self.fields
                ],
            },
            "type": "Event",
        }
        return (json.dumps(doc, separators=(",", ":")) + "\n").encode()

    def render(self) -> str:
        text = (
            f"\n    Index\t{self.index}\n    Type\t{self.type}\n"
            f"    Tx ID\t{self.transaction_id.hex()}\n    Values\n"
        )
        return text + "".join(f"\t\t- {f.name} ({f.type}): {f.value} \n" for f in self.fields)

    def __str__(self) -> str:
        return self.type


@dataclass
class TransactionResult:
    status: TransactionStatus = TransactionStatus.UNKNOWN
    error: Optional[str] = None
    events: list[Event] = field(default_factory=list)
    block_id: bytes = _EMPTY_ID
    block_height: int = 0