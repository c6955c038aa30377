"""Presentation of transactions and their results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from flowcli.model import Transaction, TransactionResult, TransactionStatus
from flowcli.tabwriter import create_tab_writer
from flowcli.util import contains_flag, print_emoji

OK_EMOJI = print_emoji("✅")
ERROR_EMOJI = print_emoji("❌")

_FEE_EVENTS_COUNT_APPENDED = 5
_FEE_DEDUCTED_EVENT = "FeesDeducted"


def _addresses(addresses) -> str:
    return "[" + " ".join(a.hex() for a in addresses) + "]"


@dataclass
class TransactionReport:
    tx: Transaction
    result: Optional[TransactionResult] = None
    include: Sequence[str] = field(default_factory=list)
    exclude: Sequence[str] = field(default_factory=list)

    def to_json(self) -> dict:
        data: dict = {
            "id": self.tx.id(),
            "payload": self.tx.encode().hex(),
            "authorizers": _addresses(self.tx.authorizers),
            "payer": self.tx.payer.hex(),
        }
        if self.result is not None:
            data["block_id"] = self.result.block_id.hex()
            data["block_height"] = self.result.block_height
            data["status"] = str(self.result.status)
            data["events"] = [
                {"index": e.index, "type": e.type, "values": e.values_json()}
                for e in self.result.events
            ]
            if self.result.error is not None:
                data["error"] = self.result.error
        return data

    def _signature_lines(self, label: str, signatures, full: bool) -> str:
        parts = []
        for i, sig in enumerate(signatures):
            if full:
                parts.append(
                    f"\n{label} Signature {i}:\n    Address\t{sig.address.hex()}\n"
                    f"    Signature\t{sig.signature.hex()}\n    Key Index\t{sig.key_index}\n"
                )
            else:
                parts.append(f"\n{label} Signature {i}: {sig.address.hex()}")
        return "".join(parts)

    def __str__(self) -> str:
        w = create_tab_writer()
        tx, res = self.tx, self.result
        include, exclude = self.include, self.exclude
        show_sigs = contains_flag(include, "signatures")

        if res is not None:
            w.write(f"Block ID\t{res.block_id.hex()}\n")
            w.write(f"Block Height\t{res.block_height}\n")
            if res.error is not None:
                w.write(f"{ERROR_EMOJI} Transaction Error \n{res.error}\n\n\n")
            badge = OK_EMOJI if res.status is TransactionStatus.SEALED else ""
            w.write(f"Status\t{badge} {res.status}\n")

        w.write(f"ID\t{tx.id()}\n")
        w.write(f"Payer\t{tx.payer.hex()}\n")
        w.write(f"Authorizers\t{_addresses(tx.authorizers)}\n")
        key = tx.proposal_key
        w.write(
            f"\nProposal Key:\t\n    Address\t{key.address.hex()}\n"
            f"    Index\t{key.key_index}\n    Sequence\t{key.sequence_number}\n"
        )
        if not tx.payload_signatures:
            w.write("\nNo Payload Signatures\n")
        if not tx.envelope_signatures:
            w.write("\nNo Envelope Signatures\n")
        w.write(self._signature_lines("Payload", tx.payload_signatures, show_sigs))
        w.write(self._signature_lines("Envelope", tx.envelope_signatures, show_sigs))
        if not show_sigs:
            w.write("\nSignatures (minimized, use --include signatures)")

        if res is not None and not contains_flag(exclude, "events"):
            events = list(res.events)
            if not contains_flag(include, "fee-events") and any(
                _FEE_DEDUCTED_EVENT in e.type for e in events
            ):
                events = events[: max(0, len(events) - _FEE_EVENTS_COUNT_APPENDED)]
            rendered = "".join(e.render() for e in events) or "None"
            w.write(f"\n\nEvents:\t {rendered}\n")

        if tx.script is not None:
            if contains_flag(include, "code"):
                if not tx.arguments:
                    w.write("\n\nArguments\tNo arguments\n")
                else:
                    w.write(f"\n\nArguments ({len(tx.arguments)}):\n")
                    for i, arg in enumerate(tx.arguments):
                        w.write(f"    - Argument {i}: {arg.decode('utf-8', errors='replace')}\n")
                w.write(f"\nCode\n\n{tx.script.decode('utf-8', errors='replace')}\n")
            else:
                w.write("\n\nCode (hidden, use --include code)")

        if contains_flag(include, "payload"):
            w.write(f"\n\nPayload:\n{tx.encode().hex()}")
        else:
            w.write("\n\nPayload (hidden, use --include payload)")

        if not contains_flag(include, "fee-events") and not contains_flag(exclude, "events"):
            w.write("\n\nFee Events (hidden, use --include fee-events)")

        w.flush()
        return w.getvalue()

    def oneliner(self) -> str:
        text = (
            f"ID: {self.tx.id()}, Payer: {self.tx.payer.hex()}, "
            f"Authorizer: {_addresses(self.tx.authorizers)}"
        )
        if self.result is not None:
            events = "[" + " ".join(str(e) for e in self.result.events) + "]"
            text += f", Status: {self.result.status}, Events: {events}"
        return text


def new_transaction_result(tx: Transaction, result: Optional[TransactionResult]) -> TransactionReport:
    return TransactionReport(tx=tx, result=result)