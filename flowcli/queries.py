"""Commands that build, decode and fetch transactions."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Sequence

from flowcli.address import Address, parse_address
from flowcli.model import Transaction
from flowcli.result import TransactionReport
from flowcli.state import DEFAULT_SERVICE_ACCOUNT, State

ID_LENGTH = 32
_MAX_UINT64 = 2**64 - 1

Approver = Callable[[Transaction], bool]


@dataclass
class BuildOptions:
    args_json: str = ""
    proposer: str = DEFAULT_SERVICE_ACCOUNT
    proposer_key_index: int = 0
    payer: str = DEFAULT_SERVICE_ACCOUNT
    authorizers: list[str] = field(default_factory=lambda: [DEFAULT_SERVICE_ACCOUNT])
    gas_limit: int = 1000


def _hex_to_id(text: str) -> bytes:
    """Decode hex into a left-aligned 32 byte identifier; invalid hex is empty."""
    try:
        if len(text) % 2:
            raise ValueError("odd length")
        data = bytes.fromhex(text)
    except ValueError:
        data = b""
    return data[:ID_LENGTH].ljust(ID_LENGTH, b"\x00")


@dataclass(frozen=True)
class BlockQuery:
    """Selects a block by ID, height or as the latest."""

    id: Optional[bytes] = None
    height: Optional[int] = None
    latest: bool = False

    @classmethod
    def parse(cls, value: str) -> "BlockQuery":
        if value == "latest":
            return cls(latest=True)
        if value.isascii() and value.isdigit() and int(value) <= _MAX_UINT64:
            return cls(height=int(value))
        block_id = _hex_to_id(value)
        if block_id != bytes(ID_LENGTH):
            return cls(id=block_id)
        raise ValueError(
            f'invalid query: {value}, valid are: "latest", block height or block ID'
        )


def get_address(address: str, state: State) -> Address:
    """Use the value as an address if valid on any chain, else as an account name."""
    parsed, valid = parse_address(address)
    if valid:
        return parsed
    return state.accounts.by_name(address).address


# --- argument parsing -------------------------------------------------------

_PARAMETERS_START = re.compile(r"\b(?:transaction|fun\s+main)\s*\(")
_INTEGER_TYPE = re.compile(r"(U?Int|Word)(8|16|32|64|128|256)?")
_ADDRESS_TEXT = re.compile(r"(0x)?[0-9a-fA-F]{1,16}")


def _json_error(err: json.JSONDecodeError) -> str:
    if err.msg == "Expecting value":
        if err.pos < len(err.doc):
            return f"invalid character '{err.doc[err.pos]}' looking for beginning of value"
        return "unexpected end of JSON input"
    return err.msg


def _parameter_types(code: str) -> list[str]:
    match = _PARAMETERS_START.search(code)
    if match is None:
        return []
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in code[match.end():]:
        if ch in "([{<":
            depth += 1
        elif ch in ")]}>":
            if depth == 0:
                break
            depth -= 1
        if ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    types = []
    for part in parts:
        part = part.strip()
        if not part:
            continue
        _, _, type_name = part.partition(":")
        types.append(type_name.strip())
    return types


def _integer_bounds(kind: str, bits: Optional[str]) -> tuple[Optional[int], Optional[int]]:
    if bits is None:
        return (None, None) if kind == "Int" else (0, None)
    size = int(bits)
    if kind == "Int":
        return -(2 ** (size - 1)), 2 ** (size - 1) - 1
    return 0, 2**size - 1


def _cadence_value(type_name: str, text: str) -> dict:
    if type_name.endswith("?"):
        if text == "nil":
            return {"value": None, "type": "Optional"}
        return {"value": _cadence_value(type_name[:-1], text), "type": "Optional"}
    if type_name == "String":
        return {"value": text, "type": "String"}
    if type_name == "Bool":
        if text not in ("true", "false"):
            raise ValueError(f"invalid Bool value: {text}")
        return {"value": text == "true", "type": "Bool"}
    integer = _INTEGER_TYPE.fullmatch(type_name)
    if integer:
        try:
            number = int(text, 10)
        except ValueError:
            raise ValueError(f"invalid {type_name} value: {text}") from None
        low, high = _integer_bounds(*integer.groups())
        if (low is not None and number < low) or (high is not None and number > high):
            raise ValueError(f"{type_name} value out of range: {text}")
        return {"value": str(number), "type": type_name}
    if type_name in ("Fix64", "UFix64"):
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValueError(f"invalid {type_name} value: {text}") from None
        if not number.is_finite() or (type_name == "UFix64" and number < 0):
            raise ValueError(f"invalid {type_name} value: {text}")
        return {"value": f"{number:.8f}", "type": type_name}
    if type_name == "Address":
        if not _ADDRESS_TEXT.fullmatch(text):
            raise ValueError(f"invalid Address value: {text}")
        return {"value": "0x" + Address.from_hex(text).hex(), "type": "Address"}
    raise ValueError(f"unsupported argument type: {type_name}")


def _encode_value(value: Any) -> bytes:
    return (json.dumps(value, separators=(",", ":")) + "\n").encode()


def _arguments_from_json(text: str) -> list[bytes]:
    try:
        values = json.loads(text)
    except json.JSONDecodeError as err:
        raise ValueError(_json_error(err)) from err
    if not isinstance(values, list):
        raise ValueError("arguments must be a JSON array")
    for value in values:
        if not isinstance(value, dict) or "type" not in value:
            raise ValueError("each argument must be a JSON-Cadence value with a type")
    return [_encode_value(value) for value in values]


def _arguments_from_text(args: Sequence[str], code: bytes) -> list[bytes]:
    types = _parameter_types(code.decode("utf-8", errors="replace"))
    if len(args) != len(types):
        raise ValueError(f"argument count is {len(args)}, expected {len(types)}")
    return [_encode_value(_cadence_value(t, a)) for t, a in zip(types, args)]


def _parse_arguments(args_json: str, args: Sequence[str], code: bytes) -> list[bytes]:
    """Arguments from JSON-Cadence if given, else typed by the code's parameters."""
    try:
        if args_json:
            return _arguments_from_json(args_json)
        return _arguments_from_text(args, code)
    except ValueError as err:
        raise ValueError(f"error parsing transaction arguments: {err}") from err


def _read_code(state: State, filename: str) -> bytes:
    try:
        return state.read_file(filename)
    except OSError as err:
        raise ValueError(f"error loading transaction file: {err}") from err


# --- commands -----------------------------------------------------------------


def build(
    args: Sequence[str],
    options: Optional[BuildOptions] = None,
    services=None,
    state: Optional[State] = None,
    yes: bool = False,
    approve: Optional[Approver] = None,
) -> TransactionReport:
    """Build an unsigned transaction from a code file and its arguments."""
    options = options or BuildOptions()
    proposer = get_address(options.proposer, state)
    authorizers = [get_address(name, state) for name in options.authorizers]
    payer = get_address(options.payer, state)

    filename = args[0]
    code = _read_code(state, filename)
    arguments = _parse_arguments(options.args_json, args[1:], code)

    tx = services.build_transaction(
        proposer=proposer,
        authorizers=authorizers,
        payer=payer,
        proposer_key_index=options.proposer_key_index,
        code=code,
        arguments=arguments,
        location=filename,
        gas_limit=options.gas_limit,
    )

    if not yes and not (approve is not None and approve(tx)):
        raise ValueError("transaction was not approved")

    return TransactionReport(tx=tx, include=["code", "payload", "signatures"])


def decode(args: Sequence[str], reader, include: Optional[Sequence[str]] = None) -> TransactionReport:
    """Decode a hex-encoded RLP transaction file."""
    filename = args[0]
    try:
        payload = reader.read_file(filename)
    except OSError as err:
        raise ValueError(f"failed to read transaction from {filename}: {err}") from err
    tx = Transaction.from_payload(payload)
    return TransactionReport(tx=tx, include=list(include or []))


def get(
    args: Sequence[str],
    services,
    sealed: bool = True,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> TransactionReport:
    """Fetch a transaction and its result by ID."""
    text = args[0]
    if text.startswith("0x"):
        text = text[2:]
    tx, result = services.get_transaction_by_id(_hex_to_id(text), sealed)
    return TransactionReport(
        tx=tx, result=result, include=list(include or []), exclude=list(exclude or [])
    )


def get_system_transaction(
    args: Sequence[str],
    services,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> TransactionReport:
    """Fetch the system transaction of the block selected by ID, height or latest."""
    query = BlockQuery.parse(args[0])
    block = services.get_block(query)
    tx, result = services.get_system_transaction(block.id)
    return TransactionReport(
        tx=tx, result=result, include=list(include or []), exclude=list(exclude or [])
    )