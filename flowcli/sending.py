"""Commands that sign transactions and send them to the network."""

from __future__ import annotations

import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Optional, Sequence

from flowcli.model import Transaction
from flowcli.queries import Approver, _parse_arguments, _read_code
from flowcli.result import TransactionReport
from flowcli.state import Account, AccountNotFoundError, DEFAULT_SERVICE_ACCOUNT, State
from flowcli.util import print_emoji

SUCCESS_EMOJI = print_emoji("🎉")


@dataclass
class SendOptions:
    args_json: str = ""
    signer: str = ""
    proposer: str = ""
    payer: str = ""
    authorizers: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    gas_limit: int = 1000


@dataclass
class SignOptions:
    signer: list[str] = field(default_factory=lambda: [DEFAULT_SERVICE_ACCOUNT])
    include: list[str] = field(default_factory=list)
    from_remote_url: str = ""


def _account(state: State, role: str, name: str) -> Account:
    try:
        return state.accounts.by_name(name)
    except AccountNotFoundError:
        raise ValueError(f"{role} account: [{name}] doesn't exists in configuration") from None


def send(
    args: Sequence[str],
    options: Optional[SendOptions] = None,
    services=None,
    state: Optional[State] = None,
) -> TransactionReport:
    """Send the transaction in the code file named by the first argument."""
    filename = args[0]
    code = _read_code(state, filename)
    return send_transaction(code, args, filename, services, state, options or SendOptions())


def send_transaction(
    code: bytes,
    args: Sequence[str],
    location: str,
    services,
    state: State,
    options: SendOptions,
) -> TransactionReport:
    """Resolve the signing roles, parse the arguments and send the transaction."""
    proposer = _account(state, "proposer", options.proposer) if options.proposer else None
    payer = _account(state, "payer", options.payer) if options.payer else None
    authorizers = [_account(state, "authorizer", name) for name in options.authorizers]

    signer_name = options.signer
    if not signer_name:
        if proposer is None and payer is None and not authorizers:
            signer_name = state.service_account
        elif proposer is None or payer is None:
            raise ValueError("proposer/payer flags are required when signer flag is not used")

    if signer_name:
        if proposer is not None or payer is not None or authorizers:
            raise ValueError(
                "signer flag cannot be combined with payer/proposer/authorizer flags"
            )
        signer = _account(state, "signer", signer_name)
        proposer = payer = signer
        authorizers.append(signer)

    arguments = _parse_arguments(options.args_json, args[1:], code)

    tx, result = services.send_transaction(
        proposer=proposer,
        authorizers=authorizers,
        payer=payer,
        code=code,
        arguments=arguments,
        location=location,
        gas_limit=options.gas_limit,
    )
    return TransactionReport(
        tx=tx, result=result, include=list(options.include), exclude=list(options.exclude)
    )


def send_signed(
    args: Sequence[str],
    reader,
    services,
    yes: bool = False,
    approve: Optional[Approver] = None,
    include: Optional[Sequence[str]] = None,
    exclude: Optional[Sequence[str]] = None,
) -> TransactionReport:
    """Send a signed, hex-encoded RLP transaction read from a file."""
    filename = args[0]
    try:
        payload = reader.read_file(filename)
    except OSError as err:
        raise ValueError(f"error loading transaction payload: {err}") from err

    tx = Transaction.from_payload(payload)
    if not yes and not (approve is not None and approve(tx)):
        raise ValueError("transaction was not approved for sending")

    sent, result = services.send_signed_transaction(tx)
    return TransactionReport(
        tx=sent, result=result, include=list(include or []), exclude=list(exclude or [])
    )


def sign(
    args: Sequence[str],
    options: Optional[SignOptions] = None,
    services=None,
    state: Optional[State] = None,
    yes: bool = False,
    approve: Optional[Approver] = None,
) -> TransactionReport:
    """Sign a built transaction from a file or a remote URL; the payer signs last."""
    options = options or SignOptions()
    remote = options.from_remote_url

    if remote and args:
        raise ValueError("only use one, filename argument or --from-remote-url <url>")

    if remote:
        if yes:
            raise ValueError("--yes is not supported with this flag")
        source = remote
    else:
        if not args:
            raise ValueError("filename argument is required")
        source = args[0]

    try:
        payload = get_rlp_transaction(source) if remote else state.read_file(source)
    except (OSError, ValueError) as err:
        raise ValueError(f"failed to read partial transaction from {source}: {err}") from err

    tx = Transaction.from_payload(payload)
    signers = [_account(state, "signer", name) for name in options.signer]
    signers.sort(key=lambda account: account.address == tx.payer)
    if not signers:
        raise ValueError("at least one signer is required")

    signed: Optional[Transaction] = None
    for signer in signers:
        if not yes and not (approve is not None and approve(tx)):
            raise ValueError("transaction was not approved for signing")
        signed = services.sign_transaction_payload(signer, payload)
        payload = signed.encode().hex().encode()

    if remote:
        post_rlp_transaction(remote, signed)
        print(f"{SUCCESS_EMOJI} Signed RLP Posted successfully")

    return TransactionReport(tx=signed, include=list(options.include))


def get_rlp_transaction(url: str) -> bytes:
    """Download a hex-encoded RLP transaction."""
    try:
        with urllib.request.urlopen(url) as response:
            if response.status != 200:
                raise ValueError("error downloading RLP identifier")
            return response.read()
    except urllib.error.HTTPError:
        raise ValueError("error downloading RLP identifier") from None


def post_rlp_transaction(url: str, tx: Transaction) -> None:
    """Post the hex-encoded signed transaction back to the server."""
    request = urllib.request.Request(
        url,
        data=tx.encode().hex().encode(),
        headers={"Content-Type": "application/text"},
        method="POST",
    )
    try:
        with urllib.request.urlopen(request) as response:
            if response.status != 200:
                raise ValueError("error posting signed RLP")
    except urllib.error.HTTPError:
        raise ValueError("error posting signed RLP") from None