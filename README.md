# flowcli

Work with Flow blockchain transactions from Python: build unsigned
transactions, sign them, send them, decode hex-encoded RLP payloads and
render transactions and their results as text or JSON.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command

Show the installed version of the package:

```
flowcli-version
flowcli-version --verbose          # also list installed dependencies
flowcli-version --format json
```

`--format` accepts `text` (the default), `inline` or `json`; any other
value exits with `unsupported format: ...`.

## Modules

- `flowcli.address` – `Address` (eight bytes; `Address.from_hex`, `hex()`,
  `is_valid(chain)`), `ChainID` (`MAINNET`, `TESTNET`, `EMULATOR`),
  `parse_address` and `get_address_network`.
- `flowcli.rlp` – `encode` and `decode` for RLP data (bytes, non-negative
  ints and nested lists).
- `flowcli.model` – `Transaction`, `ProposalKey`, `TransactionSignature`,
  `Event`, `EventField`, `TransactionResult` and `TransactionStatus`.
  `Transaction.from_payload` decodes a hex-encoded RLP payload;
  `Transaction.encode` gives the RLP encoding and `Transaction.id` its
  SHA3-256 hex digest.
- `flowcli.result` – `TransactionReport` renders a transaction and an
  optional result with `str()`, `to_json()` and `oneliner()`. The `include`
  list may hold `signatures`, `code`, `payload` and `fee-events`; the
  `exclude` list may hold `events`. `new_transaction_result` builds a report
  from a transaction and a result.
- `flowcli.tabwriter` – `TabWriter`, an elastic tab-stop aligner, and
  `create_tab_writer`.
- `flowcli.state` – `Account`, `Accounts` (`by_name`, `add_or_update`),
  `AccountNotFoundError`, `State`, `MemoryReaderWriter` and the `Services`
  protocol.
- `flowcli.queries` – `build`, `decode`, `get`, `get_system_transaction`,
  `get_address`, `BuildOptions` and `BlockQuery` (`parse` accepts
  `latest`, a block height or a block ID).
- `flowcli.sending` – `send`, `send_transaction`, `send_signed`, `sign`,
  `SendOptions`, `SignOptions`, and `get_rlp_transaction` /
  `post_rlp_transaction` for fetching a payload from a URL and posting the
  signed payload back.
- `flowcli.util` – helpers such as `add_cdc_extension`,
  `strip_cdc_extension`, `pluralize`, `normalize_line_endings`,
  `contains_flag`, `check_network`, `add_to_gitignore` and
  `validate_ecdsa_p256_pub`.

## Example

```python
from flowcli.model import Transaction
from flowcli.result import TransactionReport

with open("built.rlp", "rb") as f:
    tx = Transaction.from_payload(f.read())
print(TransactionReport(tx=tx, include=["code", "payload"]))
```

Errors are raised as exceptions. An unknown account name raises
`AccountNotFoundError` from `Accounts.by_name`; the commands turn it into a
`ValueError` such as `signer account: [alice] doesn't exists in
configuration`. A transaction that is not approved (neither `yes=True` nor
an `approve` callback returning true) raises a `ValueError` saying so.

## What this package does not do

- It has no network backend. Every command that talks to an access node
  (`build`, `get`, `get_system_transaction`, `send`, `send_signed`,
  `sign`) calls an object you pass in that implements the `Services`
  protocol; signing keys and signing itself live there too.
- It has no command line for the transaction commands; they are Python
  functions. The only command installed is `flowcli-version`.
- There is no configuration file loader. Accounts are added to `Accounts`
  in code, and files are read through a reader object such as
  `MemoryReaderWriter`, which keeps them in memory only.
- Arguments given as plain text are typed only for `String`, `Bool`, the
  `Int`/`UInt`/`Word` families, `Fix64`, `UFix64`, `Address` and optionals
  of these; other types must be passed as JSON-Cadence through `args_json`.