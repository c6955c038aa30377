"""Small helpers shared by the commands."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric import ec

ENV_PREFIX = "FLOW"

_STAGING_NETWORKS = ("testnet", "mainnet")


def print_emoji(emoji: str) -> str:
    """Return the emoji, or nothing on Windows consoles."""
    return "" if sys.platform == "win32" else emoji


def message_with_emoji_prefix(emoji: str, message: str) -> str:
    return f"{print_emoji(emoji + ' ')}{message}"


def add_cdc_extension(name: str) -> str:
    return name if name.endswith(".cdc") else f"{name}.cdc"


def strip_cdc_extension(name: str) -> str:
    base = name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return name if dot < 0 else name[: len(name) - (len(base) - dot)]


def add_to_gitignore(filename: str, loader) -> None:
    """Append a line to .gitignore in the working directory, creating it if needed."""
    path = os.path.join(os.getcwd(), ".gitignore")
    existing = ""
    if Path(path).exists():
        existing = loader.read_file(path).decode()
    loader.write_file(path, f"{existing}\n{filename}".encode())


def validate_ecdsa_p256_pub(key: str) -> None:
    """Raise ValueError unless key is a hex-encoded raw ECDSA P-256 public key."""
    text = key[2:] if key.startswith("0x") else key
    try:
        raw = bytes.fromhex(text)
    except ValueError as err:
        raise ValueError(f"failed to decode public key hex string: {err}") from err
    try:
        if len(raw) != 64:
            raise ValueError(f"input has incorrect ECDSA_P256 key size, got {len(raw)}, expects 64")
        ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256R1(), b"\x04" + raw)
    except ValueError as err:
        raise ValueError(f"failed to decode public key: {err}") from err


def check_network(network_name: str) -> None:
    if network_name not in _STAGING_NETWORKS:
        raise ValueError(
            "staging contracts is only supported on testnet & mainnet networks, "
            "see https://cadence-lang.org/docs/cadence-migration-guide for more information"
        )


def normalize_line_endings(s: str) -> str:
    return s.replace("\r\n", "\n")


def pluralize(word: str, count: int) -> str:
    return word if count == 1 else word + "s"


def contains_flag(flags, name: str) -> bool:
    """Whether name is among the given flag values."""
    return name in (flags or ())