"""Flow account addresses and chain validation."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ADDRESS_LENGTH = 8

_LINEAR_CODE_N = 64

_PARITY_CHECK_MATRIX_COLUMNS = (
    0x00001, 0x00002, 0x00004, 0x00008, 0x00010, 0x00020, 0x00040, 0x00080,
    0x00100, 0x00200, 0x00400, 0x00800, 0x01000, 0x02000, 0x04000, 0x08000,
    0x10000, 0x20000, 0x40000, 0x7328D, 0x6689A, 0x6112F, 0x6084B, 0x433FD,
    0x42AAB, 0x41951, 0x233CE, 0x22A81, 0x21948, 0x1EF60, 0x1DECA, 0x1C639,
    0x1BDD8, 0x1A535, 0x194AC, 0x18C46, 0x1632B, 0x1529B, 0x14A43, 0x13184,
    0x12942, 0x118C1, 0x0F812, 0x0E027, 0x0D00E, 0x0C83C, 0x0B01D, 0x0A831,
    0x0982B, 0x07034, 0x0682A, 0x05819, 0x03807, 0x007D2, 0x00727, 0x0068E,
    0x0067C, 0x0059D, 0x004EB, 0x003B4, 0x0036A, 0x002D9, 0x001C7, 0x0003F,
)


class ChainID(str, enum.Enum):
    """Known Flow chains."""

    MAINNET = "flow-mainnet"
    TESTNET = "flow-testnet"
    EMULATOR = "flow-emulator"

    @property
    def code_word(self) -> int:
        return _CHAIN_CODE_WORDS[self]

    def __str__(self) -> str:
        return self.value


_CHAIN_CODE_WORDS = {
    ChainID.MAINNET: 0x0000000000000000,
    ChainID.TESTNET: 0x6834BA37B3980209,
    ChainID.EMULATOR: 0x1CB159857AF02018,
}


@dataclass(frozen=True)
class Address:
    """An eight byte Flow address."""

    raw: bytes = bytes(ADDRESS_LENGTH)

    def __post_init__(self) -> None:
        if len(self.raw) != ADDRESS_LENGTH:
            raise ValueError(f"address must be {ADDRESS_LENGTH} bytes")

    @classmethod
    def from_hex(cls, value: str) -> "Address":
        """Parse a hex string; invalid hex yields the empty address."""
        text = value[2:] if value.startswith(("0x", "0X")) else value
        if len(text) % 2:
            text = "0" + text
        try:
            data = bytes.fromhex(text)
        except ValueError:
            data = b""
        data = data[-ADDRESS_LENGTH:]
        return cls(data.rjust(ADDRESS_LENGTH, b"\x00"))

    def hex(self) -> str:
        return self.raw.hex()

    def __str__(self) -> str:
        return self.hex()

    def __int__(self) -> int:
        return int.from_bytes(self.raw, "big")

    def is_valid(self, chain: ChainID) -> bool:
        """Check the address against the chain's linear code."""
        code_word = int(self) ^ chain.code_word
        if code_word == 0:
            return False
        parity = 0
        for column in _PARITY_CHECK_MATRIX_COLUMNS:
            if code_word & 1:
                parity ^= column
            code_word >>= 1
        return parity == 0 and code_word == 0


EMPTY_ADDRESS = Address()


def parse_address(value: str) -> tuple[Address, bool]:
    """Parse an address and report whether it is valid on any known chain."""
    address = Address.from_hex(value)
    return address, any(address.is_valid(chain) for chain in ChainID)


def get_address_network(address: Address) -> ChainID:
    """Return the first chain on which the address is valid."""
    for chain in (ChainID.MAINNET, ChainID.TESTNET, ChainID.EMULATOR):
        if address.is_valid(chain):
            return chain
    raise ValueError(f"address not valid for any known chain: {address}")