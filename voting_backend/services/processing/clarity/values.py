"""Typed Clarity values.

Each class mirrors one variant of the Clarity value grammar. Values are
immutable and compare by content, so decoded results can be asserted on
directly.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Dict, Tuple, Union

from .principal import decode_principal_address, encode_principal_address


class ClarityType(IntEnum):
    """One-byte type prefixes of the Clarity wire encoding."""

    INT = 0x00
    UINT = 0x01
    BUFFER = 0x02
    BOOL_TRUE = 0x03
    BOOL_FALSE = 0x04
    PRINCIPAL_STANDARD = 0x05
    PRINCIPAL_CONTRACT = 0x06
    RESPONSE_OK = 0x07
    RESPONSE_ERR = 0x08
    OPTIONAL_NONE = 0x09
    OPTIONAL_SOME = 0x0A
    LIST = 0x0B
    TUPLE = 0x0C
    STRING_ASCII = 0x0D
    STRING_UTF8 = 0x0E


@dataclass(frozen=True)
class IntValue:
    value: int
    type_id: ClassVar[ClarityType] = ClarityType.INT


@dataclass(frozen=True)
class UIntValue:
    value: int
    type_id: ClassVar[ClarityType] = ClarityType.UINT


@dataclass(frozen=True)
class BufferValue:
    value: bytes
    type_id: ClassVar[ClarityType] = ClarityType.BUFFER


@dataclass(frozen=True)
class BoolValue:
    value: bool

    @property
    def type_id(self) -> ClarityType:
        return ClarityType.BOOL_TRUE if self.value else ClarityType.BOOL_FALSE


@dataclass(frozen=True)
class StandardPrincipalValue:
    """An account principal such as ``ST33Y8...``."""

    version: int
    hash160: bytes
    type_id: ClassVar[ClarityType] = ClarityType.PRINCIPAL_STANDARD

    @property
    def address(self) -> str:
        return encode_principal_address(self.version, self.hash160)

    @classmethod
    def from_address(cls, address: str) -> "StandardPrincipalValue":
        version, hash160 = decode_principal_address(address)
        return cls(version=version, hash160=hash160)


@dataclass(frozen=True)
class ContractPrincipalValue:
    """A contract principal such as ``ST33Y8....Blackadam-vote-contract``."""

    version: int
    hash160: bytes
    contract_name: str
    type_id: ClassVar[ClarityType] = ClarityType.PRINCIPAL_CONTRACT

    @property
    def address(self) -> str:
        issuer = encode_principal_address(self.version, self.hash160)
        return f"{issuer}.{self.contract_name}"

    @classmethod
    def from_address(cls, address: str) -> "ContractPrincipalValue":
        issuer, _, contract_name = address.partition(".")
        if not contract_name:
            raise ValueError(f"Not a contract principal: {address}")
        version, hash160 = decode_principal_address(issuer)
        return cls(version=version, hash160=hash160, contract_name=contract_name)


@dataclass(frozen=True)
class ResponseOkValue:
    value: "ClarityValue"
    type_id: ClassVar[ClarityType] = ClarityType.RESPONSE_OK


@dataclass(frozen=True)
class ResponseErrValue:
    value: "ClarityValue"
    type_id: ClassVar[ClarityType] = ClarityType.RESPONSE_ERR


@dataclass(frozen=True)
class NoneValue:
    type_id: ClassVar[ClarityType] = ClarityType.OPTIONAL_NONE


@dataclass(frozen=True)
class SomeValue:
    value: "ClarityValue"
    type_id: ClassVar[ClarityType] = ClarityType.OPTIONAL_SOME


@dataclass(frozen=True)
class ListValue:
    items: Tuple["ClarityValue", ...] = ()
    type_id: ClassVar[ClarityType] = ClarityType.LIST


@dataclass(frozen=True)
class TupleValue:
    data: Dict[str, "ClarityValue"] = field(default_factory=dict)
    type_id: ClassVar[ClarityType] = ClarityType.TUPLE

    def get(self, name: str) -> "ClarityValue":
        return self.data.get(name)


@dataclass(frozen=True)
class StringASCIIValue:
    value: str
    type_id: ClassVar[ClarityType] = ClarityType.STRING_ASCII


@dataclass(frozen=True)
class StringUTF8Value:
    value: str
    type_id: ClassVar[ClarityType] = ClarityType.STRING_UTF8


ClarityValue = Union[
    IntValue,
    UIntValue,
    BufferValue,
    BoolValue,
    StandardPrincipalValue,
    ContractPrincipalValue,
    ResponseOkValue,
    ResponseErrValue,
    NoneValue,
    SomeValue,
    ListValue,
    TupleValue,
    StringASCIIValue,
    StringUTF8Value,
]

PrincipalValue = Union[StandardPrincipalValue, ContractPrincipalValue]
