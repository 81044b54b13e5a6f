"""Per-revision gas costs and revision-independent traits of EVM instructions."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from evmkit.opcodes import MAX_REVISION, Opcode, Revision

#: The gas cost value marking an instruction as undefined in a revision.
UNDEFINED = -1

# EIP-2929 constants.
COLD_SLOAD_COST = 2100
COLD_ACCOUNT_ACCESS_COST = 2600
WARM_STORAGE_READ_COST = 100

#: Charged on top of the warm access cost when an account access turns out to be cold.
ADDITIONAL_COLD_ACCOUNT_ACCESS_COST = COLD_ACCOUNT_ACCESS_COST - WARM_STORAGE_READ_COST


def _byte(opcode: int) -> int:
    value = int(opcode)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"opcode value out of range: {value}")
    return value


def _revision(rev: int) -> Revision:
    return Revision(int(rev))


def _op_range(first: Opcode, last: Opcode) -> range:
    return range(first, last + 1)


# Gas cost changes introduced by each revision, applied on top of the previous one.
_FRONTIER_COSTS: dict[int, int] = {
    Opcode.STOP: 0,
    Opcode.ADD: 3,
    Opcode.MUL: 5,
    Opcode.SUB: 3,
    Opcode.DIV: 5,
    Opcode.SDIV: 5,
    Opcode.MOD: 5,
    Opcode.SMOD: 5,
    Opcode.ADDMOD: 8,
    Opcode.MULMOD: 8,
    Opcode.EXP: 10,
    Opcode.SIGNEXTEND: 5,
    Opcode.LT: 3,
    Opcode.GT: 3,
    Opcode.SLT: 3,
    Opcode.SGT: 3,
    Opcode.EQ: 3,
    Opcode.ISZERO: 3,
    Opcode.AND: 3,
    Opcode.OR: 3,
    Opcode.XOR: 3,
    Opcode.NOT: 3,
    Opcode.BYTE: 3,
    Opcode.KECCAK256: 30,
    Opcode.ADDRESS: 2,
    Opcode.BALANCE: 20,
    Opcode.ORIGIN: 2,
    Opcode.CALLER: 2,
    Opcode.CALLVALUE: 2,
    Opcode.CALLDATALOAD: 3,
    Opcode.CALLDATASIZE: 2,
    Opcode.CALLDATACOPY: 3,
    Opcode.CODESIZE: 2,
    Opcode.CODECOPY: 3,
    Opcode.GASPRICE: 2,
    Opcode.EXTCODESIZE: 20,
    Opcode.EXTCODECOPY: 20,
    Opcode.BLOCKHASH: 20,
    Opcode.COINBASE: 2,
    Opcode.TIMESTAMP: 2,
    Opcode.NUMBER: 2,
    Opcode.PREVRANDAO: 2,
    Opcode.GASLIMIT: 2,
    Opcode.POP: 2,
    Opcode.MLOAD: 3,
    Opcode.MSTORE: 3,
    Opcode.MSTORE8: 3,
    Opcode.SLOAD: 50,
    Opcode.SSTORE: 0,
    Opcode.JUMP: 8,
    Opcode.JUMPI: 10,
    Opcode.PC: 2,
    Opcode.MSIZE: 2,
    Opcode.GAS: 2,
    Opcode.JUMPDEST: 1,
    **{op: 3 for op in _op_range(Opcode.PUSH1, Opcode.PUSH32)},
    **{op: 3 for op in _op_range(Opcode.DUP1, Opcode.DUP16)},
    **{op: 3 for op in _op_range(Opcode.SWAP1, Opcode.SWAP16)},
    **{op: (op - Opcode.LOG0 + 1) * 375 for op in _op_range(Opcode.LOG0, Opcode.LOG4)},
    Opcode.CREATE: 32000,
    Opcode.CALL: 40,
    Opcode.CALLCODE: 40,
    Opcode.RETURN: 0,
    Opcode.INVALID: 0,
    Opcode.SELFDESTRUCT: 0,
}

_REVISION_CHANGES: dict[Revision, dict[int, int]] = {
    Revision.FRONTIER: _FRONTIER_COSTS,
    Revision.HOMESTEAD: {Opcode.DELEGATECALL: 40},
    Revision.TANGERINE_WHISTLE: {
        Opcode.BALANCE: 400,
        Opcode.EXTCODESIZE: 700,
        Opcode.EXTCODECOPY: 700,
        Opcode.SLOAD: 200,
        Opcode.CALL: 700,
        Opcode.CALLCODE: 700,
        Opcode.DELEGATECALL: 700,
        Opcode.SELFDESTRUCT: 5000,
    },
    Revision.SPURIOUS_DRAGON: {},
    Revision.BYZANTIUM: {
        Opcode.RETURNDATASIZE: 2,
        Opcode.RETURNDATACOPY: 3,
        Opcode.STATICCALL: 700,
        Opcode.REVERT: 0,
    },
    Revision.CONSTANTINOPLE: {
        Opcode.SHL: 3,
        Opcode.SHR: 3,
        Opcode.SAR: 3,
        Opcode.EXTCODEHASH: 400,
        Opcode.CREATE2: 32000,
    },
    Revision.PETERSBURG: {},
    Revision.ISTANBUL: {
        Opcode.BALANCE: 700,
        Opcode.CHAINID: 2,
        Opcode.EXTCODEHASH: 700,
        Opcode.SELFBALANCE: 5,
        Opcode.SLOAD: 800,
    },
    Revision.BERLIN: {
        op: WARM_STORAGE_READ_COST
        for op in (
            Opcode.EXTCODESIZE,
            Opcode.EXTCODECOPY,
            Opcode.EXTCODEHASH,
            Opcode.BALANCE,
            Opcode.CALL,
            Opcode.CALLCODE,
            Opcode.DELEGATECALL,
            Opcode.STATICCALL,
            Opcode.SLOAD,
        )
    },
    Revision.LONDON: {Opcode.BASEFEE: 2},
    Revision.PARIS: {},
    Revision.SHANGHAI: {Opcode.PUSH0: 2},
    Revision.CANCUN: {Opcode.DUPN: 3, Opcode.SWAPN: 3},
}


def _build_gas_costs() -> dict[Revision, tuple[int, ...]]:
    tables: dict[Revision, tuple[int, ...]] = {}
    costs: dict[int, int] = {}
    for rev in Revision:
        costs = {**costs, **_REVISION_CHANGES[rev]}
        tables[rev] = tuple(costs.get(op, UNDEFINED) for op in range(0x100))
    return tables


_GAS_COSTS = _build_gas_costs()

if not _GAS_COSTS[MAX_REVISION][Opcode.ADD] > 0:
    raise RuntimeError("gas costs missing for a revision")


@dataclass(frozen=True)
class Traits:
    """Revision-independent properties of an EVM instruction."""

    name: Optional[str] = None
    immediate_size: int = 0
    is_terminating: bool = False
    stack_height_required: int = 0
    stack_height_change: int = 0
    since: Optional[Revision] = None


_F = Revision.FRONTIER

# (opcode, immediate size, terminating, stack required, stack change, since)
_TRAIT_SPECS: list[tuple[Opcode, int, bool, int, int, Revision]] = [
    (Opcode.STOP, 0, True, 0, 0, _F),
    (Opcode.ADD, 0, False, 2, -1, _F),
    (Opcode.MUL, 0, False, 2, -1, _F),
    (Opcode.SUB, 0, False, 2, -1, _F),
    (Opcode.DIV, 0, False, 2, -1, _F),
    (Opcode.SDIV, 0, False, 2, -1, _F),
    (Opcode.MOD, 0, False, 2, -1, _F),
    (Opcode.SMOD, 0, False, 2, -1, _F),
    (Opcode.ADDMOD, 0, False, 3, -2, _F),
    (Opcode.MULMOD, 0, False, 3, -2, _F),
    (Opcode.EXP, 0, False, 2, -1, _F),
    (Opcode.SIGNEXTEND, 0, False, 2, -1, _F),
    (Opcode.LT, 0, False, 2, -1, _F),
    (Opcode.GT, 0, False, 2, -1, _F),
    (Opcode.SLT, 0, False, 2, -1, _F),
    (Opcode.SGT, 0, False, 2, -1, _F),
    (Opcode.EQ, 0, False, 2, -1, _F),
    (Opcode.ISZERO, 0, False, 1, 0, _F),
    (Opcode.AND, 0, False, 2, -1, _F),
    (Opcode.OR, 0, False, 2, -1, _F),
    (Opcode.XOR, 0, False, 2, -1, _F),
    (Opcode.NOT, 0, False, 1, 0, _F),
    (Opcode.BYTE, 0, False, 2, -1, _F),
    (Opcode.SHL, 0, False, 2, -1, Revision.CONSTANTINOPLE),
    (Opcode.SHR, 0, False, 2, -1, Revision.CONSTANTINOPLE),
    (Opcode.SAR, 0, False, 2, -1, Revision.CONSTANTINOPLE),
    (Opcode.KECCAK256, 0, False, 2, -1, _F),
    (Opcode.ADDRESS, 0, False, 0, 1, _F),
    (Opcode.BALANCE, 0, False, 1, 0, _F),
    (Opcode.ORIGIN, 0, False, 0, 1, _F),
    (Opcode.CALLER, 0, False, 0, 1, _F),
    (Opcode.CALLVALUE, 0, False, 0, 1, _F),
    (Opcode.CALLDATALOAD, 0, False, 1, 0, _F),
    (Opcode.CALLDATASIZE, 0, False, 0, 1, _F),
    (Opcode.CALLDATACOPY, 0, False, 3, -3, _F),
    (Opcode.CODESIZE, 0, False, 0, 1, _F),
    (Opcode.CODECOPY, 0, False, 3, -3, _F),
    (Opcode.GASPRICE, 0, False, 0, 1, _F),
    (Opcode.EXTCODESIZE, 0, False, 1, 0, _F),
    (Opcode.EXTCODECOPY, 0, False, 4, -4, _F),
    (Opcode.RETURNDATASIZE, 0, False, 0, 1, Revision.BYZANTIUM),
    (Opcode.RETURNDATACOPY, 0, False, 3, -3, Revision.BYZANTIUM),
    (Opcode.EXTCODEHASH, 0, False, 1, 0, Revision.CONSTANTINOPLE),
    (Opcode.BLOCKHASH, 0, False, 1, 0, _F),
    (Opcode.COINBASE, 0, False, 0, 1, _F),
    (Opcode.TIMESTAMP, 0, False, 0, 1, _F),
    (Opcode.NUMBER, 0, False, 0, 1, _F),
    (Opcode.PREVRANDAO, 0, False, 0, 1, _F),
    (Opcode.GASLIMIT, 0, False, 0, 1, _F),
    (Opcode.CHAINID, 0, False, 0, 1, Revision.ISTANBUL),
    (Opcode.SELFBALANCE, 0, False, 0, 1, Revision.ISTANBUL),
    (Opcode.BASEFEE, 0, False, 0, 1, Revision.LONDON),
    (Opcode.POP, 0, False, 1, -1, _F),
    (Opcode.MLOAD, 0, False, 1, 0, _F),
    (Opcode.MSTORE, 0, False, 2, -2, _F),
    (Opcode.MSTORE8, 0, False, 2, -2, _F),
    (Opcode.SLOAD, 0, False, 1, 0, _F),
    (Opcode.SSTORE, 0, False, 2, -2, _F),
    (Opcode.JUMP, 0, False, 1, -1, _F),
    (Opcode.JUMPI, 0, False, 2, -2, _F),
    (Opcode.PC, 0, False, 0, 1, _F),
    (Opcode.MSIZE, 0, False, 0, 1, _F),
    (Opcode.GAS, 0, False, 0, 1, _F),
    (Opcode.JUMPDEST, 0, False, 0, 0, _F),
    (Opcode.PUSH0, 0, False, 0, 1, Revision.SHANGHAI),
    *(
        (Opcode(op), op - Opcode.PUSH1 + 1, False, 0, 1, _F)
        for op in _op_range(Opcode.PUSH1, Opcode.PUSH32)
    ),
    *(
        (Opcode(op), 0, False, op - Opcode.DUP1 + 1, 1, _F)
        for op in _op_range(Opcode.DUP1, Opcode.DUP16)
    ),
    *(
        (Opcode(op), 0, False, op - Opcode.SWAP1 + 2, 0, _F)
        for op in _op_range(Opcode.SWAP1, Opcode.SWAP16)
    ),
    *(
        (Opcode(op), 0, False, op - Opcode.LOG0 + 2, -(op - Opcode.LOG0 + 2), _F)
        for op in _op_range(Opcode.LOG0, Opcode.LOG4)
    ),
    (Opcode.DUPN, 1, False, 0, 1, Revision.CANCUN),
    (Opcode.SWAPN, 1, False, 0, 0, Revision.CANCUN),
    (Opcode.CREATE, 0, False, 3, -2, _F),
    (Opcode.CALL, 0, False, 7, -6, _F),
    (Opcode.CALLCODE, 0, False, 7, -6, _F),
    (Opcode.RETURN, 0, True, 2, -2, _F),
    (Opcode.DELEGATECALL, 0, False, 6, -5, Revision.HOMESTEAD),
    (Opcode.CREATE2, 0, False, 4, -3, Revision.CONSTANTINOPLE),
    (Opcode.STATICCALL, 0, False, 6, -5, Revision.BYZANTIUM),
    (Opcode.REVERT, 0, True, 2, -2, Revision.BYZANTIUM),
    (Opcode.INVALID, 0, True, 0, 0, _F),
    (Opcode.SELFDESTRUCT, 0, True, 1, -1, _F),
]

_UNDEFINED_TRAITS = Traits()


def _build_traits() -> tuple[Traits, ...]:
    by_value = {
        int(op): Traits(op.name, imm, term, req, change, since)
        for op, imm, term, req, change, since in _TRAIT_SPECS
    }
    return tuple(by_value.get(v, _UNDEFINED_TRAITS) for v in range(0x100))


_TRAITS = _build_traits()


def gas_cost(rev: int, opcode: int) -> int:
    """Base gas cost of the instruction in the revision, or UNDEFINED."""
    return _GAS_COSTS[_revision(rev)][_byte(opcode)]


def gas_cost_table(rev: int) -> tuple[int, ...]:
    """The 256-entry gas cost table of the revision, indexed by opcode value."""
    return _GAS_COSTS[_revision(rev)]


def get_traits(opcode: int) -> Traits:
    """Traits of the instruction; undefined opcodes get empty traits with no name."""
    return _TRAITS[_byte(opcode)]


@lru_cache(maxsize=None)
def _const_gas(value: int) -> bool:
    first = _GAS_COSTS[Revision.FRONTIER][value]
    return all(table[value] == first for table in _GAS_COSTS.values())


def has_const_gas_cost(opcode: int) -> bool:
    """Tell whether the base gas cost is the same in every revision.

    Instructions missing in the first revision (such as SHL) do not qualify.
    """
    return _const_gas(_byte(opcode))


def is_defined_in(rev: int, opcode: int) -> bool:
    """Tell whether the instruction is available in the revision."""
    return gas_cost(rev, opcode) != UNDEFINED