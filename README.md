# evmkit

Reference data for the Ethereum Virtual Machine instruction set: opcode
definitions, per-instruction traits (name, immediate size, stack
requirements, terminating flag, introducing revision) and base gas cost
tables for every EVM revision from Frontier to Cancun.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Opcodes and revisions

`evmkit.opcodes` defines two integer enums:

- `Revision` lists the EVM revisions in chronological order, from
  `FRONTIER` (0) to `CANCUN` (12), so revisions compare naturally
  (`Revision.BERLIN > Revision.ISTANBUL`). `MAX_REVISION` is `CANCUN` and
  `LATEST_STABLE_REVISION` is `SHANGHAI`.
- `Opcode` holds every opcode defined in at least one revision.

```python
from evmkit.opcodes import (
    Opcode, is_defined, identifier, defined_opcodes, undefined_opcodes,
    is_small_push, is_large_push,
)

is_defined(0x0C)               # False
is_defined(Opcode.ADD)         # True
identifier(Opcode.PUSH3)       # "push3"
identifier(Opcode.AND)         # "and_"
identifier(Opcode.RETURN)      # "return_"
is_small_push(Opcode.PUSH8)    # True  (PUSH1 to PUSH8)
is_large_push(Opcode.PUSH9)    # True  (PUSH9 to PUSH32)
```

`identifier` gives the lower-case handler name of a defined opcode, with a
trailing underscore for `and_`, `or_`, `xor_`, `not_` and `return_`. It
raises `ValueError` for a value that is not a defined opcode.
`is_defined` and `identifier` raise `ValueError` for values outside 0–255.

`defined_opcodes()` returns a tuple of all `Opcode` members in ascending
order; `undefined_opcodes()` returns a tuple of the remaining byte values.

## Instruction traits and gas costs

`evmkit.instructions` provides the per-revision base gas costs and the
revision-independent `Traits` of each instruction.

```python
from evmkit.instructions import (
    UNDEFINED, gas_cost, gas_cost_table, get_traits, has_const_gas_cost, is_defined_in,
)
from evmkit.opcodes import Opcode, Revision

gas_cost(Revision.BERLIN, Opcode.SLOAD)              # 100
gas_cost(Revision.FRONTIER, Opcode.SHL)              # -1, i.e. UNDEFINED
is_defined_in(Revision.CONSTANTINOPLE, Opcode.SHL)   # True

t = get_traits(Opcode.CALL)
t.name, t.stack_height_required, t.stack_height_change  # ("CALL", 7, -6)
t.since                                                 # Revision.FRONTIER

has_const_gas_cost(Opcode.ADD)      # True
has_const_gas_cost(Opcode.BALANCE)  # False
has_const_gas_cost(Opcode.SHL)      # False, missing in Frontier
```

`gas_cost_table(rev)` returns the full 256-entry tuple for a revision,
indexed by opcode value, with `UNDEFINED` (-1) for instructions not
available in it.

`Traits` is a frozen dataclass with `name`, `immediate_size`,
`is_terminating`, `stack_height_required`, `stack_height_change` and
`since`. For an undefined byte value `get_traits` returns empty traits
whose `name` and `since` are `None`.

The module also exports the EIP-2929 constants `COLD_SLOAD_COST`,
`COLD_ACCOUNT_ACCESS_COST`, `WARM_STORAGE_READ_COST` and
`ADDITIONAL_COLD_ACCOUNT_ACCESS_COST`.

## What this package does not do

evmkit only describes the instruction set. It does not decode, analyse or
execute bytecode, has no virtual machine or interpreter, no state, storage
or account model, and does not compute dynamic gas costs (memory expansion,
cold access surcharges, call stipends and the like). It has no command-line
tool.