import pytest

from evmkit.instructions import (
    ADDITIONAL_COLD_ACCOUNT_ACCESS_COST,
    COLD_ACCOUNT_ACCESS_COST,
    UNDEFINED,
    WARM_STORAGE_READ_COST,
    Traits,
    gas_cost,
    gas_cost_table,
    get_traits,
    has_const_gas_cost,
    is_defined_in,
)
from evmkit.opcodes import MAX_REVISION, Opcode, Revision, undefined_opcodes


def test_create_costs():
    assert gas_cost(Revision.FRONTIER, Opcode.CREATE) == 32000
    assert gas_cost(Revision.CONSTANTINOPLE, Opcode.CREATE2) == 32000


def test_selfdestruct_repriced_in_tangerine_whistle():
    assert gas_cost(Revision.TANGERINE_WHISTLE, Opcode.SELFDESTRUCT) == 5000
    assert gas_cost(Revision.HOMESTEAD, Opcode.SELFDESTRUCT) == gas_cost(
        Revision.FRONTIER, Opcode.STOP
    )


@pytest.mark.parametrize(
    "op",
    [
        Opcode.EXTCODESIZE,
        Opcode.EXTCODECOPY,
        Opcode.EXTCODEHASH,
        Opcode.BALANCE,
        Opcode.CALL,
        Opcode.CALLCODE,
        Opcode.DELEGATECALL,
        Opcode.STATICCALL,
        Opcode.SLOAD,
    ],
)
def test_berlin_warm_access_costs(op):
    assert gas_cost(Revision.BERLIN, op) == WARM_STORAGE_READ_COST
    assert (
        gas_cost(Revision.BERLIN, op) + ADDITIONAL_COLD_ACCOUNT_ACCESS_COST
        == COLD_ACCOUNT_ACCESS_COST
    )


def test_undefined_before_introduction():
    assert gas_cost(Revision.FRONTIER, Opcode.SHL) == UNDEFINED
    assert not is_defined_in(Revision.BYZANTIUM, Opcode.SHL)
    assert is_defined_in(Revision.CONSTANTINOPLE, Opcode.SHL)
    assert not is_defined_in(Revision.PARIS, Opcode.PUSH0)
    assert is_defined_in(Revision.SHANGHAI, Opcode.PUSH0)


def test_log_costs_grow_linearly():
    base = gas_cost(Revision.FRONTIER, Opcode.LOG0)
    costs = [gas_cost(Revision.FRONTIER, op) for op in range(Opcode.LOG0, Opcode.LOG4 + 1)]
    assert all(b - a == base for a, b in zip(costs, costs[1:]))


def test_defined_opcodes_stay_defined_in_later_revisions():
    revs = list(Revision)
    for earlier, later in zip(revs, revs[1:]):
        for op in Opcode:
            if is_defined_in(earlier, op):
                assert is_defined_in(later, op), (earlier, op)


def test_since_matches_gas_tables():
    for op in Opcode:
        since = get_traits(op).since
        assert since is not None
        for rev in Revision:
            assert is_defined_in(rev, op) == (rev >= since), (rev, op)


def test_undefined_opcodes_have_no_traits_and_no_cost():
    for value in undefined_opcodes():
        traits = get_traits(value)
        assert traits == Traits()
        assert traits.name is None
        assert not any(is_defined_in(rev, value) for rev in Revision)


def test_trait_names_match_opcode_names():
    for op in Opcode:
        assert get_traits(op).name == op.name


def test_known_traits():
    assert get_traits(Opcode.PUSH32).immediate_size == 32
    assert get_traits(Opcode.CALL) == Traits("CALL", 0, False, 7, -6, Revision.FRONTIER)
    assert get_traits(Opcode.DELEGATECALL).since == Revision.HOMESTEAD
    assert get_traits(Opcode.DUPN).immediate_size == get_traits(Opcode.PUSH1).immediate_size


def test_terminating_instructions():
    terminating = {op for op in Opcode if get_traits(op).is_terminating}
    assert terminating == {
        Opcode.STOP,
        Opcode.RETURN,
        Opcode.REVERT,
        Opcode.INVALID,
        Opcode.SELFDESTRUCT,
    }


def test_stack_requirements_cover_consumption():
    for op in Opcode:
        traits = get_traits(op)
        assert traits.stack_height_required + traits.stack_height_change >= 0
        assert traits.stack_height_change <= 1


def test_has_const_gas_cost():
    assert has_const_gas_cost(Opcode.ADD)
    assert has_const_gas_cost(Opcode.JUMPDEST)
    assert not has_const_gas_cost(Opcode.BALANCE)
    assert not has_const_gas_cost(Opcode.SHL)
    assert not has_const_gas_cost(Opcode.PUSH0)


def test_gas_cost_table_agrees_with_gas_cost():
    for rev in Revision:
        table = gas_cost_table(rev)
        assert len(table) == 256
        assert all(table[op] == gas_cost(rev, op) for op in range(256))


def test_latest_revision_has_costs():
    assert gas_cost(MAX_REVISION, Opcode.ADD) > 0
    assert gas_cost(int(Revision.CANCUN), int(Opcode.SWAPN)) == gas_cost(
        Revision.CANCUN, Opcode.DUPN
    )


@pytest.mark.parametrize("value", [-1, 256])
def test_out_of_range_opcode_raises(value):
    with pytest.raises(ValueError):
        gas_cost(Revision.FRONTIER, value)
    with pytest.raises(ValueError):
        get_traits(value)
    with pytest.raises(ValueError):
        has_const_gas_cost(value)


def test_unknown_revision_raises():
    with pytest.raises(ValueError):
        gas_cost(len(Revision), Opcode.ADD)
    with pytest.raises(ValueError):
        gas_cost_table(-1)