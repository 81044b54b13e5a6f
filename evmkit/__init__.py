"""EVM opcodes and revisions, instruction traits and per-revision gas cost tables."""

__version__ = "0.1.0"
__all__ = ["instructions", "opcodes"]