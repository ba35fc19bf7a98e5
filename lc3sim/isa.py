"""Opcode enumeration, condition codes and disassembly for the LC-3 ISA."""

from enum import IntEnum

from . import bits


# Memory map
TRAP_VECTOR_TABLE = 0x0000
INTERRUPT_VECTOR_TABLE = 0x0100
OS_STACK = 0x0200
USER_PROGRAM_START = 0x3000
DEVICE_REGISTERS = 0xFE00

MEMORY_SIZE = 1 << 16
REGISTER_COUNT = 8


class Opcode(IntEnum):
    BR = 0b0000
    ADD = 0b0001
    LD = 0b0010
    ST = 0b0011
    JSR = 0b0100
    AND = 0b0101
    LDR = 0b0110
    STR = 0b0111
    RTI = 0b1000
    NOT = 0b1001
    LDI = 0b1010
    STI = 0b1011
    JMP = 0b1100
    RES = 0b1101
    LEA = 0b1110
    TRAP = 0b1111


class ConditionFlag(IntEnum):
    """Condition code. Values line up with the n/z/p bits of BR."""
    N = 0b100
    Z = 0b010
    P = 0b001


class TrapVector(IntEnum):
    GETC = 0x20
    OUT = 0x21
    PUTS = 0x22
    IN = 0x23
    PUTSP = 0x24
    HALT = 0x25


def _reg(index: int) -> str:
    return f"R{index}"


def _imm(value: int) -> str:
    return f"#{bits.to_signed(value)}"


def disassemble(instruction: int) -> str:
    """Render one instruction word as assembly text."""
    instruction &= bits.WORD_MASK
    op = Opcode(bits.opcode(instruction))
    dr = _reg(bits.dr(instruction))
    sr1 = _reg(bits.sr1(instruction))

    if op in (Opcode.ADD, Opcode.AND):
        if bits.imm_flag(instruction):
            operand = _imm(bits.imm5(instruction))
        else:
            operand = _reg(bits.sr2(instruction))
        return f"{op.name} {dr}, {sr1}, {operand}"
    if op == Opcode.NOT:
        return f"NOT {dr}, {sr1}"
    if op == Opcode.BR:
        nzp = (instruction >> 9) & 0x7
        if nzp == 0:
            return "NOP"
        suffix = "".join(c for c, flag in zip("nzp", (0b100, 0b010, 0b001)) if nzp & flag)
        return f"BR{suffix} {_imm(bits.pc_offset9(instruction))}"
    if op in (Opcode.LD, Opcode.LDI, Opcode.LEA, Opcode.ST, Opcode.STI):
        return f"{op.name} {dr}, {_imm(bits.pc_offset9(instruction))}"
    if op in (Opcode.LDR, Opcode.STR):
        return f"{op.name} {dr}, {sr1}, {_imm(bits.offset6(instruction))}"
    if op == Opcode.JMP:
        return "RET" if bits.sr1(instruction) == 7 else f"JMP {sr1}"
    if op == Opcode.JSR:
        if (instruction >> 11) & 1:
            return f"JSR {_imm(bits.pc_offset11(instruction))}"
        return f"JSRR {sr1}"
    if op == Opcode.TRAP:
        vector = bits.trap_vector(instruction)
        try:
            return TrapVector(vector).name
        except ValueError:
            return f"TRAP x{vector:02X}"
    return f".FILL x{instruction:04X}"
