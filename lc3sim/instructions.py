"""Instruction execution for the LC-3 simulator."""

import logging
from typing import TYPE_CHECKING, Callable

from . import bits
from .bits import WORD_MASK
from .errors import UnimplementedTrap
from .isa import Opcode, TrapVector
from .memory import Memory

if TYPE_CHECKING:
    from .cpu import CPU

logger = logging.getLogger(__name__)


# Instruction executor type
InstructionExecutor = Callable[[int, "CPU", Memory], None]


def _pc_relative(instruction: int, cpu: "CPU") -> int:
    """Address PC + PCoffset9, with PC already incremented."""
    return (cpu.pc + bits.pc_offset9(instruction)) & WORD_MASK


def _base_relative(instruction: int, cpu: "CPU") -> int:
    """Address BaseR + offset6."""
    return (cpu.registers[bits.sr1(instruction)] + bits.offset6(instruction)) & WORD_MASK


def _second_operand(instruction: int, cpu: "CPU") -> int:
    """SR2 or the sign-extended imm5, depending on bit 5."""
    if bits.imm_flag(instruction):
        return bits.imm5(instruction)
    return cpu.registers[bits.sr2(instruction)]


def execute_add(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """ADD DR, SR1, SR2|imm5: DR := SR1 + operand"""
    dr = bits.dr(instruction)
    cpu.set_register(dr, cpu.registers[bits.sr1(instruction)] + _second_operand(instruction, cpu))
    cpu.update_flags(dr)


def execute_and(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """AND DR, SR1, SR2|imm5: DR := SR1 AND operand"""
    dr = bits.dr(instruction)
    cpu.set_register(dr, cpu.registers[bits.sr1(instruction)] & _second_operand(instruction, cpu))
    cpu.update_flags(dr)


def execute_not(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """NOT DR, SR: DR := ~SR"""
    dr = bits.dr(instruction)
    cpu.set_register(dr, ~cpu.registers[bits.sr1(instruction)])
    cpu.update_flags(dr)


def execute_br(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """BRnzp offset: if any requested condition holds, PC := PC + offset"""
    nzp = (instruction >> 9) & 0x7
    if nzp & cpu.cond:
        cpu.pc = _pc_relative(instruction, cpu)


def execute_ld(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """LD DR, offset: DR := MEM[PC + offset]"""
    dr = bits.dr(instruction)
    cpu.set_register(dr, mem.read(_pc_relative(instruction, cpu)))
    cpu.update_flags(dr)


def execute_ldi(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """LDI DR, offset: DR := MEM[MEM[PC + offset]]"""
    dr = bits.dr(instruction)
    indirect_addr = mem.read(_pc_relative(instruction, cpu))
    cpu.set_register(dr, mem.read(indirect_addr))
    cpu.update_flags(dr)


def execute_ldr(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """LDR DR, BaseR, offset6: DR := MEM[BaseR + offset6]"""
    dr = bits.dr(instruction)
    cpu.set_register(dr, mem.read(_base_relative(instruction, cpu)))
    cpu.update_flags(dr)


def execute_lea(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """LEA DR, offset: DR := PC + offset (no memory access)"""
    dr = bits.dr(instruction)
    cpu.set_register(dr, _pc_relative(instruction, cpu))
    cpu.update_flags(dr)


def execute_st(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """ST SR, offset: MEM[PC + offset] := SR"""
    mem.write(_pc_relative(instruction, cpu), cpu.registers[bits.dr(instruction)])


def execute_sti(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """STI SR, offset: MEM[MEM[PC + offset]] := SR"""
    indirect_addr = mem.read(_pc_relative(instruction, cpu))
    mem.write(indirect_addr, cpu.registers[bits.dr(instruction)])


def execute_str(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """STR SR, BaseR, offset6: MEM[BaseR + offset6] := SR"""
    mem.write(_base_relative(instruction, cpu), cpu.registers[bits.dr(instruction)])


def execute_jmp(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """JMP BaseR (RET when BaseR is R7): PC := BaseR"""
    cpu.pc = cpu.registers[bits.sr1(instruction)]


def execute_jsr(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """JSR offset11 / JSRR BaseR: R7 := PC, then jump"""
    return_addr = cpu.pc
    if (instruction >> 11) & 1:
        target = (cpu.pc + bits.pc_offset11(instruction)) & WORD_MASK
    else:
        target = cpu.registers[bits.sr1(instruction)]
    cpu.set_register(7, return_addr)
    cpu.pc = target


def execute_trap(instruction: int, cpu: "CPU", mem: Memory) -> None:
    """TRAP vector: only HALT has a service routine"""
    vector = bits.trap_vector(instruction)
    if vector != TrapVector.HALT:
        raise UnimplementedTrap(vector, addr=(cpu.pc - 1) & WORD_MASK)
    logger.info("HALT at x%04X", (cpu.pc - 1) & WORD_MASK)
    cpu.running = False


# Instruction dispatch table. RTI and RES have no routine.
INSTRUCTION_EXECUTORS: dict[Opcode, InstructionExecutor] = {
    Opcode.BR: execute_br,
    Opcode.ADD: execute_add,
    Opcode.LD: execute_ld,
    Opcode.ST: execute_st,
    Opcode.JSR: execute_jsr,
    Opcode.AND: execute_and,
    Opcode.LDR: execute_ldr,
    Opcode.STR: execute_str,
    Opcode.NOT: execute_not,
    Opcode.LDI: execute_ldi,
    Opcode.STI: execute_sti,
    Opcode.JMP: execute_jmp,
    Opcode.LEA: execute_lea,
    Opcode.TRAP: execute_trap,
}


def execute_instruction(instruction: int, cpu: "CPU", mem: Memory) -> bool:
    """Execute a single decoded instruction.

    Returns:
        False if the opcode has no routine (nothing was executed), True otherwise
    """
    executor = INSTRUCTION_EXECUTORS.get(Opcode(bits.opcode(instruction)))
    if executor is None:
        return False
    executor(instruction, cpu, mem)
    return True
