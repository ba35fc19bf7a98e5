"""CPU state and fetch-decode-execute loop for the LC-3 simulator."""

import logging

from .bits import WORD_MASK
from .instructions import execute_instruction
from .isa import ConditionFlag, REGISTER_COUNT, USER_PROGRAM_START
from .memory import Memory

logger = logging.getLogger(__name__)


class CPU:
    """Register file, program counter, condition flag and run state."""

    def __init__(self, start_address: int = USER_PROGRAM_START):
        self.registers: list[int] = [0] * REGISTER_COUNT
        self.pc: int = start_address & WORD_MASK
        self.cond: ConditionFlag = ConditionFlag.Z
        self.running: bool = True
        self.ir: int = 0  # Last fetched instruction
        self.invalid_opcodes: int = 0

    def set_register(self, index: int, value: int) -> None:
        """Set register with 16-bit wraparound."""
        self.registers[index] = value & WORD_MASK

    def update_flags(self, reg: int) -> None:
        """Recompute the condition flag from the value now in reg."""
        value = self.registers[reg]
        if value == 0:
            self.cond = ConditionFlag.Z
        elif value >> 15:
            self.cond = ConditionFlag.N
        else:
            self.cond = ConditionFlag.P

    def step(self, mem: Memory) -> None:
        """Execute exactly one instruction."""
        self.ir = mem.read(self.pc)
        addr = self.pc
        self.pc = (self.pc + 1) & WORD_MASK
        logger.debug("x%04X: fetched x%04X", addr, self.ir)

        if not execute_instruction(self.ir, self, mem):
            self.invalid_opcodes += 1
            logger.warning("Invalid opcode x%X at x%04X (instruction x%04X)", self.ir >> 12, addr, self.ir)

    def get_state(self) -> dict:
        """Get current register state as dictionary."""
        return {
            "registers": list(self.registers),
            "pc": self.pc,
            "cond": self.cond.name,
            "running": self.running,
        }

    def reset(self, start_address: int = USER_PROGRAM_START) -> None:
        """Reset CPU to initial state."""
        self.registers = [0] * REGISTER_COUNT
        self.pc = start_address & WORD_MASK
        self.cond = ConditionFlag.Z
        self.running = True
        self.ir = 0
        self.invalid_opcodes = 0
