"""Tests for opcode enumeration and disassembly."""

import pytest
from lc3sim.isa import ConditionFlag, Opcode, disassemble
from tests import encode as asm


class TestOpcode:

    def test_sixteen_encodings(self):
        assert sorted(int(op) for op in Opcode) == list(range(16))

    def test_condition_flags_match_branch_bits(self):
        assert ConditionFlag.N == 0b100
        assert ConditionFlag.Z == 0b010
        assert ConditionFlag.P == 0b001


@pytest.mark.parametrize(
    "word, text",
    [
        (asm.add_imm(0, 0, 5), "ADD R0, R0, #5"),
        (asm.add(1, 2, 3), "ADD R1, R2, R3"),
        (asm.and_imm(4, 4, 0), "AND R4, R4, #0"),
        (asm.not_(2, 1), "NOT R2, R1"),
        (asm.br(True, True, False, -3), "BRnz #-3"),
        (asm.br(False, False, False, 0), "NOP"),
        (asm.ld(3, 16), "LD R3, #16"),
        (asm.ldi(3, -1), "LDI R3, #-1"),
        (asm.lea(0, 2), "LEA R0, #2"),
        (asm.st(1, 0), "ST R1, #0"),
        (asm.sti(1, 4), "STI R1, #4"),
        (asm.ldr(1, 6, -2), "LDR R1, R6, #-2"),
        (asm.str_(7, 6, 3), "STR R7, R6, #3"),
        (asm.jmp(3), "JMP R3"),
        (asm.RET, "RET"),
        (asm.jsr(-5), "JSR #-5"),
        (asm.jsrr(2), "JSRR R2"),
        (asm.HALT, "HALT"),
        (asm.trap(0x30), "TRAP x30"),
        (0x8000, ".FILL x8000"),
        (0xDEAD, ".FILL xDEAD"),
    ],
)
def test_disassemble(word, text):
    assert disassemble(word) == text
