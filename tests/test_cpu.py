"""Tests for the CPU module."""

import logging

import pytest
from lc3sim.cpu import CPU
from lc3sim.errors import UnimplementedTrap
from lc3sim.isa import ConditionFlag
from lc3sim.memory import Memory
from tests.encode import add_imm, trap, HALT


class TestCPU:
    """CPU module tests."""

    def test_default_initialization(self):
        """CPU starts at the user program origin with Z set."""
        cpu = CPU()
        assert cpu.registers == [0] * 8
        assert cpu.pc == 0x3000
        assert cpu.cond == ConditionFlag.Z
        assert cpu.running is True

    def test_set_register_wraps(self):
        """Registers hold 16-bit words."""
        cpu = CPU()
        cpu.set_register(2, 0x10005)
        assert cpu.registers[2] == 5
        cpu.set_register(2, -1)
        assert cpu.registers[2] == 0xFFFF

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0x0000, ConditionFlag.Z),
            (0x0001, ConditionFlag.P),
            (0x7FFF, ConditionFlag.P),
            (0x8000, ConditionFlag.N),
            (0xFFFF, ConditionFlag.N),
        ],
    )
    def test_update_flags(self, value, expected):
        cpu = CPU()
        cpu.registers[4] = value
        cpu.update_flags(4)
        assert cpu.cond == expected

    def test_step_fetches_and_advances(self):
        """step executes the word at PC and increments PC."""
        cpu = CPU()
        mem = Memory()
        mem.write(0x3000, add_imm(0, 0, 5))
        cpu.step(mem)
        assert cpu.registers[0] == 5
        assert cpu.pc == 0x3001
        assert cpu.ir == add_imm(0, 0, 5)

    def test_pc_wraps(self):
        """PC wraps from 0xFFFF to 0."""
        cpu = CPU(start_address=0xFFFF)
        mem = Memory()
        mem.write(0xFFFF, add_imm(1, 1, 1))
        cpu.step(mem)
        assert cpu.pc == 0x0000

    def test_halt_clears_running(self):
        cpu = CPU()
        mem = Memory()
        mem.write(0x3000, HALT)
        cpu.step(mem)
        assert cpu.running is False

    def test_end_to_end(self):
        """Load [origin, ADD R0,R0,#5, HALT] and step until halted."""
        from lc3sim.loader import image_from_words, load_image

        cpu = CPU()
        mem = Memory()
        load_image(image_from_words([0x3000, add_imm(0, 0, 5), HALT]), mem, cpu)
        steps = 0
        while cpu.running:
            cpu.step(mem)
            steps += 1
        assert steps == 2
        assert cpu.registers[0] == 5
        assert cpu.running is False

    def test_three_steps_after_load(self):
        """A third step runs the zero word after HALT, a BR with no condition bits."""
        from lc3sim.loader import image_from_words, load_image

        cpu = CPU()
        mem = Memory()
        load_image(image_from_words([0x3000, add_imm(0, 0, 5), HALT]), mem, cpu)
        for _ in range(3):
            cpu.step(mem)
        assert cpu.registers[0] == 5
        assert cpu.running is False
        assert cpu.pc == 0x3003
        assert cpu.cond == ConditionFlag.P

    @pytest.mark.parametrize("word", [0x8000, 0xD000, 0xDFFF])
    def test_invalid_opcode_is_logged_noop(self, word, caplog):
        """RTI and the reserved opcode log a warning and change nothing else."""
        cpu = CPU()
        mem = Memory()
        mem.write(0x3000, word)
        with caplog.at_level(logging.WARNING, logger="lc3sim.cpu"):
            cpu.step(mem)
        assert "Invalid opcode" in caplog.text
        assert cpu.pc == 0x3001
        assert cpu.registers == [0] * 8
        assert cpu.cond == ConditionFlag.Z
        assert cpu.running is True
        assert cpu.invalid_opcodes == 1

    def test_unimplemented_trap_is_fatal(self):
        cpu = CPU()
        mem = Memory()
        mem.write(0x3000, trap(0x21))
        with pytest.raises(UnimplementedTrap) as excinfo:
            cpu.step(mem)
        assert excinfo.value.vector == 0x21
        assert excinfo.value.addr == 0x3000
        assert cpu.running is True

    def test_get_state(self):
        """Get state returns correct dict."""
        cpu = CPU()
        cpu.registers[1] = 7
        cpu.pc = 0x3005
        cpu.cond = ConditionFlag.P
        state = cpu.get_state()
        assert state == {
            "registers": [0, 7, 0, 0, 0, 0, 0, 0],
            "pc": 0x3005,
            "cond": "P",
            "running": True,
        }

    def test_reset(self):
        """Reset returns CPU to initial state."""
        cpu = CPU()
        cpu.registers[3] = 100
        cpu.pc = 0x4000
        cpu.cond = ConditionFlag.N
        cpu.running = False
        cpu.reset(start_address=0x5000)
        assert cpu.registers == [0] * 8
        assert cpu.pc == 0x5000
        assert cpu.cond == ConditionFlag.Z
        assert cpu.running is True
