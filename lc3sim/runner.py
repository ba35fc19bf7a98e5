"""Program runner with tracing for the LC-3 simulator."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .cpu import CPU
from .errors import ErrorInfo, LC3Error, StepLimitExceeded
from .isa import disassemble
from .loader import ProgramImage, load_image, parse_image
from .memory import Memory

logger = logging.getLogger(__name__)


@dataclass
class RunOptions:
    """Options for program execution."""
    max_steps: int = 100_000
    trace: bool = False
    trace_watch: list[int] = field(default_factory=list)
    initial_memory: dict[int, int] = field(default_factory=dict)
    initial_registers: dict[int, int] = field(default_factory=dict)


@dataclass
class TraceRow:
    """Single row of execution trace."""
    step: int
    addr: int
    instruction: int
    instr_text: str
    registers: list[int]
    pc: int
    cond: str
    mem: dict[str, int]

    def to_dict(self) -> dict:
        return {
            "step": self.step,
            "addr": self.addr,
            "instruction": self.instruction,
            "instr_text": self.instr_text,
            "registers": self.registers,
            "pc": self.pc,
            "cond": self.cond,
            "mem": self.mem,
        }


@dataclass
class RunResult:
    """Result of program execution."""
    status: str  # "ok" | "error"
    steps_executed: int
    final_state: dict
    trace_watch: list[int]
    trace: list[dict]
    invalid_opcodes: int = 0
    error: Optional[ErrorInfo] = None

    def to_dict(self) -> dict:
        result = {
            "status": self.status,
            "steps_executed": self.steps_executed,
            "final_state": self.final_state,
            "trace_watch": self.trace_watch,
            "trace": self.trace,
            "invalid_opcodes": self.invalid_opcodes,
        }
        if self.error:
            result["error"] = self.error.to_dict()
        return result


def run_image(image: ProgramImage, options: Optional[RunOptions] = None) -> RunResult:
    """Run a loaded program image until HALT, error or the step limit.

    Args:
        image: Program image to load
        options: Execution options

    Returns:
        RunResult with execution status, final state and trace
    """
    if options is None:
        options = RunOptions()

    trace_rows: list[dict] = []
    error_info: Optional[ErrorInfo] = None
    steps_executed = 0
    trace_watch = sorted(options.trace_watch)

    cpu = CPU()
    memory = Memory(initial_values=options.initial_memory)
    load_image(image, memory, cpu)
    for index, value in options.initial_registers.items():
        cpu.set_register(index, value)

    logger.debug("Starting execution at x%04X", cpu.pc)
    instr_addr = cpu.pc

    try:
        while cpu.running and steps_executed < options.max_steps:
            instr_addr = cpu.pc
            cpu.step(memory)
            steps_executed += 1

            if options.trace:
                row = TraceRow(
                    step=steps_executed,
                    addr=instr_addr,
                    instruction=cpu.ir,
                    instr_text=disassemble(cpu.ir),
                    registers=list(cpu.registers),
                    pc=cpu.pc,
                    cond=cpu.cond.name,
                    mem=memory.get_watched(trace_watch),
                )
                trace_rows.append(row.to_dict())

        if cpu.running:
            raise StepLimitExceeded(
                f"Step limit exceeded: {options.max_steps}",
                step=steps_executed,
                addr=cpu.pc,
            )

    except StepLimitExceeded as e:
        error_info = e.to_error_info()
    except LC3Error as e:
        # Attach context to error
        e.step = steps_executed + 1
        e.addr = instr_addr
        error_info = e.to_error_info()
        logger.debug("Execution stopped: %s", e.message)

    return RunResult(
        status="ok" if error_info is None else "error",
        steps_executed=steps_executed,
        final_state=cpu.get_state(),
        trace_watch=trace_watch,
        trace=trace_rows,
        invalid_opcodes=cpu.invalid_opcodes,
        error=error_info,
    )


def run_program(data: bytes, options: Optional[RunOptions] = None) -> RunResult:
    """Parse a binary program image and run it."""
    if options is None:
        options = RunOptions()

    try:
        image = parse_image(data)
    except LC3Error as e:
        return RunResult(
            status="error",
            steps_executed=0,
            final_state=CPU().get_state(),
            trace_watch=sorted(options.trace_watch),
            trace=[],
            error=e.to_error_info(),
        )
    return run_image(image, options)
