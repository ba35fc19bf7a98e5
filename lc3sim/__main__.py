"""Command-line entry point: python -m lc3sim <image.obj>"""

import argparse
import logging
import sys

from .errors import LC3Error
from .loader import read_image_file
from .runner import RunOptions, run_image


def format_state(state: dict) -> str:
    regs = state["registers"]
    lines = [
        "  ".join(f"R{i}: x{regs[i]:04X}" for i in range(4)),
        "  ".join(f"R{i}: x{regs[i]:04X}" for i in range(4, 8)),
        f"PC: x{state['pc']:04X}  COND: {state['cond']}",
    ]
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="lc3sim", description="Run an LC-3 program image.")
    parser.add_argument("image", help="program image: big-endian words, first word is the origin")
    parser.add_argument("--max-steps", type=int, default=RunOptions.max_steps)
    parser.add_argument("--trace", action="store_true", help="print every executed instruction")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        image = read_image_file(args.image)
    except (OSError, LC3Error) as e:
        print(f"Cannot load {args.image}: {e}", file=sys.stderr)
        return 1

    print(f"Starting execution from x{image.origin:04X}")
    result = run_image(image, RunOptions(max_steps=args.max_steps, trace=args.trace))

    for row in result.trace:
        print(f"{row['step']:6d}  x{row['addr']:04X}  x{row['instruction']:04X}  {row['instr_text']}")

    print(format_state(result.final_state))
    if result.error:
        print(f"{result.error.type}: {result.error.message} (step {result.error.step}, "
              f"addr x{result.error.addr:04X})", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
