"""Command-line entry point for the MOV-only CPU simulator.
Run `python main.py 7 3` from the project root to feed two inputs to the
default program and print what it writes to OUT."""
import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication

from movcpu.assembler import assemble_source, listing
from movcpu.controller import RunController
from movcpu.program import ProgramData


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="MOV-only CPU simulator")
    p.add_argument("inputs", nargs="*", type=int,
                   help="values fed to INP, in order")
    p.add_argument("--program", type=Path,
                   help="program file: mnemonic source (.asm) or 50-value image")
    p.add_argument("--max-steps", type=int, default=1000)
    p.add_argument("--list", action="store_true", help="print the program listing")
    p.add_argument("-v", "--verbose", action="count", default=0)
    return p.parse_args(argv)


def load_program(ctrl: RunController, path: Path) -> None:
    text = path.read_text()
    if path.suffix.lower() == ".asm":
        ctrl.sim.load_program(assemble_source(text))
    else:
        ctrl.sim.update_program_data(ProgramData.from_text(text))


def main(argv=None) -> int:
    args = parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])  # noqa: F841
    ctrl = RunController()
    try:
        if args.program:
            load_program(ctrl, args.program)
        ctrl.queue_input(*args.inputs)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.list:
        for addr, word, text in listing(ctrl.sim.memory):
            if word:
                print(f"{addr:02d}  {word:04d}  {text}")

    ctrl.output_log_changed.connect(lambda log: print(log[-1]) if log else None)
    steps = ctrl.run_to_halt(args.max_steps)
    logging.getLogger(__name__).info("%d steps, halted=%s", steps, ctrl.is_halted)
    return 0 if ctrl.is_halted else 1


if __name__ == "__main__":
    sys.exit(main())
