"""CLI entry point: run `blocklyvm program.txt` or `python -m blocklyvm program.txt`."""

import logging
import sys
from pathlib import Path


def main() -> int:
    import argparse
    from .runtime.runtime import Interpreter
    from .shared.errors import format_fault
    from .utils.config import DEFAULT_FRAME_DELAY
    from .utils.io_utils import read_program_lines
    from .world.actuator import RecordingWorld
    from .world.hud import RecordingHud

    parser = argparse.ArgumentParser(prog="blocklyvm", description="Run a block program in a headless dungeon.")
    parser.add_argument("file", type=Path, help="Path to the program (one instruction per line)")
    parser.add_argument("--frame-delay", type=float, default=DEFAULT_FRAME_DELAY,
                        help="Seconds to wait after each leaf action (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace every dispatched line")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = args.file.resolve()
    if not path.exists():
        sys.stderr.write(f"blocklyvm: error: file not found: {path}\n")
        return 1
    if not path.is_file():
        sys.stderr.write(f"blocklyvm: error: not a file: {path}\n")
        return 1

    try:
        program = read_program_lines(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"blocklyvm: error: could not read file: {e}\n")
        return 1

    world = RecordingWorld(frame_delay=args.frame_delay)
    interpreter = Interpreter(world=world, hud=RecordingHud())
    outcome = interpreter.run(program)

    for action in world.performed:
        print(action.statement)
    for name, value in interpreter.variables.items():
        print(f"{name} = {value}")

    if outcome.is_failed:
        sys.stderr.write(format_fault(outcome.fault, outcome.line_number) + "\n")
        return 1
    if outcome.is_interrupted:
        sys.stderr.write("blocklyvm: execution interrupted\n")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
