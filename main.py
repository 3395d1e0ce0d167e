# Main.py
""""" Entry point for the Postfix Calculator.

   Responsibilities:
   - Parse command line flags (--fix, --base, --radian, --debug)
   - Command mode: evaluate one expression, print it, exit 1 on errors
   - Otherwise: verify required files exist and start the Qt GUI

"""""
import argparse
import logging
import sys
from pathlib import Path

from Calculator import config_manager as config_manager, MathEngine as MathEngine
from Calculator import error as E


# Resolve project root depending on run mode (Script or .exe)

if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
      In production (.exe) the files are embedded by the bundler and this check is skipped.
    """

    modules_dir = PROJECT_ROOT / "Calculator"

    REQUIRED = [
        modules_dir / "UI.py",
        modules_dir / "MathEngine.py",
        modules_dir / "ScientificEngine.py",
        modules_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
        PROJECT_ROOT / "ui_strings.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:", file=sys.stderr)
        for file_name in missing_files:
            print(f"- {file_name}", file=sys.stderr)
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="postfix-calc",
        description="Calculator with operator precedence, functions and a previous answer (_).")
    parser.add_argument("INPUT", nargs="?", default="",
                        help="optional expression string to run in command mode")
    parser.add_argument("-f", "--fix", type=int, metavar="FIX",
                        help="set number of decimal places in the output")
    parser.add_argument("-b", "--base", type=int, metavar="RADIX",
                        help="set the radix of calculation output (2 - 36)")
    parser.add_argument("-r", "--radian", action="store_true", default=None,
                        help="take trigonometric arguments in radians")
    parser.add_argument("--debug", action="store_true",
                        help="log every pipeline stage")
    return parser


def run_command(problem, configuration):
    """Command mode: print the result of one expression, return the exit status."""
    try:
        ans = MathEngine.calculate(problem, prev_ans=0.0, configuration=configuration)
        print(MathEngine.format_result(ans, configuration.base, configuration.fix))
        return 0
    except E.HelpRequested as e:
        print(E.handler(e))
        return 0
    except E.MathError as e:
        print(E.handler(e), file=sys.stderr)
        return 1


def main(argv=None):

    """
    Load configuration, then run one expression or start the GUI.
    - Keep this thin: no business logic here.
    """

    args = build_parser().parse_args(argv)
    overrides = {"fix": args.fix, "base": args.base, "radian_mode": args.radian}
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        configuration = config_manager.load_configuration(overrides)
    except E.ConfigurationError as e:
        print(E.handler(e), file=sys.stderr)
        return 1
    logger.debug("Config loaded: %r", configuration)

    if args.INPUT:
        return run_command(args.INPUT, configuration)

    # Two explicit modes aid debugging & packaging clarity.
    if not getattr(sys, 'frozen', False):
        logger.debug("Developer mode: checking file paths")
        check_files_exist()

    # Delegate control to the UI layer; the UI owns the event loop.
    from Calculator import UI as UI
    return UI.main(configuration, overrides)


if __name__ == "__main__":
    sys.exit(main())
