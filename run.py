import sys
import copy
import argparse

from montyhall import ConfigError, GameSeries, SimulationError

USAGE = "Usage: run.py [--simulations <number>] [--verbose]"

config = {
    # Games per batch, the same count is used for the stay and switch batches
    'games': 10000,
    # 0 prints only the batch summaries, 1 adds a trace of every game
    'verbose': 0,
}


class ArgumentParser(argparse.ArgumentParser):
    """Raise instead of printing argparse's own message and exiting with 2"""

    def error(self, message):
        raise ConfigError(message)


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of simulations: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"number of simulations must be positive, got {number}")
    return number


def build_parser():
    ap = ArgumentParser(prog="run.py", add_help=False, allow_abbrev=False,
                        description="Monte Carlo simulation of the Monty Hall problem")
    ap.add_argument("--simulations", type=positive_int, default=config['games'],
                    help=f"games per strategy (default: {config['games']})")
    ap.add_argument("--verbose", action="store_true",
                    help="trace every game and board state")
    return ap


def parse_config(argv):
    ns = build_parser().parse_args(argv)
    curr_config = copy.deepcopy(config)
    curr_config['games'] = ns.simulations
    if ns.verbose:
        curr_config['verbose'] = 1
    return curr_config


def main(argv=None):
    try:
        curr_config = parse_config(sys.argv[1:] if argv is None else argv)
        GameSeries(curr_config).simulate_all()
    except SimulationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
