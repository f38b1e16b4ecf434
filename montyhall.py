import sys
import copy
from collections import defaultdict, namedtuple

import numpy as np

N_DOORS = 3


class SimulationError(Exception):
    """Base class for anything that should abort a simulation run"""


class ConfigError(SimulationError, ValueError):
    """Bad user-supplied settings, e.g. a non-positive number of games"""


class InvariantError(SimulationError, RuntimeError):
    """The door states became inconsistent, which means a logic bug"""


class Door:
    __slots__ = ('selected', 'has_car', 'open')

    def __init__(self):
        self.selected = False  # Current player selection
        self.has_car = False   # Hides the prize
        self.open = False      # Revealed by the host

    def __repr__(self):
        return (f"Door(selected={self.selected}, has_car={self.has_car}, "
                f"open={self.open})")


class BatchResult(namedtuple('BatchResult', ['trials', 'wins'])):
    __slots__ = ()

    @property
    def ratio(self):
        return self.wins / self.trials

    def __str__(self):
        return (f"Simulations: {self.trials}, Wins: {self.wins}, "
                f"Win Ratio: {self.ratio:.2f}")


class Reporter:
    """Prints progress text at one of two levels
    verbose (int): 0 shows only summaries, 1 or more also shows per-game traces
    stream: file-like to write to, sys.stdout if None (looked up at print time)
    """

    def __init__(self, verbose=0, stream=None):
        self.verbose = verbose
        self.stream = stream

    def _emit(self, message):
        print(message, file=self.stream or sys.stdout)

    def trace(self, message):
        if self.verbose:
            self._emit(message)

    def summary(self, message):
        self._emit(message)


def choose_random_index(doors, predicate, rng):
    """Pick uniformly among the indices of doors for which predicate(door) holds
    Raises InvariantError if no door qualifies, there is no sensible fallback
    """
    options = [idx for idx, door in enumerate(doors) if predicate(door)]
    if not options:
        raise InvariantError("No suitable indices available")
    return options[rng.integers(len(options))]


def render_board(doors):
    """One token per door: {} marks the player's choice, C the car,
    a blank an opened door and X a closed goat"""
    tokens = []
    for door in doors:
        symbol = 'C' if door.has_car else (' ' if door.open else 'X')
        left, right = ('{', '}') if door.selected else ('[', ']')
        tokens.append(f"{left}{symbol}{right}")
    return ' '.join(tokens)


class Game:
    def __init__(self, rng=None, reporter=None):
        """Set up a single three door game
        rng: our random number generator, the numpy default is quite good (PCG64)
        reporter (Reporter): where trace output goes, silent if None
        """
        self.rng = rng or np.random.default_rng()
        self.reporter = reporter or Reporter()
        self.doors = [Door() for _ in range(N_DOORS)]
        self.choice = None
        self.win = False

    def pboard(self):
        self.reporter.trace(render_board(self.doors))

    def check_invariants(self):
        """Once the player has picked, exactly one car and one selection must exist"""
        cars = [idx for idx, door in enumerate(self.doors) if door.has_car]
        selected = [idx for idx, door in enumerate(self.doors) if door.selected]
        opened = [idx for idx, door in enumerate(self.doors) if door.open]
        if len(cars) > 1:
            raise InvariantError(f"More than one car: doors {cars}")
        if len(selected) > 1:
            raise InvariantError(f"More than one selection: doors {selected}")
        if self.choice is not None:
            if len(cars) != 1:
                raise InvariantError("No car placed before the player picked")
            if selected != [self.choice]:
                raise InvariantError(f"Selection {selected} does not match choice {self.choice}")
        if len(opened) > 1:
            raise InvariantError(f"More than one open door: doors {opened}")
        for idx in opened:
            if self.doors[idx].has_car or self.doors[idx].selected:
                raise InvariantError(f"Door {idx + 1} is open but selected or has the car")

    def place_car(self):
        idx = self.rng.integers(N_DOORS)
        self.doors[idx].has_car = True
        self.reporter.trace(f"Car is at door {idx + 1}")
        return idx

    def choose(self):
        # Independent of the car position, the two can coincide
        self.choice = self.rng.integers(N_DOORS)
        self.doors[self.choice].selected = True
        self.reporter.trace(f"Player chooses door {self.choice + 1}")

    def reveal(self):
        """Host opens a random door that is neither chosen nor hiding the car"""
        idx = choose_random_index(
            self.doors, lambda door: not door.selected and not door.has_car, self.rng)
        self.doors[idx].open = True
        self.reporter.trace(f"Door {idx + 1} opened")
        return idx

    def switch(self):
        """Player moves to the one door that is neither chosen nor open"""
        idx = choose_random_index(
            self.doors, lambda door: not door.selected and not door.open, self.rng)
        self.reporter.trace(f"Player changes choice to door {idx + 1}")
        self.doors[self.choice].selected = False
        self.doors[idx].selected = True
        self.choice = idx

    def play(self, switch=False):
        """A standard game is:
            1) car placed and door chosen, both at random
            2) the host reveals a goat
            3) optionally switch to the remaining door
            """
        self.place_car()
        self.choose()
        self.reporter.trace("Initial board:")
        self.pboard()

        self.reveal()
        self.reporter.trace("Current board:")
        self.pboard()

        if switch:
            self.switch()
            self.reporter.trace("Board after player changes choice:")
            self.pboard()

        self.win = bool(self.doors[self.choice].has_car)
        return self.win


def strategy_name(switch):
    return 'switch' if switch else 'stay'


class GameSeries:
    def __init__(self, config, rng=None, stream=None):
        """Runs batches of games sharing one random number generator
        config (dict): 'games' is the batch size, 'verbose' the trace level
        rng: injected generator, otherwise seeded once from OS entropy
        stream: output destination for the reporter
        """
        self.rng = rng or np.random.default_rng()
        self.config = copy.deepcopy(config)
        self.reporter = Reporter(self.config.get('verbose', 0), stream=stream)

        # Data collection
        self.history = []
        self.stats = defaultdict(int)

    def simulate(self, n=None, switch=False):
        n = self.config['games'] if n is None else n
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n <= 0:
            raise ConfigError(f"Number of games must be a positive integer, got {n!r}")

        wins = 0
        for game_idx in range(n):
            self.reporter.trace(f"---Game {game_idx + 1}")
            wins += Game(rng=self.rng, reporter=self.reporter).play(switch=switch)

        result = BatchResult(int(n), wins)
        name = strategy_name(switch)
        self.stats[f"{name}_games"] += result.trials
        self.stats[f"{name}_wins"] += result.wins
        self.history.append((name, result))
        self.reporter.summary(str(result))
        return result

    def simulate_all(self):
        """Stay first, then switch, same batch size and generator for both"""
        self.reporter.summary("Running simulation where the player does not change the door:")
        stay = self.simulate(switch=False)
        self.reporter.summary("Running simulation where the player changes the door:")
        switch = self.simulate(switch=True)
        return stay, switch

    def pstats(self):
        for name in ('stay', 'switch'):
            total = self.stats[f"{name}_games"]
            if total:
                wins = self.stats[f"{name}_wins"]
                self.reporter.summary(f"{name}: won {wins} / {total} "
                                      f"for {100 * wins / total:.1f}%")
