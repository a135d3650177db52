"""Simulation module.

Runs a population for a number of ticks and records what it contains after
each one.
"""

from tqdm import tqdm

from .results import Results
from .utilities import count_isotopes, seconds_to_appropriate_time


def simulate(population, n_ticks, print_out=True):
    """ Runs a population for a number of ticks.

    The population is started first, so it is pruned if its settings ask
    for that.  The run ends early if the population is stopped, for example
    from a decay callback.

    Parameters
    ----------
    population : Population
        The population to advance.
    n_ticks : int
        Number of ticks to run.
    print_out : bool, optional
        Whether or not to show progress.

    Returns
    -------
    Results
        Time and isotope census before the first tick and after each tick.
    """

    population.start()

    times = [population.time]
    counts = [count_isotopes(population)]

    steps = range(n_ticks)
    if print_out:
        steps = tqdm(steps, desc="Simulating", unit="tick")

    for _ in steps:
        if not population.is_running():
            break

        population.tick()

        times.append(population.time)
        counts.append(count_isotopes(population))

    population.stop()

    if print_out:
        time, unit = seconds_to_appropriate_time(population.time)
        print("Simulated time: ", time, unit)

    return Results(times, counts)
