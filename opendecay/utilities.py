""" The utilities module.

Contains time unit helpers and functions that summarise a population or the
results of a simulation.
"""

from collections import Counter, OrderedDict
from enum import Enum

import numpy as np
import scipy.sparse.linalg as sla

# Seconds per time unit
TIME_UNITS = OrderedDict([
    ('s', 1),
    ('min', 60),
    ('h', 3600),
    ('d', 86400),
    ('y', 3.154e7),
    ('a', 3.154e7),
    ('ms', 1e-3),
    ('μs', 1e-6),
    ('ns', 1e-9),
    ('ps', 1e-12),
])

TIME_UNIT_NAMES = {
    's': 'second',
    'min': 'minute',
    'h': 'hour',
    'd': 'day',
    'y': 'year',
    'a': 'annum',
    'ms': 'millisecond',
    'μs': 'microsecond',
    'ns': 'nanosecond',
    'ps': 'picosecond',
}


class CensusOption(Enum):
    """How nuclides are grouped by evaluate_census."""
    ISOTOPES = 'isotopes'
    ELEMENTS = 'elements'
    RADIOACTIVE = 'radioactive'
    DECAYED = 'decayed'
    DECAYED_TIMES = 'decayed_times'


def to_seconds(value, unit):
    """ Converts a time to seconds.

    Parameters
    ----------
    value : float
        Time in the given unit.
    unit : str
        Key of TIME_UNITS.

    Returns
    -------
    float
        Time in seconds.
    """

    try:
        return value * TIME_UNITS[unit]
    except KeyError:
        raise ValueError("Unknown time unit: {}".format(unit))


def seconds_to_appropriate_time(seconds):
    """ Expresses seconds in the unit closest in size to them.

    Parameters
    ----------
    seconds : float
        Time in seconds.

    Returns
    -------
    time : float
        Time in the chosen unit.
    unit : str
        Key of TIME_UNITS.
    """

    if seconds == 0:
        return 0, 's'

    best_unit = 's'
    best_delta = np.inf
    for unit, factor in TIME_UNITS.items():
        delta = abs(1 - seconds / factor) * factor
        if delta < best_delta:
            best_unit = unit
            best_delta = delta

    return seconds / TIME_UNITS[best_unit], best_unit


def census_label(nuclide, option=CensusOption.ISOTOPES):
    """ Group a nuclide falls into.

    Parameters
    ----------
    nuclide : Nuclide
        The nuclide.
    option : CensusOption
        How to group.

    Returns
    -------
    str
        The group label.
    """

    if option is CensusOption.ISOTOPES:
        return nuclide.isotope_symbol
    elif option is CensusOption.ELEMENTS:
        return nuclide.element_name
    elif option is CensusOption.RADIOACTIVE:
        if nuclide.is_stable is True:
            return 'Stable'
        elif nuclide.is_stable is False:
            return 'Radioactive'
        return 'Unknown'
    elif option is CensusOption.DECAYED:
        return 'Decayed' if nuclide.has_decayed() else 'Not Decayed'
    elif option is CensusOption.DECAYED_TIMES:
        return str(nuclide.n_decays)

    raise ValueError("Unknown census option {}".format(option))


def evaluate_census(nuclides, option=CensusOption.ISOTOPES):
    """ Counts nuclides by group.

    Parameters
    ----------
    nuclides : iterable of Nuclide
        The nuclides, e.g. a Population.
    option : CensusOption
        How to group.

    Returns
    -------
    OrderedDict of str to tuple of (int, float)
        Maps a group label to its count and percentage of the total, most
        common first.
    """

    counts = Counter(census_label(nuclide, option) for nuclide in nuclides)
    total = sum(counts.values())

    census = OrderedDict()
    for label, count in sorted(counts.items(), key=lambda item: -item[1]):
        census[label] = (count, 100 * count / total)
    return census


def count_isotopes(nuclides):
    """ Counts nuclides by isotope symbol.

    Parameters
    ----------
    nuclides : iterable of Nuclide
        The nuclides.

    Returns
    -------
    collections.Counter
        Maps an isotope symbol to its count.
    """
    return Counter(nuclide.isotope_symbol for nuclide in nuclides)


def radioactive_count(nuclides):
    """Number of nuclides not known to be stable."""
    return sum(1 for nuclide in nuclides if not nuclide.is_stable)


def evaluate_single_isotope(results, isotope):
    """ Evaluates a single isotope from a simulation's results.

    Parameters
    ----------
    results : Results
        The results to extract data from.
    isotope : str
        Isotope symbol to evaluate.

    Returns
    -------
    time : numpy.array
        Time vector.
    count : numpy.array
        Number of nuclides of the isotope at each step.
    """

    time = np.copy(results.time)
    if isotope in results.iso_to_ind:
        count = np.copy(results[:, isotope])
    else:
        count = np.zeros(results.n_steps, dtype=int)

    return time, count


def expected_counts(table, counts, time):
    """ Expected isotope counts after some time.

    Solves dN/dt = A N with the decay matrix of the table, so the answer is
    the mean behaviour of the simulation's own decay rule.

    Parameters
    ----------
    table : ReferenceTable
        The reference table.
    counts : dict of str to float
        Starting count of each isotope.
    time : float
        Elapsed time in seconds.

    Returns
    -------
    OrderedDict of str to float
        Expected count of the starting isotopes and all their decay
        products.
    """

    isotopes = table.decay_products(list(counts))
    vec = np.array([counts.get(name, 0.0) for name in isotopes], dtype=float)

    if time != 0:
        matrix = table.form_matrix(isotopes)
        vec = sla.expm_multiply(matrix * time, vec)

    return OrderedDict(zip(isotopes, vec))
