"""Nuclide module.

Contains the single decaying particle of a simulation, its decay selection
and the forced decay transforms.
"""

from collections import namedtuple
from enum import Enum
import math

import numpy as np

from .decay_mode import DecayMode
from .errors import (DecayError, InvalidNucleonCountError,
                     MissingClusterArgsError, NoDaughterFoundError,
                     NoSuitableFissionFragmentError, ParseError,
                     UnsupportedModeError)
from .reference_table import DecayBranch, partition_branches


HistoryEntry = namedtuple('HistoryEntry', ['daughter', 'mode'])


class NuclideState(Enum):
    """Decay state of a nuclide, derived from its current isotope."""
    STABLE = 'stable'
    RADIOACTIVE = 'radioactive'
    THEORETICAL = 'theoretical'


class DecayOutcome(object):
    """ Result of an attempted decay.

    Attributes
    ----------
    daughter : str or None
        Isotope symbol decayed into, or attempted.
    mode : DecayMode or None
        Mode of the decay.
    percentage : float or None
        Branching percentage of the chosen branch, if known.
    success : bool
        Whether the nuclide changed.
    error : DecayError or None
        Why the decay failed.
    """

    def __init__(self, daughter=None, mode=None, percentage=None,
                 success=False, error=None):
        self.daughter = daughter
        self.mode = mode
        self.percentage = percentage
        self.success = success
        self.error = error

    def __repr__(self):
        if self.success:
            return '<DecayOutcome {} ({})>'.format(self.daughter, self.mode)
        return '<DecayOutcome failed: {!r}>'.format(self.error)


def probability(rng, p):
    """True with probability p.  Never true for p of zero or NaN."""
    return bool(p) and not math.isnan(p) and rng.random() <= p


def fission_fragment(table, protons, neutrons):
    """ Pick the light fragment emitted by spontaneous fission.

    Fragment proton counts are tried from protons // 2 down to protons / 3.
    The first element with a table isotope that leaves a valid remainder
    wins, taking the isotope whose N/Z is nearest the parent's and the
    lightest on ties.

    Parameters
    ----------
    table : ReferenceTable
        The reference table.
    protons : int
        Proton count of the fissioning nuclide.
    neutrons : int
        Neutron count of the fissioning nuclide.

    Returns
    -------
    tuple of int or None
        (protons, neutrons) of the fragment, None if nothing fits.
    """

    ratio = neutrons / protons
    lowest = max(1, int(math.ceil(protons / 3)))

    for zf in range(protons // 2, lowest - 1, -1):
        if protons - zf < 1:
            continue

        candidates = [iso for iso in table.isotopes_of(zf)
                      if iso.protons == zf and iso.neutrons <= neutrons
                      and iso.name.rsplit('-', 1)[-1].isdigit()]
        if candidates:
            best = min(candidates,
                       key=lambda iso: (abs(iso.neutrons / zf - ratio),
                                        iso.mass))
            return best.protons, best.neutrons

    return None


class Nuclide(object):
    """ The Nuclide class.

    One decaying particle.  Its isotope changes through decay and edits, and
    every change is appended to its history.

    Parameters
    ----------
    resolver : IsotopeResolver
        Resolver used for every change of identity.
    isotope : str, int or IsotopeAnalysis
        Isotope string, proton count, or analysis.
    neutrons : int, optional
        Neutron count, required when isotope is a proton count.
    rng : numpy.random.Generator, optional
        Random source for decay selection.

    Attributes
    ----------
    resolver : IsotopeResolver
        Resolver used for every change of identity.
    rng : numpy.random.Generator
        Random source for decay selection.
    origin : IsotopeAnalysis
        Isotope at construction.
    x : float
        Horizontal position.
    y : float
        Vertical position.
    highlighted : bool
        Whether the nuclide is highlighted.
    """

    def __init__(self, resolver, isotope, neutrons=None, rng=None):
        self.resolver = resolver
        self.rng = rng if rng is not None else np.random.default_rng()
        self.x = 0.0
        self.y = 0.0
        self.highlighted = False

        self._data = resolver.resolve(isotope, neutrons)
        self.origin = self._data
        self._history = [HistoryEntry(self._data.isotope_symbol, None)]

    def __repr__(self):
        return '<Nuclide {}>'.format(self.isotope_symbol)

    @property
    def table(self):
        """ReferenceTable behind the resolver."""
        return self.resolver.table

    @property
    def analysis(self):
        """IsotopeAnalysis of the current isotope."""
        return self._data

    @property
    def protons(self):
        return self._data.protons

    @property
    def neutrons(self):
        return self._data.neutrons

    @property
    def mass(self):
        return self._data.mass

    @property
    def exists(self):
        return self._data.exists

    @property
    def is_stable(self):
        """True, False, or None when unknown."""
        return self._data.is_stable

    @property
    def halflife(self):
        return self._data.halflife

    @property
    def isotope_symbol(self):
        return self._data.isotope_symbol

    @property
    def isotope_name(self):
        return self._data.isotope_name

    @property
    def element_symbol(self):
        return self._data.element_symbol

    @property
    def element_name(self):
        return self._data.element_name

    @property
    def state(self):
        """NuclideState of the current isotope."""
        if self._data.is_stable:
            return NuclideState.STABLE
        if not self._data.exists:
            return NuclideState.THEORETICAL
        return NuclideState.RADIOACTIVE

    @property
    def radius(self):
        """Display radius, growing with mass."""
        return 10 + self._data.mass / 10

    @property
    def history(self):
        """list of HistoryEntry, oldest first."""
        return list(self._history)

    @property
    def n_decays(self):
        """Number of changes since the history began."""
        return len(self._history) - 1

    def has_decayed(self):
        """Has this nuclide changed since its history began?"""
        return len(self._history) > 1

    def pos(self, x, y):
        """Set position."""
        self.x = x
        self.y = y

    def contains(self, x, y):
        """Are the coordinates inside this nuclide's bounding box?"""
        r = self.radius
        return self.x - r <= x <= self.x + r and self.y - r <= y <= self.y + r

    def _commit(self, analysis, mode):
        self._data = analysis
        self._history.append(HistoryEntry(analysis.isotope_symbol, mode))

    def set_nucleons(self, protons, neutrons):
        """ Change the nucleon counts directly.

        Parameters
        ----------
        protons : int
            New proton count.
        neutrons : int
            New neutron count.
        """
        self._commit(self.resolver.resolve_by_nucleons(protons, neutrons),
                     None)

    def set_isotope(self, string):
        """ Change the isotope directly.

        Parameters
        ----------
        string : str
            Isotope string.
        """
        self._commit(self.resolver.resolve_by_string(string), None)

    def decay_probability_per_tick(self):
        """ Chance to decay during one second.

        This is 1 / (2 * half-life), an approximation of
        1 - 2**(-dt / half-life) that holds while the tick is much shorter
        than the half-life.

        Returns
        -------
        float
            The chance; NaN when the half-life is unknown and infinity for a
            zero half-life.
        """

        halflife = self._data.halflife
        if halflife is None:
            return math.nan
        if halflife == 0:
            return math.inf
        return 1 / (2 * halflife)

    def can_decay(self):
        """ Can this nuclide decay naturally?

        Returns
        -------
        bool
            False for stable or missing isotopes, an unusable decay
            probability, or no usable decay branch.
        """

        if not self._data.exists or self._data.is_stable:
            return False
        if not math.isfinite(self.decay_probability_per_tick()):
            return False

        data = self.table.isotope(self._data.isotope_symbol)
        return data is not None and any(branch.usable
                                        for branch in data.decay)

    def _select_branch(self, branches, rng):
        known, unknown = partition_branches(branches)

        # Independent trial per known branch, in table order
        for branch in known:
            if probability(rng, branch.percentage / 100):
                return branch

        if unknown:
            return unknown[int(rng.integers(len(unknown)))]

        if known:
            return max(known, key=lambda branch: branch.percentage)

        for branch in branches:
            if branch.mode is DecayMode.SpontaneousFission:
                fragment = fission_fragment(self.table, self.protons,
                                            self.neutrons)
                if fragment is None:
                    return None
                remainder = self.resolver.resolve_by_nucleons(
                    self.protons - fragment[0], self.neutrons - fragment[1])
                return DecayBranch(remainder.isotope_symbol, branch.mode,
                                   branch.percentage)

        return None

    def decay(self, rng=None):
        """ Decay naturally, choosing a branch from the reference table.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Random source; defaults to this nuclide's.

        Returns
        -------
        DecayOutcome or None
            None when the isotope is stable or not in the table.
        """

        if self._data.is_stable or not self._data.exists:
            return None

        if rng is None:
            rng = self.rng

        data = self.table.isotope(self._data.isotope_symbol)
        branches = data.decay if data is not None else []

        branch = self._select_branch(branches, rng)
        if branch is None:
            error = NoDaughterFoundError(
                "no daughter found for {}".format(self.isotope_symbol))
            return DecayOutcome(success=False, error=error)

        try:
            analysis = self.resolver.resolve_by_string(branch.daughter)
        except ParseError as error:
            return DecayOutcome(branch.daughter, branch.mode,
                                branch.percentage, False, error)

        self._commit(analysis, branch.mode)
        return DecayOutcome(branch.daughter, branch.mode, branch.percentage,
                            True)

    def _forced_nucleons(self, mode, neutrons, protons):
        p = self.protons
        n = self.neutrons

        if mode is DecayMode.Alpha:
            if p <= 2 or n <= 2:
                raise InvalidNucleonCountError(
                    "{} is too light for alpha decay".format(
                        self.isotope_symbol))
            return p - 2, n - 2
        elif mode is DecayMode.BetaMinus:
            return p + 1, n - 1
        elif mode in (DecayMode.BetaPlus, DecayMode.ElectronCapture):
            return p - 1, n + 1
        elif mode is DecayMode.NeutronEmission:
            count = 1 if neutrons is None else int(math.floor(neutrons))
            return p, n - count
        elif mode is DecayMode.ClusterDecay:
            if neutrons is None or protons is None:
                raise MissingClusterArgsError(
                    "cluster decay needs a proton and a neutron count")
            return (p - int(math.floor(protons)),
                    n - int(math.floor(neutrons)))
        elif mode is DecayMode.SpontaneousFission:
            fragment = fission_fragment(self.table, p, n)
            if fragment is None:
                raise NoSuitableFissionFragmentError(
                    "no fission fragment found for {}".format(
                        self.isotope_symbol))
            return p - fragment[0], n - fragment[1]

        raise UnsupportedModeError("cannot force decay mode {!r}".format(mode))

    def force_decay(self, mode, neutrons=None, protons=None):
        """ Decay by a given mode, ignoring probability and the table.

        Parameters
        ----------
        mode : DecayMode or str
            Mode of decay, its exact table symbol or its member name.
        neutrons : int, optional
            Neutrons emitted by neutron emission (default 1) or cluster
            decay.
        protons : int, optional
            Protons emitted by cluster decay.

        Returns
        -------
        DecayOutcome
            The outcome; the nuclide is unchanged on failure.
        """

        if isinstance(mode, str):
            mode = DecayMode.from_exact(mode)

        try:
            new_protons, new_neutrons = self._forced_nucleons(mode, neutrons,
                                                              protons)
            if new_protons < 1 or new_neutrons < 0:
                raise InvalidNucleonCountError(
                    "{} cannot lose that many nucleons".format(
                        self.isotope_symbol))
        except DecayError as error:
            return DecayOutcome(None, mode, None, False, error)

        analysis = self.resolver.resolve_by_nucleons(new_protons,
                                                     new_neutrons)
        self._commit(analysis, mode)
        return DecayOutcome(analysis.isotope_symbol, mode, None, True)

    def reset_history(self):
        """Start the history afresh from the current isotope."""
        self._history = [HistoryEntry(self.isotope_symbol, None)]

    def restore_origin(self):
        """Return to the isotope at construction and clear the history."""
        self._data = self.origin
        self._history = [HistoryEntry(self.origin.isotope_symbol, None)]

    def clone(self):
        """ Duplicate of this nuclide's current isotope.

        Returns
        -------
        Nuclide
            New nuclide with a fresh history at the default position.
        """
        return Nuclide(self.resolver, self.protons, self.neutrons,
                       rng=self.rng)
