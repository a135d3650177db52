"""Population module.

This module contains the Population class, a sample of nuclides advanced one
tick at a time by whatever schedules the simulation.
"""

import numpy as np

from .nuclide import Nuclide, probability
from .settings import Settings


class Population(object):
    """ The Population class.

    An ordered collection of nuclides and a simulated clock.  The population
    owns no timer: start() and stop() only record whether ticks should be
    scheduled.

    Parameters
    ----------
    resolver : IsotopeResolver
        Resolver shared by the nuclides created here.
    settings : Settings, optional
        Simulation settings.
    rng : numpy.random.Generator, optional
        Random source for every decay draw.  Defaults to a generator seeded
        with settings.seed.

    Attributes
    ----------
    resolver : IsotopeResolver
        Resolver shared by the nuclides created here.
    settings : Settings
        Simulation settings.
    rng : numpy.random.Generator
        Random source for every decay draw.
    nuclides : list of Nuclide
        The nuclides, in insertion order.
    """

    def __init__(self, resolver, settings=None, rng=None):
        self.resolver = resolver
        self.settings = settings if settings is not None else Settings()
        self.rng = (rng if rng is not None
                    else np.random.default_rng(self.settings.seed))
        self.nuclides = []

        self._time = 0
        self.tick_increment = self.settings.tick_increment
        self._running = False
        self._ticking = False
        # ids of nuclides removed during the running tick
        self._removed = set()

        self._callback_decay = None
        self._callback_remove = None

    def __iter__(self):
        return iter(list(self.nuclides))

    def __len__(self):
        return len(self.nuclides)

    @property
    def time(self):
        """Simulated seconds since the start."""
        return self._time

    @property
    def tick_increment(self):
        """Simulated seconds per tick."""
        return self._tick_increment

    @tick_increment.setter
    def tick_increment(self, amount):
        if not amount > 0:
            raise ValueError("Invalid tick increment: {}".format(amount))
        self._tick_increment = amount

    def on_decay(self, callback):
        """ Set the callback fired after every decay attempt.

        Parameters
        ----------
        callback : callable
            Called as callback(nuclide, outcome, time).

        Returns
        -------
        Population
            self
        """
        self._callback_decay = callback
        return self

    def on_remove(self, callback):
        """ Set the callback fired when a nuclide is removed.

        Parameters
        ----------
        callback : callable
            Called as callback(nuclide, reason).

        Returns
        -------
        Population
            self
        """
        self._callback_remove = callback
        return self

    def add(self, nuclide):
        """Add a nuclide."""
        self._removed.discard(id(nuclide))
        self.nuclides.append(nuclide)

    def add_isotope(self, isotope, count=1, neutrons=None):
        """ Add nuclides of one isotope.

        Parameters
        ----------
        isotope : str, int or IsotopeAnalysis
            Isotope string, proton count, or analysis.
        count : int, optional
            How many nuclides to add.
        neutrons : int, optional
            Neutron count, when isotope is a proton count.

        Returns
        -------
        list of Nuclide
            The new nuclides.
        """

        analysis = self.resolver.resolve(isotope, neutrons)
        added = [Nuclide(self.resolver, analysis, rng=self.rng)
                 for _ in range(count)]
        self.nuclides.extend(added)
        return added

    def remove(self, nuclide, reason=None):
        """ Remove a nuclide.

        Parameters
        ----------
        nuclide : Nuclide
            The nuclide to remove.
        reason : str, optional
            Why it is removed; passed to the remove callback.

        Returns
        -------
        bool
            False if the nuclide was not in the population.
        """

        for i, other in enumerate(self.nuclides):
            if other is nuclide:
                del self.nuclides[i]
                if self._ticking:
                    self._removed.add(id(nuclide))
                if self._callback_remove is not None:
                    self._callback_remove(nuclide, reason)
                return True
        return False

    def remove_all(self):
        """Remove every nuclide without firing callbacks."""
        if self._ticking:
            self._removed.update(id(nuclide) for nuclide in self.nuclides)
        del self.nuclides[:]

    def nuclide_at(self, x, y):
        """Topmost nuclide containing a point, or None."""
        for nuclide in reversed(self.nuclides):
            if nuclide.contains(x, y):
                return nuclide
        return None

    def decay_nuclide(self, nuclide, force=False):
        """ Give one nuclide its chance to decay this tick.

        Parameters
        ----------
        nuclide : Nuclide
            The nuclide.
        force : bool, optional
            Skip the probability check.

        Returns
        -------
        bool
            Whether the nuclide decayed.
        """

        chance = nuclide.decay_probability_per_tick() * self._tick_increment
        if not force and not probability(self.rng, chance):
            return False

        outcome = nuclide.decay(self.rng)
        if outcome is None:
            return False

        if self._callback_decay is not None:
            self._callback_decay(nuclide, outcome, self._time)
        return outcome.success

    def forced_decay(self, nuclide, mode, neutrons=None, protons=None):
        """ Decay one nuclide by a given mode.

        Parameters
        ----------
        nuclide : Nuclide
            The nuclide.
        mode : DecayMode or str
            Mode of decay.
        neutrons : int, optional
            Neutrons emitted, for neutron emission and cluster decay.
        protons : int, optional
            Protons emitted, for cluster decay.

        Returns
        -------
        bool
            Whether the nuclide decayed.
        """

        outcome = nuclide.force_decay(mode, neutrons, protons)
        if self._callback_decay is not None:
            self._callback_decay(nuclide, outcome, self._time)
        return outcome.success

    def tick(self):
        """ Advance the simulation by one tick.

        Every nuclide gets one chance to decay.  A nuclide that decays is
        queued again, so its daughter also gets a chance within the same
        tick, and so on down the chain.  Nuclides removed during the tick,
        for example by a decay callback, get no further chances.
        """

        if self._ticking:
            raise RuntimeError("tick() called while a tick is running")

        self._ticking = True
        try:
            batch = list(self.nuclides)
            # Appended nuclides are reached by this same loop
            for nuclide in batch:
                if id(nuclide) in self._removed:
                    continue
                if (self.decay_nuclide(nuclide)
                        and id(nuclide) not in self._removed):
                    batch.append(nuclide)
        finally:
            self._ticking = False
            self._removed.clear()

        self._time += self._tick_increment

    def is_running(self):
        """Should ticks be scheduled?"""
        return self._running

    def start(self):
        """Mark the simulation as running, pruning first if configured."""
        if not self._running:
            if self.settings.remove_undecayable:
                self.prune(self.settings.print_out)
            self._running = True

    def stop(self):
        """Mark the simulation as stopped."""
        self._running = False

    def prune(self, print_out=False):
        """ Remove nuclides that are not stable and cannot decay.

        Parameters
        ----------
        print_out : bool, optional
            Whether or not to print out the number removed.

        Returns
        -------
        int
            Number of nuclides removed.
        """

        doomed = [nuclide for nuclide in self.nuclides
                  if nuclide.is_stable is not True and not nuclide.can_decay()]
        for nuclide in doomed:
            self.remove(nuclide, "unable to decay")

        if print_out:
            print("Removed", len(doomed), "nuclides unable to decay")
        return len(doomed)

    def reset_simulation(self):
        """Zero the clock and return every changed nuclide to its origin."""
        self._time = 0
        for nuclide in self.nuclides:
            if (nuclide.isotope_symbol != nuclide.origin.isotope_symbol
                    or nuclide.has_decayed()):
                nuclide.restore_origin()
