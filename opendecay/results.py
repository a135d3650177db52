""" The results module.

Contains the record of a simulation run.
"""

from collections import OrderedDict

import numpy as np


class Results(object):
    """ Contains output of a simulation run.

    Step 0 is the population before the first tick.

    Parameters
    ----------
    times : list of float
        Simulated time at each step.
    counts : list of dict of str to int
        Census of isotopes at each step.

    Attributes
    ----------
    time : numpy.array
        Simulated time at each step, in seconds.
    iso_to_ind : OrderedDict of str to int
        Maps an isotope symbol to a column of data, in order of first
        appearance.
    data : numpy.array
        Nuclide counts indexed by step, then by isotope.
    """

    def __init__(self, times, counts):
        self.time = np.array(times, dtype=float)

        self.iso_to_ind = OrderedDict()
        for census in counts:
            for isotope in census:
                if isotope not in self.iso_to_ind:
                    self.iso_to_ind[isotope] = len(self.iso_to_ind)

        self.data = np.zeros((len(counts), self.n_isotopes), dtype=int)
        for step, census in enumerate(counts):
            for isotope, count in census.items():
                self.data[step, self.iso_to_ind[isotope]] = count

    def __getitem__(self, pos):
        """ Retrieves counts from Results.

        Parameters
        ----------
        pos : tuple
            A two-length tuple containing a step index and an isotope index.
            The isotope index can be a string (converted to an integer via
            iso_to_ind), an integer, or a slice.

        Returns
        -------
        numpy.array
            The value indexed from self.data.
        """

        step, isotope = pos
        if isinstance(isotope, str):
            isotope = self.iso_to_ind[isotope]

        return self.data[step, isotope]

    @property
    def n_steps(self):
        """Number of recorded steps."""
        return len(self.time)

    @property
    def n_isotopes(self):
        """Number of isotopes ever present."""
        return len(self.iso_to_ind)

    @property
    def isotopes(self):
        """Isotope symbols, in column order."""
        return list(self.iso_to_ind)
