"""reference_table module.

This module contains the isotope reference table.  The table is loaded from a
.json file once and then shared, read-only, by everything that needs to know
whether an isotope exists and how it decays.
"""

from collections import OrderedDict, defaultdict, namedtuple
import json
import math
import numbers
import os

import scipy.sparse as sp

from .decay_mode import DecayMode


class DecayBranch(namedtuple('DecayBranch', ['daughter', 'mode', 'percentage'])):
    """ One possible decay of an isotope.

    Attributes
    ----------
    daughter : str or None
        Isotope symbol of the daughter.
    mode : DecayMode or None
        Mode of the decay.
    percentage : float or None
        Branching percentage, 0 to 100, if known.
    """

    __slots__ = ()

    @property
    def usable(self):
        """False for the "no known decay path" placeholder."""
        return self.daughter is not None or self.mode is not None

    @property
    def percentage_known(self):
        """Whether the branch carries a numeric percentage."""
        return (isinstance(self.percentage, numbers.Real)
                and not isinstance(self.percentage, bool)
                and not math.isnan(self.percentage))

    @classmethod
    def from_dict(cls, obj):
        """ Build a branch from its reference table form.

        Parameters
        ----------
        obj : dict
            Mapping with optional "daughter", "mode" and "percentage" keys.

        Returns
        -------
        DecayBranch
            The branch.
        """
        return cls(obj.get('daughter') or None,
                   DecayMode.from_symbol(obj.get('mode')),
                   obj.get('percentage'))


class IsotopeData(object):
    """ Reference data for a single isotope.

    Attributes
    ----------
    name : str
        Isotope symbol, e.g. "U-238".
    protons : int
        Proton count Z.
    neutrons : int
        Neutron count N.
    is_stable : bool
        Whether the isotope is stable.
    halflife : float or None
        Half-life in seconds.
    decay : list of DecayBranch
        Decay branches in table order.
    """

    def __init__(self, name, protons, neutrons, is_stable, halflife=None,
                 decay=None):
        self.name = name
        self.protons = protons
        self.neutrons = neutrons
        self.is_stable = is_stable
        self.halflife = halflife
        self.decay = list(decay) if decay is not None else []

    @property
    def n_decay_paths(self):
        """Number of decay pathways."""
        return len(self.decay)

    @property
    def mass(self):
        """Nucleon count A."""
        return self.protons + self.neutrons

    @classmethod
    def from_dict(cls, name, obj):
        """ Read an isotope from its reference table form.

        Parameters
        ----------
        name : str
            Isotope symbol used as the key in the table.
        obj : dict
            Mapping with "Z", "N", "is_stable" and optional "halflife" and
            "decay" keys.

        Returns
        -------
        IsotopeData
            Instance of the isotope data.
        """

        halflife = obj.get('halflife')
        if halflife is not None:
            halflife = float(halflife)

        decay = [DecayBranch.from_dict(branch)
                 for branch in obj.get('decay', [])]

        return cls(name, int(obj['Z']), int(obj['N']),
                   bool(obj.get('is_stable', False)), halflife, decay)


def partition_branches(branches):
    """ Split branches into known and unknown percentage branches.

    Branches without a daughter are in neither list.

    Parameters
    ----------
    branches : list of DecayBranch
        Branches in table order.

    Returns
    -------
    known : list of DecayBranch
        Branches with a daughter and a numeric percentage.
    unknown : list of DecayBranch
        Branches with a daughter and no percentage.
    """

    known = []
    unknown = []
    for branch in branches:
        if branch.daughter:
            if branch.percentage_known:
                known.append(branch)
            else:
                unknown.append(branch)
    return known, unknown


def branch_probabilities(branches):
    """ Probability that each branch is chosen when an isotope decays.

    Known percentages are tried one after another, so branch i is chosen with
    probability p_i * prod_{j<i}(1 - p_j).  What is left goes evenly to the
    unknown percentage branches or, failing those, to the most likely known
    branch.

    Parameters
    ----------
    branches : list of DecayBranch
        Branches in table order.

    Returns
    -------
    list of tuple of (DecayBranch, float)
        Selectable branches with their probabilities, summing to one unless
        no branch has a daughter.
    """

    known, unknown = partition_branches(branches)

    probabilities = []
    residual = 1.0
    for branch in known:
        p = min(max(branch.percentage / 100, 0.0), 1.0)
        probabilities.append([branch, residual * p])
        residual *= 1.0 - p

    if residual > 0.0:
        if unknown:
            for branch in unknown:
                probabilities.append([branch, residual / len(unknown)])
        elif known:
            best = known.index(max(known, key=lambda b: b.percentage))
            probabilities[best][1] += residual

    return [(branch, p) for branch, p in probabilities]


class ReferenceTable(object):
    """ The ReferenceTable class.

    Read-only view of the isotope reference data.

    Parameters
    ----------
    data : dict, optional
        The decoded reference table: lowercase element keys mapping to
        element records, plus an "order" list of element keys indexed by
        atomic number - 1.

    Attributes
    ----------
    order : list of str
        Element keys indexed by atomic number - 1.
    elements : OrderedDict of str to dict
        Maps an element key to its record (name, symbol, number,
        atomic_mass, category).
    symbol_map : dict of str to str
        Maps an element symbol to its element key.
    isotopes : OrderedDict of str to IsotopeData
        Maps an isotope symbol to its data.
    element_isotopes : dict of str to list of str
        Maps an element key to the symbols of its isotopes, in table order.
    """

    def __init__(self, data=None):
        self.order = []
        self.elements = OrderedDict()
        self.symbol_map = {}
        self.isotopes = OrderedDict()
        self.element_isotopes = defaultdict(list)

        if data is not None:
            self._load(data)

    def _load(self, data):
        self.order = [key.lower() for key in data['order']]

        for key in self.order:
            record = data[key]
            self.elements[key] = {
                'name': record['name'],
                'symbol': record['symbol'],
                'number': int(record['number']),
                'atomic_mass': record.get('atomic_mass'),
                'category': record.get('category'),
            }
            self.symbol_map[record['symbol']] = key

            for iso_name, iso_obj in record.get('isotopes', {}).items():
                self.isotopes[iso_name] = IsotopeData.from_dict(iso_name,
                                                                iso_obj)
                self.element_isotopes[key].append(iso_name)

    @classmethod
    def json_read(cls, filename=None):
        """ Reads a reference table .json file.

        Parameters
        ----------
        filename : str, optional
            The path to the reference table.  Defaults to the environment
            variable OPENDECAY_DATA.

        Returns
        -------
        ReferenceTable
            The loaded table.
        """

        if filename is None:
            filename = os.environ.get('OPENDECAY_DATA')

        try:
            with open(filename, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, TypeError, ValueError):
            if filename is None:
                print("No reference table specified, either manually or in "
                      "environment variable OPENDECAY_DATA.")
            else:
                print('Reference table "', filename, '" is invalid.')
            raise

        return cls(data)

    @property
    def n_elements(self):
        """Number of named elements."""
        return len(self.order)

    @property
    def n_isotopes(self):
        """Number of isotopes in the table."""
        return len(self.isotopes)

    def element(self, key):
        """ Element record by key.

        Parameters
        ----------
        key : str
            Element key or name, any case.

        Returns
        -------
        dict or None
            The element record.
        """
        return self.elements.get(key.lower())

    def element_key_by_number(self, number):
        """Element key for an atomic number, or None."""
        if 1 <= number <= len(self.order):
            return self.order[number - 1]
        return None

    def element_by_number(self, number):
        """Element record for an atomic number, or None."""
        key = self.element_key_by_number(number)
        return self.elements[key] if key is not None else None

    def element_key_by_symbol(self, symbol):
        """Element key for an exact element symbol, or None."""
        return self.symbol_map.get(symbol)

    def isotope(self, name):
        """ Extracts isotope data by isotope symbol.

        Parameters
        ----------
        name : str
            Isotope symbol, e.g. "U-235" or "In-119m2".

        Returns
        -------
        IsotopeData or None
            Data for the isotope, None if it is not in the table.
        """
        return self.isotopes.get(name)

    def isotopes_of(self, number):
        """ All isotopes of the element with a given atomic number.

        Parameters
        ----------
        number : int
            Atomic number.

        Returns
        -------
        list of IsotopeData
            Isotopes in table order, empty if the element is unknown.
        """
        key = self.element_key_by_number(number)
        if key is None:
            return []
        return [self.isotopes[name] for name in self.element_isotopes[key]]

    def decay_info(self, parent, daughter):
        """ Branch that takes one isotope to another.

        Parameters
        ----------
        parent : str
            Isotope symbol of the parent.
        daughter : str
            Isotope symbol of the daughter.

        Returns
        -------
        DecayBranch or None
            First branch of parent with that daughter.
        """

        data = self.isotope(parent)
        if data is None:
            return None

        for branch in data.decay:
            if branch.daughter == daughter:
                return branch
        return None

    def unknown_daughters(self):
        """ Daughters referenced by the table but missing from it.

        Returns
        -------
        OrderedDict of str to list of str
            Maps each missing daughter symbol to the isotopes that decay
            into it.
        """

        missing = OrderedDict()
        for name, data in self.isotopes.items():
            for branch in data.decay:
                if branch.daughter and branch.daughter not in self.isotopes:
                    parents = missing.setdefault(branch.daughter, [])
                    if name not in parents:
                        parents.append(name)
        return missing

    def decay_products(self, isotopes):
        """ Isotopes together with everything they can decay into.

        Parameters
        ----------
        isotopes : list of str
            Starting isotope symbols.

        Returns
        -------
        list of str
            The starting isotopes followed by every reachable daughter, in
            order of discovery.
        """

        names = list(isotopes)
        seen = set(names)
        i = 0
        while i < len(names):
            data = self.isotope(names[i])
            i += 1
            if data is None:
                continue
            for branch in data.decay:
                if branch.daughter and branch.daughter not in seen:
                    seen.add(branch.daughter)
                    names.append(branch.daughter)
        return names

    def form_matrix(self, isotopes):
        """ Forms the decay matrix over a set of isotopes.

        The matrix uses the simulation's own decay rate, 1 / (2 * half-life)
        per second, split over daughters with branch_probabilities.

        Parameters
        ----------
        isotopes : list of str
            Isotope symbols; row and column order of the matrix.

        Returns
        -------
        scipy.sparse.csr_matrix
            Sparse matrix A with dN/dt = A N.
        """

        index = OrderedDict((name, i) for i, name in enumerate(isotopes))
        matrix = defaultdict(float)

        for i, name in enumerate(isotopes):
            data = self.isotope(name)
            if data is None or data.is_stable or not data.halflife:
                continue

            probabilities = branch_probabilities(data.decay)
            fission = any(branch.mode is DecayMode.SpontaneousFission
                          for branch in data.decay)
            if not probabilities and not fission:
                continue

            # Loss
            decay_constant = 1 / (2 * data.halflife)
            matrix[i, i] -= decay_constant

            # Gain
            for branch, p in probabilities:
                k = index.get(branch.daughter)
                if k is not None and p != 0.0:
                    matrix[k, i] += p * decay_constant

        # Use DOK matrix as intermediate representation, then convert to CSR
        n = len(isotopes)
        matrix_dok = sp.dok_matrix((n, n))
        for key, val in matrix.items():
            matrix_dok[key] = val
        return matrix_dok.tocsr()
