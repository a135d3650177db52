"""Resolver module.

Translates between element names, element symbols, proton counts, isotope
symbols and nucleon pairs, and decides whether an isotope exists by asking
the reference table.
"""

from collections import namedtuple
import math
import numbers
import re

from .errors import InvalidNucleonCountError, ParseError

# Digit roots of IUPAC systematic element names, indexed by digit.
IUPAC_ROOTS = ["nil", "un", "bi", "tri", "quad", "pent", "hex", "sept", "oct",
               "enn"]

MAGIC_NUMBERS = (2, 8, 20, 28, 50, 82)
MAGIC_PROTONS = (114,)
MAGIC_NEUTRONS = (126, 184)

_ISOTOPE_RE = re.compile(r'^([A-Za-z]+)(?:-(\d+(?:\.\d+)?)(?:([mM])(\d*))?)?$')


class IsotopeAnalysis(namedtuple('IsotopeAnalysis', [
        'exists', 'name', 'symbol', 'protons', 'neutrons', 'isotope_symbol',
        'metastable_number', 'metastable_parent_symbol', 'iupac_name',
        'iupac_symbol', 'is_stable', 'halflife', 'estimated_stable'])):
    """ Everything known about one isotope identity.

    Attributes
    ----------
    exists : bool
        Whether the isotope is in the reference table.
    name : str or None
        Element name, None for elements outside the table.
    symbol : str or None
        Element symbol, None for elements outside the table.
    protons : int
        Proton count, at least 1.
    neutrons : int
        Neutron count, at least 0.
    isotope_symbol : str
        Canonical isotope symbol, e.g. "U-235" or "In-119m2".
    metastable_number : int or None
        Number after the "m" suffix; 0 for a bare "m".
    metastable_parent_symbol : str or None
        Isotope symbol without the metastable suffix.
    iupac_name : str
        IUPAC systematic element name.
    iupac_symbol : str
        IUPAC systematic element symbol.
    is_stable : bool or None
        Stability from the table; None when the isotope does not exist.
    halflife : float or None
        Half-life in seconds from the table.
    estimated_stable : bool or None
        Heuristic stability guess for isotopes missing from the table.
    """

    __slots__ = ()

    @property
    def element_symbol(self):
        """Element symbol, or the IUPAC symbol."""
        return self.symbol or self.iupac_symbol

    @property
    def element_name(self):
        """Element name, or the IUPAC name."""
        return self.name or self.iupac_name

    @property
    def mass(self):
        """Nucleon count A."""
        return self.protons + self.neutrons

    @property
    def isotope_name(self):
        """Isotope name, e.g. "Uranium-238"."""
        return '{}-{}'.format(self.element_name, self.mass)


ElementInfo = namedtuple('ElementInfo', ['name', 'symbol', 'iupac_name',
                                         'iupac_symbol', 'protons'])


def capitalise(string):
    """Upper case first letter, lower case rest."""
    return string[:1].upper() + string[1:].lower()


def round_half_up(value):
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))


def iupac_name_symbol(number):
    """ IUPAC systematic name and symbol for an atomic number.

    Parameters
    ----------
    number : int
        Atomic number, at least 1.

    Returns
    -------
    name : str
        Systematic name, e.g. "Ununennium" for 119.
    symbol : str
        Systematic symbol, e.g. "Uue" for 119.
    """

    roots = [IUPAC_ROOTS[int(digit)] for digit in str(int(number))]
    name = ''.join(roots)
    symbol = ''.join(root[0] for root in roots)
    return capitalise(name) + "ium", capitalise(symbol)


def parse_iupac_symbol(symbol):
    """Atomic number spelled by IUPAC root initials, or None."""
    digits = ""
    for char in symbol.lower():
        for i, root in enumerate(IUPAC_ROOTS):
            if root[0] == char:
                digits += str(i)
                break
        else:
            return None

    if not digits or int(digits) < 1:
        return None
    return int(digits)


def parse_iupac_name(name):
    """Atomic number spelled by an IUPAC systematic name, or None."""
    lname = name.lower()
    if not lname.endswith("ium"):
        return None

    base = lname[:-3]
    digits = ""
    i = 0
    while i < len(base):
        for d, root in enumerate(IUPAC_ROOTS):
            if base.startswith(root, i):
                digits += str(d)
                i += len(root)
                break
        else:
            return None

    if not digits or int(digits) < 1:
        return None
    return int(digits)


def estimate_is_stable(protons, neutrons):
    """ Guess the stability of an isotope missing from the table.

    Parameters
    ----------
    protons : int
        Proton count Z.
    neutrons : int
        Neutron count N.

    Returns
    -------
    bool or None
        The guess; None when no rule applies.
    """

    mass = protons + neutrons

    # Nothing above bismuth is stable
    if protons >= 84:
        return False

    if mass % 2 == 0:
        return True

    if protons in MAGIC_NUMBERS or neutrons in MAGIC_NUMBERS:
        return True
    if neutrons in MAGIC_NEUTRONS or protons in MAGIC_PROTONS:
        return True

    if neutrons / protons < 1:
        return False

    return None


class IsotopeResolver(object):
    """ The IsotopeResolver class.

    Stateless apart from the reference table it reads.

    Parameters
    ----------
    table : ReferenceTable
        The isotope reference table.

    Attributes
    ----------
    table : ReferenceTable
        The isotope reference table.
    """

    def __init__(self, table):
        self.table = table

    def element_info(self, protons):
        """ Element identity for a proton count.

        Parameters
        ----------
        protons : int
            Atomic number.

        Returns
        -------
        ElementInfo
            Name and symbol from the table when the element is known, and
            the IUPAC systematic name and symbol in all cases.
        """

        iupac_name, iupac_symbol = iupac_name_symbol(protons)
        record = self.table.element_by_number(protons)
        if record is None:
            return ElementInfo(None, None, iupac_name, iupac_symbol, protons)
        return ElementInfo(record['name'], record['symbol'], iupac_name,
                           iupac_symbol, protons)

    def analyse_element_name(self, name):
        """ Element identity from an element or IUPAC name.

        Parameters
        ----------
        name : str
            Element name in any case, e.g. "uranium" or "Ununennium".

        Returns
        -------
        ElementInfo or None
            The element, None if the name is not recognised.
        """

        record = self.table.element(name)
        if record is not None:
            return self.element_info(record['number'])

        protons = parse_iupac_name(name)
        if protons is None:
            return None
        return self.element_info(protons)

    def analyse_symbol(self, symbol):
        """ Element identity from an element or IUPAC symbol.

        Parameters
        ----------
        symbol : str
            Element symbol in any case, e.g. "U" or "uue".

        Returns
        -------
        ElementInfo or None
            The element, None if the symbol is not recognised.
        """

        key = self.table.element_key_by_symbol(capitalise(symbol))
        if key is not None:
            return self.element_info(self.table.elements[key]['number'])

        protons = parse_iupac_symbol(symbol)
        if protons is None:
            return None
        return self.element_info(protons)

    def _analyse(self, info, neutrons, metastable_number=None):
        mass = info.protons + neutrons
        parent_symbol = '{}-{}'.format(info.symbol or info.iupac_symbol, mass)

        isotope_symbol = parent_symbol
        if metastable_number is None:
            parent_symbol = None
        else:
            isotope_symbol += 'm'
            if metastable_number != 0:
                isotope_symbol += str(metastable_number)

        data = self.table.isotope(isotope_symbol) if info.name else None
        if data is not None:
            return IsotopeAnalysis(True, info.name, info.symbol, info.protons,
                                   neutrons, isotope_symbol, metastable_number,
                                   parent_symbol, info.iupac_name,
                                   info.iupac_symbol, data.is_stable,
                                   data.halflife, None)

        return IsotopeAnalysis(False, info.name, info.symbol, info.protons,
                               neutrons, isotope_symbol, metastable_number,
                               parent_symbol, info.iupac_name,
                               info.iupac_symbol, None, None,
                               estimate_is_stable(info.protons, neutrons))

    def resolve_by_nucleons(self, protons, neutrons):
        """ Analyse the isotope made of given nucleons.

        Parameters
        ----------
        protons : int
            Proton count, at least 1.
        neutrons : int
            Neutron count, at least 0.

        Returns
        -------
        IsotopeAnalysis
            The analysis.
        """

        protons = int(protons)
        neutrons = int(neutrons)
        if protons < 1 or neutrons < 0:
            raise InvalidNucleonCountError(
                "no isotope has {} protons and {} neutrons".format(protons,
                                                                  neutrons))

        return self._analyse(self.element_info(protons), neutrons)

    def resolve_by_string(self, string):
        """ Analyse an isotope or element string.

        Accepted forms are an element name or symbol ("Uranium", "U"), an
        IUPAC systematic name or symbol, and either of those followed by
        "-<mass>" and an optional metastable suffix ("U-235", "In-119m2").

        Parameters
        ----------
        string : str
            The string.

        Returns
        -------
        IsotopeAnalysis
            The analysis.
        """

        if not isinstance(string, str):
            raise ParseError("expected an isotope string, got {!r}".format(
                string))

        match = _ISOTOPE_RE.match(string.strip())
        if match is None:
            raise ParseError("unable to parse isotope string {!r}".format(
                string))
        identifier, mass, meta, meta_number = match.groups()

        info = self.analyse_element_name(identifier)
        if info is None:
            info = self.analyse_symbol(identifier)
        if info is None:
            raise ParseError("unknown element {!r} in isotope string "
                             "{!r}".format(identifier, string))

        if mass is None:
            record = self.table.element(info.name) if info.name else None
            if record is None or record['atomic_mass'] is None:
                raise ParseError("a mass must be stated for systematic "
                                 "element {!r}".format(string))
            mass = record['atomic_mass']

        neutrons = round_half_up(float(mass) - info.protons)
        if neutrons < 0:
            raise ParseError("mass of {!r} is below its proton count".format(
                string))

        metastable_number = None
        if meta is not None:
            metastable_number = int(meta_number) if meta_number else 0

        return self._analyse(info, neutrons, metastable_number)

    def resolve(self, value, neutrons=None):
        """ Analyse a string, a nucleon pair or an existing analysis.

        Parameters
        ----------
        value : str, int or IsotopeAnalysis
            Isotope string, proton count, or analysis.
        neutrons : int, optional
            Neutron count, required when value is a proton count.

        Returns
        -------
        IsotopeAnalysis
            The analysis.
        """

        if isinstance(value, IsotopeAnalysis) and neutrons is None:
            return value
        if isinstance(value, str) and neutrons is None:
            return self.resolve_by_string(value)
        if (isinstance(value, numbers.Integral)
                and isinstance(neutrons, numbers.Integral)):
            return self.resolve_by_nucleons(value, neutrons)
        raise TypeError("cannot resolve an isotope from ({!r}, {!r})".format(
            value, neutrons))

    def parse_nucleons(self, isotope_symbol):
        """ Proton and neutron counts of an isotope string.

        Parameters
        ----------
        isotope_symbol : str
            Isotope string, e.g. "Th-234".

        Returns
        -------
        tuple of int
            (protons, neutrons)
        """

        analysis = self.resolve_by_string(isotope_symbol)
        return analysis.protons, analysis.neutrons
