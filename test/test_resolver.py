""" Tests for resolver.py """

import unittest

from opendecay import resolver
from opendecay.errors import InvalidNucleonCountError, ParseError
import test.dummy_table as dummy_table


class TestNaming(unittest.TestCase):
    """ Tests for the IUPAC naming helpers."""

    def test_iupac_name_symbol(self):
        self.assertEqual(resolver.iupac_name_symbol(119),
                         ("Ununennium", "Uue"))
        self.assertEqual(resolver.iupac_name_symbol(120),
                         ("Unbinilium", "Ubn"))
        self.assertEqual(resolver.iupac_name_symbol(92), ("Ennbiium", "Eb"))

    def test_parse_iupac(self):
        """ Test reading atomic numbers back from systematic names. """

        self.assertEqual(resolver.parse_iupac_symbol("Uue"), 119)
        self.assertEqual(resolver.parse_iupac_symbol("ubn"), 120)
        self.assertIsNone(resolver.parse_iupac_symbol("Xx"))
        self.assertIsNone(resolver.parse_iupac_symbol("N"))

        self.assertEqual(resolver.parse_iupac_name("Ununennium"), 119)
        self.assertEqual(resolver.parse_iupac_name("UNBINILIUM"), 120)
        self.assertIsNone(resolver.parse_iupac_name("Uranium"))
        self.assertIsNone(resolver.parse_iupac_name("Nilium"))
        self.assertIsNone(resolver.parse_iupac_name("Unun"))

    def test_round_half_up(self):
        self.assertEqual(resolver.round_half_up(2.5), 3)
        self.assertEqual(resolver.round_half_up(2.49), 2)
        self.assertEqual(resolver.round_half_up(-2.5), -2)

    def test_estimate_is_stable(self):
        """ Test each rule of the stability guess. """

        self.assertFalse(resolver.estimate_is_stable(84, 126))
        self.assertTrue(resolver.estimate_is_stable(6, 6))
        self.assertTrue(resolver.estimate_is_stable(7, 8))
        self.assertTrue(resolver.estimate_is_stable(65, 126))
        self.assertFalse(resolver.estimate_is_stable(13, 12))
        self.assertIsNone(resolver.estimate_is_stable(13, 14))


class TestIsotopeResolver(unittest.TestCase):
    """ Tests for the IsotopeResolver class."""

    def setUp(self):
        self.resolver = resolver.IsotopeResolver(dummy_table.dummy_table())

    def test_element_info(self):
        """ Test named and systematic elements. """

        info = self.resolver.element_info(92)

        self.assertEqual(info.name, "Uranium")
        self.assertEqual(info.symbol, "U")
        self.assertEqual(info.iupac_symbol, "Eb")

        info = self.resolver.element_info(119)

        self.assertIsNone(info.name)
        self.assertIsNone(info.symbol)
        self.assertEqual(info.iupac_name, "Ununennium")

    def test_analyse_names_and_symbols(self):
        self.assertEqual(self.resolver.analyse_element_name("oganesson")
                         .protons, 118)
        self.assertEqual(self.resolver.analyse_element_name("Unbinilium")
                         .protons, 120)
        self.assertIsNone(self.resolver.analyse_element_name("Kryptonite"))

        self.assertEqual(self.resolver.analyse_symbol("pb").protons, 82)
        self.assertEqual(self.resolver.analyse_symbol("Uue").protons, 119)
        self.assertIsNone(self.resolver.analyse_symbol("Xx"))

    def test_resolve_by_string(self):
        """ Test an isotope present in the table. """

        analysis = self.resolver.resolve_by_string("U-235")

        self.assertTrue(analysis.exists)
        self.assertEqual(analysis.protons, 92)
        self.assertEqual(analysis.neutrons, 143)
        self.assertEqual(analysis.mass, 235)
        self.assertEqual(analysis.isotope_symbol, "U-235")
        self.assertEqual(analysis.isotope_name, "Uranium-235")
        self.assertEqual(analysis.element_symbol, "U")
        self.assertFalse(analysis.is_stable)
        self.assertEqual(analysis.halflife, 2.22e16)
        self.assertIsNone(analysis.metastable_number)
        self.assertIsNone(analysis.metastable_parent_symbol)
        self.assertIsNone(analysis.estimated_stable)

    def test_resolve_by_string_name(self):
        """ Test element names, with and without a mass. """

        analysis = self.resolver.resolve_by_string("uranium-238")

        self.assertTrue(analysis.exists)
        self.assertEqual(analysis.isotope_symbol, "U-238")

        # A bare element takes its standard atomic mass
        analysis = self.resolver.resolve_by_string("Uranium")

        self.assertEqual(analysis.neutrons, 146)
        self.assertEqual(analysis.isotope_symbol, "U-238")

    def test_resolve_metastable(self):
        """ Test metastable suffixes. """

        analysis = self.resolver.resolve_by_string("Ba-137m")

        self.assertTrue(analysis.exists)
        self.assertEqual(analysis.metastable_number, 0)
        self.assertEqual(analysis.metastable_parent_symbol, "Ba-137")
        self.assertEqual(analysis.halflife, 153.1)

        analysis = self.resolver.resolve_by_string("In-119m2")

        self.assertFalse(analysis.exists)
        self.assertEqual(analysis.isotope_symbol, "In-119m2")
        self.assertEqual(analysis.metastable_number, 2)
        self.assertEqual(analysis.metastable_parent_symbol, "In-119")

    def test_resolve_systematic(self):
        """ Test an element beyond the table. """

        analysis = self.resolver.resolve_by_string("Uue-300")

        self.assertFalse(analysis.exists)
        self.assertIsNone(analysis.name)
        self.assertIsNone(analysis.symbol)
        self.assertEqual(analysis.element_symbol, "Uue")
        self.assertEqual(analysis.element_name, "Ununennium")
        self.assertEqual(analysis.protons, 119)
        self.assertEqual(analysis.neutrons, 181)
        self.assertIsNone(analysis.is_stable)
        self.assertIsNone(analysis.halflife)
        self.assertFalse(analysis.estimated_stable)

    def test_resolve_by_string_errors(self):
        """ Test strings that cannot be understood. """

        for string in ["Ununennium", "Xx-12", "U-", "U-235-1", "", "H-0"]:
            with self.assertRaises(ParseError):
                self.resolver.resolve_by_string(string)

        # Parse errors are also value errors
        with self.assertRaises(ValueError):
            self.resolver.resolve_by_string("Zz-99")

        with self.assertRaises(ParseError):
            self.resolver.resolve_by_string(238)

    def test_resolve_by_nucleons(self):
        analysis = self.resolver.resolve_by_nucleons(92, 146)

        self.assertTrue(analysis.exists)
        self.assertEqual(analysis.isotope_symbol, "U-238")

        analysis = self.resolver.resolve_by_nucleons(1, 0)

        self.assertEqual(analysis.isotope_symbol, "H-1")
        self.assertTrue(analysis.is_stable)

        with self.assertRaises(InvalidNucleonCountError):
            self.resolver.resolve_by_nucleons(0, 5)
        with self.assertRaises(InvalidNucleonCountError):
            self.resolver.resolve_by_nucleons(1, -1)

    def test_round_trip(self):
        """ Test that isotope symbols resolve back to their nucleons. """

        for protons in [1, 6, 55, 82, 92, 118, 119, 150, 999]:
            neutrons = protons + 10
            analysis = self.resolver.resolve_by_nucleons(protons, neutrons)
            back = self.resolver.resolve_by_string(analysis.isotope_symbol)

            self.assertEqual((back.protons, back.neutrons),
                             (protons, neutrons))
            self.assertEqual(back.isotope_symbol, analysis.isotope_symbol)

    def test_resolve(self):
        """ Test dispatch on the kind of argument. """

        analysis = self.resolver.resolve("Pb-206")

        self.assertIs(self.resolver.resolve(analysis), analysis)
        self.assertEqual(self.resolver.resolve(82, 124), analysis)

        with self.assertRaises(TypeError):
            self.resolver.resolve(82)
        with self.assertRaises(TypeError):
            self.resolver.resolve(82.0, 124)

    def test_parse_nucleons(self):
        self.assertEqual(self.resolver.parse_nucleons("Th-234"), (90, 144))
