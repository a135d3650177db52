""" Tests for reference_table.py """

import json
import math
import os
import tempfile
import unittest
from unittest.mock import patch

import numpy as np

from opendecay import reference_table
from opendecay.decay_mode import DecayMode
from opendecay.reference_table import DecayBranch
import test.dummy_table as dummy_table


class TestDecayBranch(unittest.TestCase):
    """ Tests for the DecayBranch tuple."""

    def test_from_dict(self):
        """ Test reading a branch from its table form. """

        branch = DecayBranch.from_dict({"daughter": "Th-234", "mode": "α",
                                        "percentage": 100})

        self.assertEqual(branch, DecayBranch("Th-234", DecayMode.Alpha, 100))
        self.assertTrue(branch.usable)

        empty = DecayBranch.from_dict({})

        self.assertEqual(empty, DecayBranch(None, None, None))
        self.assertFalse(empty.usable)

    def test_percentage_known(self):
        """ Test which percentages count as known. """

        self.assertTrue(DecayBranch("A", None, 5).percentage_known)
        self.assertTrue(DecayBranch("A", None, 0.02).percentage_known)
        self.assertFalse(DecayBranch("A", None, None).percentage_known)
        self.assertFalse(DecayBranch("A", None, math.nan).percentage_known)
        self.assertFalse(DecayBranch("A", None, True).percentage_known)


class TestBranchProbabilities(unittest.TestCase):
    """ Tests for partition_branches and branch_probabilities."""

    def test_partition_branches(self):
        branches = [DecayBranch("A", DecayMode.BetaPlus, 50),
                    DecayBranch(None, DecayMode.SpontaneousFission, 1),
                    DecayBranch("B", DecayMode.BetaPlus, None)]

        known, unknown = reference_table.partition_branches(branches)

        self.assertEqual(known, [branches[0]])
        self.assertEqual(unknown, [branches[2]])

    def test_known_only(self):
        """ Test that the residual goes to the most likely branch. """

        table = dummy_table.dummy_table()
        decay = table.isotope("Cs-137").decay

        probabilities = reference_table.branch_probabilities(decay)

        self.assertEqual([b.daughter for b, _ in probabilities],
                         ["Ba-137m", "Ba-137"])
        self.assertAlmostEqual(probabilities[0][1], 0.946 + 0.054 * 0.946)
        self.assertAlmostEqual(probabilities[1][1], 0.054 * 0.054)
        self.assertAlmostEqual(sum(p for _, p in probabilities), 1.0)

    def test_unknown_share_residual(self):
        """ Test that unknown branches split the residual evenly. """

        branches = [DecayBranch("A", DecayMode.BetaPlus, 50),
                    DecayBranch("B", DecayMode.BetaPlus, None),
                    DecayBranch("C", DecayMode.BetaPlus, None)]

        probabilities = reference_table.branch_probabilities(branches)

        self.assertEqual([p for _, p in probabilities], [0.5, 0.25, 0.25])

    def test_no_daughters(self):
        branches = [DecayBranch(None, DecayMode.SpontaneousFission, 3.1)]

        self.assertEqual(reference_table.branch_probabilities(branches), [])


class TestReferenceTable(unittest.TestCase):
    """ Tests for the ReferenceTable class."""

    def setUp(self):
        self.table = dummy_table.dummy_table()

    def test__init__(self):
        """ Test that an empty table can be built. """
        table = reference_table.ReferenceTable()

        self.assertEqual(table.n_elements, 0)
        self.assertEqual(table.n_isotopes, 0)
        self.assertIsNone(table.isotope("U-238"))

    def test_json_read(self):
        """ Write the dummy table to disk and read it back. """

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, "table.json")
            with open(filename, "w", encoding="utf-8") as fh:
                json.dump(dummy_table.table_data(), fh, ensure_ascii=False)

            table = reference_table.ReferenceTable.json_read(filename)

        self.assertEqual(table.n_elements, 118)
        self.assertEqual(table.n_isotopes, 29)

        u238 = table.isotope("U-238")

        self.assertEqual(u238.protons, 92)
        self.assertEqual(u238.neutrons, 146)
        self.assertEqual(u238.mass, 238)
        self.assertFalse(u238.is_stable)
        self.assertEqual(u238.halflife, 1.41e17)
        self.assertEqual(u238.n_decay_paths, 2)
        self.assertEqual(u238.decay[0],
                         DecayBranch("Th-234", DecayMode.Alpha, 100))
        self.assertIsNone(u238.decay[1].daughter)
        self.assertIs(u238.decay[1].mode, DecayMode.SpontaneousFission)

    def test_json_read_environment(self):
        """ Test that the table path defaults to OPENDECAY_DATA. """

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, "table.json")
            with open(filename, "w", encoding="utf-8") as fh:
                json.dump(dummy_table.table_data(), fh)

            with patch.dict(os.environ, {"OPENDECAY_DATA": filename}):
                table = reference_table.ReferenceTable.json_read()

        self.assertEqual(table.n_isotopes, 29)

    @patch("builtins.print")
    def test_json_read_missing(self, mock_print):
        """ Test that a missing file is reported and raised. """

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, "missing.json")
            with self.assertRaises(OSError):
                reference_table.ReferenceTable.json_read(filename)

        mock_print.assert_called_once()

    def test_element_lookup(self):
        """ Test the element accessors. """

        self.assertEqual(self.table.element("URANIUM")["number"], 92)
        self.assertEqual(self.table.element("uranium")["symbol"], "U")
        self.assertIsNone(self.table.element("ununennium"))

        self.assertEqual(self.table.element_key_by_number(92), "uranium")
        self.assertEqual(self.table.element_by_number(1)["name"], "Hydrogen")
        self.assertIsNone(self.table.element_by_number(0))
        self.assertIsNone(self.table.element_by_number(119))

        self.assertEqual(self.table.element_key_by_symbol("Pb"), "lead")
        self.assertIsNone(self.table.element_key_by_symbol("pb"))

    def test_isotopes_of(self):
        names = [iso.name for iso in self.table.isotopes_of(82)]

        self.assertEqual(names, ["Pb-206", "Pb-210", "Pb-214"])
        self.assertEqual(self.table.isotopes_of(3), [])
        self.assertEqual(self.table.isotopes_of(119), [])

    def test_decay_info(self):
        """ Test finding the branch between two isotopes. """

        branch = self.table.decay_info("Cs-137", "Ba-137")

        self.assertEqual(branch.percentage, 5.4)
        self.assertIs(branch.mode, DecayMode.BetaMinus)
        self.assertIsNone(self.table.decay_info("Cs-137", "Xe-137"))
        self.assertIsNone(self.table.decay_info("Xe-137", "Cs-137"))

    def test_unknown_daughters(self):
        """ Test the audit of daughters missing from the table. """

        missing = self.table.unknown_daughters()

        self.assertEqual(list(missing),
                         ["Bi-214", "At-218", "Th-230", "Th-231", "Cm-248"])
        self.assertEqual(missing["At-218"], ["Po-218"])
        self.assertEqual(missing["Cm-248"], ["Cf-252"])

    def test_decay_products(self):
        """ Test the breadth first walk over daughters. """

        products = self.table.decay_products(["Ra-226"])

        self.assertEqual(products, ["Ra-226", "Rn-222", "Po-218", "Pb-214",
                                    "At-218", "Bi-214"])
        self.assertEqual(self.table.decay_products(["Pb-206"]), ["Pb-206"])

    def test_form_matrix(self):
        """ Test the decay matrix of a closed chain. """

        isotopes = ["Pb-210", "Bi-210", "Po-210", "Pb-206"]
        matrix = self.table.form_matrix(isotopes).toarray()

        rates = [1 / (2 * 7.0e8), 1 / (2 * 4.33e5), 1 / (2 * 1.196e7), 0.0]
        expected = np.zeros((4, 4))
        for i in range(3):
            expected[i, i] = -rates[i]
            expected[i + 1, i] = rates[i]

        np.testing.assert_allclose(matrix, expected)

        # Nothing leaves the chain
        np.testing.assert_allclose(matrix.sum(axis=0), np.zeros(4), atol=1e-20)

    def test_form_matrix_fission(self):
        """ Test that fission without a daughter is a pure loss. """

        matrix = self.table.form_matrix(["Cf-254"]).toarray()

        np.testing.assert_allclose(matrix, [[-1 / (2 * 5.2e6)]])
