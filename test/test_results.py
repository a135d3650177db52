""" Tests for results.py """

import unittest

import numpy as np

from opendecay import results


class TestResults(unittest.TestCase):
    """ Tests for the Results class."""

    def setUp(self):
        self.res = results.Results(
            [0.0, 1.0, 2.0],
            [{"Pb-210": 2}, {"Pb-210": 1, "Pb-206": 1}, {"Pb-206": 2}])

    def test__init__(self):
        """ Test that columns follow first appearance. """

        self.assertEqual(self.res.n_steps, 3)
        self.assertEqual(self.res.n_isotopes, 2)
        self.assertEqual(self.res.isotopes, ["Pb-210", "Pb-206"])
        np.testing.assert_array_equal(self.res.time, [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(self.res.data,
                                      [[2, 0], [1, 1], [0, 2]])

    def test__getitem__(self):
        """ Test indexing by step and isotope. """

        self.assertEqual(self.res[1, "Pb-206"], 1)
        self.assertEqual(self.res[0, 0], 2)
        np.testing.assert_array_equal(self.res[:, "Pb-206"], [0, 1, 2])

        with self.assertRaises(KeyError):
            self.res[0, "U-238"]
