#!/usr/bin/env python3
""" Runs opendecay's test suite.

There are two test suites:
 1. The "normal" test suite contains the unit tests of every module, run
    against the small table in test/dummy_table.py.  This is default.
 2. The "full" test suite also runs the unit tests against the reference
    table named by the environment variable OPENDECAY_DATA, checking that
    it loads and that every daughter it names can be parsed.

The test suite is passed as the first argument.
"""

import unittest
import argparse

# Tests.  Add them as they're produced.

suite_normal = [
    "test.test_decay_mode",
    "test.test_reference_table",
    "test.test_resolver",
    "test.test_nuclide",
    "test.test_population",
    "test.test_results",
    "test.test_settings",
    "test.test_simulation",
    "test.test_utilities"
    ]

suite_full = [
    "test.test_full"
    ]

def test(use_full):
    """ Run all tests in suite.

    Parameters
    ----------
    use_full : bool
        Whether or not to do tests listed in suite_full.
    """

    test_suite = unittest.TestSuite()

    for module_test in suite_normal:
        tests = unittest.defaultTestLoader.loadTestsFromName(module_test)
        test_suite.addTest(tests)

    if use_full:
        for module_test in suite_full:
            tests = unittest.defaultTestLoader.loadTestsFromName(module_test)
            test_suite.addTest(tests)

    unittest.TextTestRunner().run(test_suite)

if __name__ == '__main__':

    parser = argparse.ArgumentParser(description="Runs opendecay's test suite.")

    parser.add_argument("--suite", type=str, default="normal",
                        help="Which suite to run, \"normal\" or \"full\", (default: \"normal\")")

    args = parser.parse_args()

    full_test = bool(args.suite == "full")

    test(full_test)
