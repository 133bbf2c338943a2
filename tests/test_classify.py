"""
Unit tests for prefix classification.

Contract:
- case-insensitive prefix lookup
- total: unknown / empty input -> (raw prefix, "(unscoped)")
"""

import unittest

from catalogsearch.classify import DAMORE_MCKIM, KHOURY, UNSCOPED_COLLEGE, classify, prefix_of


class TestClassify(unittest.TestCase):
    def test_known_prefix(self) -> None:
        self.assertEqual(classify("CS 5100"), ("Computer Science", KHOURY))
        self.assertEqual(classify("ACCT 6217").college, DAMORE_MCKIM)

    def test_case_insensitive(self) -> None:
        self.assertEqual(classify("cs 5100"), classify("CS 5100"))
        self.assertEqual(classify("Eece 5644").department, "Electrical and Computer Engineering")

    def test_unknown_prefix_is_unscoped(self) -> None:
        c = classify("ZZZ 1234")
        self.assertEqual(c.department, "ZZZ")
        self.assertEqual(c.college, UNSCOPED_COLLEGE)

    def test_total_on_odd_input(self) -> None:
        self.assertEqual(classify(""), ("", UNSCOPED_COLLEGE))
        self.assertEqual(classify("   "), ("", UNSCOPED_COLLEGE))
        self.assertEqual(classify("5100").college, UNSCOPED_COLLEGE)

    def test_prefix_of(self) -> None:
        self.assertEqual(prefix_of(" ds 5110 "), "DS")
        self.assertEqual(prefix_of(""), "")


if __name__ == "__main__":
    unittest.main()
