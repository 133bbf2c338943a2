"""
Unit tests for keyword generation.

Keywords depend only on (prefix, label, name), so generating twice must give
the same set rather than a growing one.
"""

import unittest

from catalogsearch.keywords import generate_keywords


class TestGenerateKeywords(unittest.TestCase):
    def test_prefix_label_and_synonyms(self) -> None:
        kws = generate_keywords("CS", "Computer Science", "Machine Learning Fundamentals")
        self.assertTrue({"cs", "computer science", "ml", "machine learning", "ai", "data science"} <= kws)

    def test_all_lower_case(self) -> None:
        kws = generate_keywords("EECE", "Electrical and Computer Engineering", "Robotics Systems")
        self.assertTrue(all(k == k.lower() for k in kws))
        self.assertIn("robots", kws)

    def test_idempotent(self) -> None:
        first = generate_keywords("DS", "Data Science", "Data Mining Techniques")
        second = generate_keywords("DS", "Data Science", "Data Mining Techniques")
        self.assertEqual(first, second)
        self.assertIsInstance(first, frozenset)

    def test_no_transitive_expansion(self) -> None:
        # "machine learning" is implied by "data mining", but its own synonyms
        # (e.g. "ml") must not be pulled in transitively.
        kws = generate_keywords("DS", "Data Science", "Data Mining Techniques")
        self.assertIn("machine learning", kws)
        self.assertNotIn("ml", kws)

    def test_empty_fields(self) -> None:
        self.assertEqual(generate_keywords("", "", ""), frozenset())


if __name__ == "__main__":
    unittest.main()
