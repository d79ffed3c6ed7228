import unittest
from collections import Counter
from datetime import datetime, timezone

from courseids.errors import InvalidInput
from courseids.ids.course_code import (
    ALPHABET,
    allocate_course_code,
    course_code,
    encode_course_code,
    is_valid_course_code,
)

T = "2025-09-01T00:00:00.000Z"


class TestCourseCode(unittest.TestCase):
    def test_pinned_vector(self):
        self.assertEqual(course_code("CHBE241", T), "FG0H78")

    def test_stable(self):
        when = datetime(2025, 9, 1, tzinfo=timezone.utc)
        self.assertEqual(course_code("CHBE241", when), course_code("CHBE241", when))
        self.assertEqual(course_code("CHBE241", when), course_code("CHBE241", T))

    def test_format(self):
        for name in ["CHBE241", "APSC 099", "Matemáticas"]:
            code = course_code(name, T)
            self.assertTrue(is_valid_course_code(code), code)

    def test_encode_pairs(self):
        # 57 10 d8 e9 73 50 -> 87 16 216 233 115 80 -> mod 36 -> 15 16 0 17 7 8
        self.assertEqual(encode_course_code("5710d8e97350"), "FG0H78")
        self.assertEqual(encode_course_code("000000000000"), "000000")
        self.assertEqual(encode_course_code("ffffffffffff"), "333333")
        self.assertEqual(encode_course_code("0a2324000000"), "AZ0000")

    def test_modulo_bias_is_kept(self):
        # 256 = 7 * 36 + 4: the first four symbols are reachable from one extra byte value.
        counts = Counter(ALPHABET[b % 36] for b in range(256))
        self.assertEqual({counts[c] for c in "0123"}, {8})
        self.assertEqual({counts[c] for c in ALPHABET[4:]}, {7})

    def test_missing_fields(self):
        with self.assertRaises(InvalidInput) as cm:
            course_code("", T)
        self.assertEqual(cm.exception.field, "course_name")
        with self.assertRaises(InvalidInput) as cm:
            course_code("CHBE241", None)
        self.assertEqual(cm.exception.field, "created_at")


class TestCodeValidation(unittest.TestCase):
    def test_valid(self):
        self.assertTrue(is_valid_course_code("FG0H78"))
        self.assertTrue(is_valid_course_code("000000"))

    def test_invalid(self):
        for code in ["", "fg0h78", "FG0H7", "FG0H789", "FG-H78", "FG0H7 ", "FG0H78\n", "\nFG0H78"]:
            self.assertFalse(is_valid_course_code(code), code)


class TestAllocateCourseCode(unittest.TestCase):
    def test_first_try(self):
        alloc = allocate_course_code("CHBE241", T, lambda c: False)
        self.assertEqual(alloc.code, "FG0H78")
        self.assertEqual(alloc.attempts, 0)
        self.assertTrue(alloc.unique)
        self.assertEqual(alloc.created_at, T)

    def test_retries_with_cumulative_nudges(self):
        taken = {"FG0H78", "RND033"}
        alloc = allocate_course_code("CHBE241", T, lambda c: c in taken)
        # +1 ms -> RND033 (taken), +2 ms more -> .003
        self.assertEqual(alloc.code, "YP37GF")
        self.assertEqual(alloc.created_at, "2025-09-01T00:00:00.003Z")
        self.assertEqual(alloc.attempts, 2)
        self.assertTrue(alloc.unique)

    def test_gives_up(self):
        calls = []

        def taken(code):
            calls.append(code)
            return True

        alloc = allocate_course_code("CHBE241", T, taken, max_attempts=3)
        self.assertFalse(alloc.unique)
        self.assertEqual(alloc.attempts, 3)
        self.assertEqual(len(calls), 3)
        self.assertEqual(alloc.code, calls[-1])

    def test_bad_max_attempts(self):
        with self.assertRaises(ValueError):
            allocate_course_code("CHBE241", T, lambda c: False, max_attempts=0)


if __name__ == "__main__":
    unittest.main()
