import unittest

from application.validation import validate_credentials
from domain.models import FieldError


class ValidateCredentialsTests(unittest.TestCase):
    def test_valid_credentials(self):
        self.assertIsNone(validate_credentials("abc", "abcd"))

    def test_username_boundary(self):
        self.assertEqual(
            validate_credentials("ab", "abcd"),
            FieldError(field="username", message="length must be greater than 2"),
        )

    def test_password_boundary(self):
        self.assertEqual(
            validate_credentials("abc", "abc"),
            FieldError(field="password", message="length must be greater than 3"),
        )

    def test_first_failing_rule_wins(self):
        error = validate_credentials("", "")
        self.assertEqual(error.field, "username")

    def test_length_counts_utf16_code_units(self):
        # One emoji is two UTF-16 code units.
        self.assertIsNone(validate_credentials("\U0001F600a", "\U0001F600\U0001F600"))
        self.assertEqual(validate_credentials("\U0001F600", "abcd").field, "username")

    def test_lone_surrogates_do_not_raise(self):
        self.assertIsNone(validate_credentials("al\udcffice", "pa\udcffss"))

    def test_whitespace_is_not_stripped(self):
        self.assertIsNone(validate_credentials("   ", "    "))


if __name__ == "__main__":
    unittest.main()
