import unittest

from application.passwords import PasswordHasher
from domain.exceptions import PasswordHashError


class PasswordHasherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)

    def test_same_password_hashes_differently_but_both_verify(self):
        hash1 = self.hasher.hash("secret1")
        hash2 = self.hasher.hash("secret1")

        self.assertNotEqual(hash1, hash2)
        self.assertTrue(hash1.startswith("$argon2id$"))
        self.assertTrue(self.hasher.verify(hash1, "secret1"))
        self.assertTrue(self.hasher.verify(hash2, "secret1"))

    def test_wrong_password_does_not_verify(self):
        hashed = self.hasher.hash("secret1")
        self.assertFalse(self.hasher.verify(hashed, "secret2"))

    def test_malformed_hash_raises(self):
        with self.assertRaises(PasswordHashError):
            self.hasher.verify("not-a-hash", "secret1")

    def test_unencodable_password_raises_hash_error(self):
        with self.assertRaises(PasswordHashError):
            self.hasher.hash("pa\udcffss")

        hashed = self.hasher.hash("secret1")
        with self.assertRaises(PasswordHashError):
            self.hasher.verify(hashed, "pa\udcffss")

    def test_needs_rehash_when_parameters_change(self):
        hashed = self.hasher.hash("secret1")
        stronger = PasswordHasher(time_cost=2, memory_cost=16, parallelism=1)

        self.assertFalse(self.hasher.needs_rehash(hashed))
        self.assertTrue(stronger.needs_rehash(hashed))


if __name__ == "__main__":
    unittest.main()
