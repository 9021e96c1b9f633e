import unittest

from cardj.security import hash_password, verify_password


class PasswordHashingTests(unittest.TestCase):
    def test_hash_and_verify(self):
        hashed = hash_password("correct-horse")
        self.assertNotEqual(hashed, "correct-horse")
        self.assertTrue(verify_password("correct-horse", hashed))
        self.assertFalse(verify_password("wrong-horse", hashed))

    def test_non_bcrypt_value_does_not_verify(self):
        self.assertFalse(verify_password("plain", "plain"))


if __name__ == "__main__":
    unittest.main()
