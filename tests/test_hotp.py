import hashlib
import hmac
import unittest

import pyotp

from otp_engine import base32
from otp_engine.hotp import compute_hotp, dynamic_truncate, int_to_bytes

RFC4226_KEY = b"12345678901234567890"
RFC4226_CODES = ["755224", "287082", "359152", "969429", "338314",
                 "254676", "287922", "162583", "399871", "520489"]
# RFC 4226 appendix D, "Truncated" decimal column
RFC4226_TRUNCATED = [1284755224, 1094287082, 137359152, 1726969429, 1640338314,
                     868254676, 1918287922, 82162583, 673399871, 645520489]


class CounterEncodingTests(unittest.TestCase):
    def test_big_endian_eight_bytes(self):
        self.assertEqual(int_to_bytes(0), b"\x00" * 8)
        self.assertEqual(int_to_bytes(1), b"\x00" * 7 + b"\x01")
        self.assertEqual(int_to_bytes(0x0102030405060708), bytes([1, 2, 3, 4, 5, 6, 7, 8]))
        self.assertEqual(int_to_bytes(2 ** 64 - 1), b"\xff" * 8)

    def test_out_of_range(self):
        with self.assertRaises(ValueError):
            int_to_bytes(-1)
        with self.assertRaises(ValueError):
            int_to_bytes(2 ** 64)

    def test_non_integer(self):
        with self.assertRaises(TypeError):
            int_to_bytes(1.5)


class DynamicTruncationTests(unittest.TestCase):
    def test_rfc4226_section_5_4_example(self):
        digest = bytes.fromhex("1f8698690e02ca16618550ef7f19da8e945b555a")
        self.assertEqual(dynamic_truncate(digest), 0x50EF7F19)

    def test_high_bit_masked(self):
        # offset 0, first byte 0xff
        digest = b"\xff\xff\xff\xff" + b"\x00" * 15 + b"\x00"
        self.assertEqual(dynamic_truncate(digest), 0x7FFFFFFF)

    def test_max_offset(self):
        digest = b"\x00" * 15 + b"\x12\x34\x56\x78" + b"\x0f"
        self.assertEqual(dynamic_truncate(digest), 0x12345678)

    def test_rfc4226_truncated_values(self):
        for counter, expected in enumerate(RFC4226_TRUNCATED):
            digest = hmac.new(RFC4226_KEY, int_to_bytes(counter), hashlib.sha1).digest()
            self.assertEqual(dynamic_truncate(digest), expected)


class ComputeHOTPTests(unittest.TestCase):
    def test_rfc4226_vectors(self):
        codes = [compute_hotp(RFC4226_KEY, c) for c in range(10)]
        self.assertEqual(codes, RFC4226_CODES)

    def test_vectors_through_base32_secret(self):
        key = base32.decode("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ")
        self.assertEqual([compute_hotp(key, c) for c in range(10)], RFC4226_CODES)

    def test_always_six_digits(self):
        for counter in range(200):
            code = compute_hotp(b"zero-padding-check", counter)
            self.assertEqual(len(code), 6)
            self.assertTrue(code.isdigit())

    def test_matches_pyotp(self):
        secret = "JBSWY3DPEHPK3PXPJBSWY3DPEHPK3PXP"
        ref = pyotp.HOTP(secret)
        key = base32.decode(secret)
        for counter in (0, 1, 42, 10 ** 6, 2 ** 40):
            self.assertEqual(compute_hotp(key, counter), ref.at(counter))

    def test_negative_counter_rejected(self):
        with self.assertRaises(ValueError):
            compute_hotp(RFC4226_KEY, -1)


if __name__ == "__main__":
    unittest.main()
