import hashlib
import unittest

from cantofal.errors import InvalidIdentifierError
from cantofal.util.identifiers import (
    decode,
    encode,
    get_remote_id,
    get_scheme,
    hash_identifier,
    is_mdc_enabled,
    is_root,
    root_identifier,
    validate,
)
from cantofal.util.schemes import ASSET_SCHEMES, CONTAINER_SCHEMES


class TestUtilIdentifiers(unittest.TestCase):
    def test_encode_format(self) -> None:
        self.assertEqual(encode("image", "A1B2"), "image<>A1B2")
        self.assertEqual(encode("image", "A1B2", mdc=True), "image<>A1B2<>mdc")

    def test_decode_round_trip_for_all_schemes(self) -> None:
        for scheme in sorted(CONTAINER_SCHEMES | ASSET_SCHEMES):
            for remote_id in ("ROOT", "x", "8c1f0a9d2e", "ID-with-dash"):
                with self.subTest(scheme=scheme, remote_id=remote_id):
                    self.assertEqual(decode(encode(scheme, remote_id)), (scheme, remote_id))

    def test_encode_decode_preserves_token(self) -> None:
        for token in ("album<>ABC", "document<>42<>mdc"):
            with self.subTest(token=token):
                scheme, remote_id = decode(token)
                self.assertEqual(encode(scheme, remote_id, is_mdc_enabled(token)), token)

    def test_accessors(self) -> None:
        self.assertEqual(get_scheme("album<>ABC"), "album")
        self.assertEqual(get_remote_id("album<>ABC"), "ABC")

    def test_decode_rejects_malformed(self) -> None:
        for token in ("", "image", "image#A1", "unknown<>A1", "image<>", "image<>A<>xyz",
                      "image<>A<>mdc<>mdc"):
            with self.subTest(token=token):
                with self.assertRaises(InvalidIdentifierError):
                    decode(token)

    def test_validate_never_raises(self) -> None:
        self.assertTrue(validate("folder<>ROOT"))
        self.assertTrue(validate("image<>A<>mdc"))
        self.assertFalse(validate(""))
        self.assertFalse(validate("no-delimiter"))
        self.assertFalse(validate("bogus<>A1"))
        self.assertFalse(validate(None))  # type: ignore[arg-type]

    def test_is_mdc_enabled(self) -> None:
        self.assertTrue(is_mdc_enabled("image<>A<>mdc"))
        self.assertFalse(is_mdc_enabled("image<>A"))
        self.assertFalse(is_mdc_enabled("garbage"))

    def test_root(self) -> None:
        self.assertEqual(root_identifier(), "folder<>ROOT")
        self.assertTrue(is_root("folder<>ROOT"))
        self.assertTrue(is_root("album<>ROOT"))
        self.assertFalse(is_root("folder<>ABC"))
        self.assertFalse(is_root("ROOT"))

    def test_hash_identifier_is_sha1_of_token(self) -> None:
        token = "image<>A1B2"
        self.assertEqual(hash_identifier(token), hashlib.sha1(token.encode("utf-8")).hexdigest())
        self.assertEqual(hash_identifier(token), hash_identifier(token))
        self.assertNotEqual(hash_identifier(token), hash_identifier("image<>A1B3"))


if __name__ == "__main__":
    unittest.main()
