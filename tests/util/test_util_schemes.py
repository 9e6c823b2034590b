import unittest

from cantofal.util.schemes import (
    SCHEME_ALBUM,
    SCHEME_DOCUMENT,
    SCHEME_FOLDER,
    SCHEME_IMAGE,
    is_container_scheme,
    is_known_scheme,
)


class TestUtilSchemes(unittest.TestCase):
    def test_containers(self) -> None:
        self.assertTrue(is_container_scheme(SCHEME_FOLDER))
        self.assertTrue(is_container_scheme(SCHEME_ALBUM))

    def test_assets_are_not_containers(self) -> None:
        self.assertFalse(is_container_scheme(SCHEME_IMAGE))
        self.assertFalse(is_container_scheme(SCHEME_DOCUMENT))
        self.assertFalse(is_container_scheme("unknown"))

    def test_known_schemes(self) -> None:
        self.assertTrue(is_known_scheme("video"))
        self.assertTrue(is_known_scheme("other"))
        self.assertFalse(is_known_scheme("Folder"))
