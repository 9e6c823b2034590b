import unittest

import cantofal


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(cantofal, "CantoDriver"))
        self.assertTrue(hasattr(cantofal, "CantoRepository"))
        self.assertTrue(hasattr(cantofal, "MdcUrlGenerator"))
        self.assertTrue(hasattr(cantofal, "CantoConfig"))
        self.assertTrue(hasattr(cantofal, "OAuthClient"))

        self.assertTrue(hasattr(cantofal, "AssetRecord"))
        self.assertTrue(hasattr(cantofal, "FolderTree"))
        self.assertTrue(hasattr(cantofal, "ProcessingTask"))
        self.assertTrue(hasattr(cantofal, "LocalCopy"))

        self.assertTrue(hasattr(cantofal, "CantoFalError"))
        self.assertTrue(hasattr(cantofal, "InvalidIdentifierError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(cantofal, "__all__"))
        self.assertIn("CantoDriver", cantofal.__all__)
        self.assertIn("CantoFalError", cantofal.__all__)
        for name in cantofal.__all__:
            self.assertTrue(hasattr(cantofal, name), name)


if __name__ == "__main__":
    unittest.main()
