import unittest

from cantofal.auth import CantoConfig
from cantofal.auth.config import DEFAULT_MASTER_IMAGE_SIZE
from cantofal.errors import InvalidConfigurationError


def _valid_mapping() -> dict:
    return {
        "storage_id": 3,
        "canto_name": "acme",
        "canto_domain": "canto.com",
        "app_id": "app",
        "app_secret": "secret",
    }


class TestCantoConfig(unittest.TestCase):
    def test_valid_snake_case(self) -> None:
        config = CantoConfig.from_mapping(_valid_mapping())
        self.assertTrue(config.is_valid)
        self.assertEqual(config.problems(), [])
        self.assertEqual(config.root_folder_scheme, "folder")
        self.assertEqual(config.root_folder_id, "ROOT")
        self.assertEqual(config.master_image_size, DEFAULT_MASTER_IMAGE_SIZE)

    def test_host_camel_case_keys(self) -> None:
        config = CantoConfig.from_mapping(
            {
                "storageUid": "7",
                "cantoName": "acme",
                "cantoDomain": "canto.de",
                "appId": "app",
                "appSecret": "secret",
                "rootFolderScheme": "album",
                "rootFolder": "ALB1",
                "masterImageSize": "2000",
                "mdcDomainName": "mdc.example.com",
                "mdcAwsAccountId": "123456",
            }
        )
        self.assertTrue(config.is_valid)
        self.assertEqual(config.storage_id, 7)
        self.assertEqual(config.root_folder_scheme, "album")
        self.assertEqual(config.root_folder_id, "ALB1")
        self.assertEqual(config.master_image_size, 2000)
        self.assertEqual(config.mdc_domain_name, "mdc.example.com")

    def test_missing_fields_make_config_invalid(self) -> None:
        for key in ("canto_name", "canto_domain", "app_id", "app_secret"):
            with self.subTest(key=key):
                data = _valid_mapping()
                data[key] = "  "
                config = CantoConfig.from_mapping(data)
                self.assertFalse(config.is_valid)
                self.assertIn(f"{key} must be a non-empty string", config.problems())

    def test_storage_id_must_be_positive(self) -> None:
        for value in (0, -1, None, "abc", True):
            with self.subTest(value=value):
                data = _valid_mapping()
                data["storage_id"] = value
                self.assertFalse(CantoConfig.from_mapping(data).is_valid)

    def test_require_valid_raises(self) -> None:
        config = CantoConfig.from_mapping({})
        with self.assertRaises(InvalidConfigurationError) as ctx:
            config.require_valid()
        self.assertTrue(ctx.exception.details["problems"])

    def test_urls(self) -> None:
        config = CantoConfig.from_mapping(_valid_mapping())
        self.assertEqual(config.api_base_url, "https://acme.canto.com/api/v1")
        self.assertEqual(config.token_url, "https://oauth.canto.com/oauth/api/oauth2/token")


if __name__ == "__main__":
    unittest.main()
