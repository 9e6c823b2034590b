import unittest
from datetime import datetime, timezone

from cantofal.models import AssetRecord


def _ts(*args: int) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp())


class TestAssetRecord(unittest.TestCase):
    def test_from_api_full_payload(self) -> None:
        data = {
            "id": "IMG1",
            "scheme": "image",
            "name": "Beach.JPG",
            "width": "4000",
            "height": 3000,
            "default": {
                "Size": "2048",
                "Content Type": "image/jpeg",
                "Date Created": "20210101120000000",
                "Date modified": "20210202120000000",
                "Date uploaded": "20210303120000000",
            },
            "url": {"directUrlOriginal": "https://acme.canto.com/direct/image/IMG1/original"},
            "relatedAlbums": [
                {"id": "ALB1", "scheme": "album"},
                {"id": "", "scheme": "album"},
                "junk",
            ],
        }

        record = AssetRecord.from_api(data)

        self.assertEqual(record.identifier, "image<>IMG1")
        self.assertEqual(record.remote_id, "IMG1")
        self.assertEqual(record.scheme, "image")
        self.assertEqual(record.name, "Beach.JPG")
        self.assertEqual(record.extension, "JPG")
        self.assertEqual(record.size, 2048)
        self.assertEqual(record.mime_type, "image/jpeg")
        self.assertEqual(record.created_at, _ts(2021, 1, 1, 12))
        self.assertEqual(record.modified_at, _ts(2021, 2, 2, 12))
        self.assertEqual(record.uploaded_at, _ts(2021, 3, 3, 12))
        self.assertEqual((record.width, record.height), (4000, 3000))
        self.assertEqual(record.related_folder_identifiers, ["album<>ALB1"])
        self.assertEqual(record.direct_url, "https://acme.canto.com/direct/image/IMG1/original")
        self.assertFalse(record.mdc_eligible)
        self.assertEqual(record.raw["id"], "IMG1")

    def test_from_api_mdc_identifier(self) -> None:
        record = AssetRecord.from_api({"id": "IMG1", "scheme": "image", "name": "a.png"}, use_mdc=True)
        self.assertEqual(record.identifier, "image<>IMG1<>mdc")
        self.assertTrue(record.mdc_eligible)

    def test_from_api_sparse_payload(self) -> None:
        record = AssetRecord.from_api(
            {"id": "DOC1", "scheme": "document", "name": "notes", "size": 12, "time": "20200101000000"}
        )
        self.assertEqual(record.size, 12)
        self.assertEqual(record.extension, "")
        self.assertEqual(record.mime_type, "")
        self.assertEqual(record.modified_at, _ts(2020, 1, 1))
        self.assertEqual(record.created_at, 0)
        self.assertIsNone(record.direct_url)
        self.assertEqual(record.related_folder_identifiers, [])


if __name__ == "__main__":
    unittest.main()
