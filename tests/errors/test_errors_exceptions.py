import unittest

from cantofal.errors.exceptions import (
    AccessDeniedError,
    ApiError,
    AuthorizationFailedError,
    CantoFalError,
    FolderDoesNotExistError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidIdentifierError,
    NotFoundError,
    RateLimitError,
    RemoteUnavailableError,
    map_http_error,
)


class TestCantoErrors(unittest.TestCase):
    def test_error_carries_details_and_cause(self) -> None:
        cause = ValueError("bad token")
        err = InvalidIdentifierError("malformed", details={"identifier": "x"}, cause=cause)
        self.assertIsInstance(err, CantoFalError)
        self.assertEqual(str(err), "malformed")
        self.assertEqual(err.details, {"identifier": "x"})
        self.assertIs(err.cause, cause)

    def test_missing_folder_is_a_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            raise FolderDoesNotExistError("album<>A1 is gone")

    def test_status_codes(self) -> None:
        cases = {
            400: InvalidArgumentError,
            401: AuthorizationFailedError,
            403: AccessDeniedError,
            404: NotFoundError,
            429: RateLimitError,
            500: RemoteUnavailableError,
            502: RemoteUnavailableError,
            599: RemoteUnavailableError,
            302: ApiError,
            418: ApiError,
        }
        for status_code, expected in cases.items():
            with self.subTest(status_code=status_code):
                self.assertIs(type(map_http_error(HttpErrorInfo(status_code=status_code))), expected)

    def test_mapped_error_keeps_response_context(self) -> None:
        cause = RuntimeError("HTTP 404")
        err = map_http_error(
            HttpErrorInfo(
                status_code=404,
                reason="Not Found",
                message="Asset not found",
                details={"url": "https://acme.canto.com/api/v1/image/X"},
            ),
            cause=cause,
        )
        self.assertEqual(str(err), "Asset not found")
        self.assertEqual(
            err.details,
            {"status_code": 404, "reason": "Not Found", "url": "https://acme.canto.com/api/v1/image/X"},
        )
        self.assertIs(err.cause, cause)

    def test_default_message(self) -> None:
        self.assertEqual(str(map_http_error(HttpErrorInfo(status_code=418))), "HTTP error 418")


if __name__ == "__main__":
    unittest.main()
