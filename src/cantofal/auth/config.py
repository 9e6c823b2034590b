"""Driver configuration for cantofal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from cantofal.errors import InvalidConfigurationError
from cantofal.util.identifiers import ROOT_FOLDER
from cantofal.util.schemes import SCHEME_FOLDER

DEFAULT_MASTER_IMAGE_SIZE: int = 1920
DEFAULT_TIMEOUT_SEC: float = 30.0

# snake_case key -> key used by the host's storage configuration
_ALIASES: dict[str, str] = {
    "storage_id": "storageUid",
    "canto_name": "cantoName",
    "canto_domain": "cantoDomain",
    "app_id": "appId",
    "app_secret": "appSecret",
    "root_folder_scheme": "rootFolderScheme",
    "root_folder_id": "rootFolder",
    "master_image_size": "masterImageSize",
    "mdc_domain_name": "mdcDomainName",
    "mdc_aws_account_id": "mdcAwsAccountId",
}

_REQUIRED_STRINGS: tuple[str, ...] = ("canto_name", "canto_domain", "app_id", "app_secret")


@dataclass(slots=True, frozen=True)
class CantoConfig:
    """
    Configuration of one Canto storage.

    An invalid configuration is still constructible: the driver must keep
    working (as an empty storage) when the host hands it incomplete settings.
    Use `is_valid` / `problems()` to inspect, `require_valid()` to enforce.
    """

    storage_id: Optional[int] = None
    canto_name: str = ""
    canto_domain: str = ""
    app_id: str = ""
    app_secret: str = ""
    root_folder_scheme: str = SCHEME_FOLDER
    root_folder_id: str = ROOT_FOLDER
    master_image_size: int = DEFAULT_MASTER_IMAGE_SIZE
    mdc_domain_name: str = ""
    mdc_aws_account_id: str = ""
    timeout: float = DEFAULT_TIMEOUT_SEC

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CantoConfig:
        """Build from a mapping using snake_case or the host's camelCase keys."""
        values: dict[str, Any] = {}
        for key, alias in _ALIASES.items():
            if key in data:
                values[key] = data[key]
            elif alias in data:
                values[key] = data[alias]
        if "timeout" in data:
            values["timeout"] = float(data["timeout"])

        if "storage_id" in values:
            values["storage_id"] = _to_int_or_none(values["storage_id"])
        if "master_image_size" in values:
            size = _to_int_or_none(values["master_image_size"])
            values["master_image_size"] = size if size else DEFAULT_MASTER_IMAGE_SIZE
        for key in (*_REQUIRED_STRINGS, "root_folder_scheme", "root_folder_id",
                    "mdc_domain_name", "mdc_aws_account_id"):
            if key in values:
                values[key] = "" if values[key] is None else str(values[key])
        return cls(**values)

    def problems(self) -> list[str]:
        """Return human-readable validation failures (empty when valid)."""
        problems: list[str] = []
        if not isinstance(self.storage_id, int) or self.storage_id <= 0:
            problems.append("storage_id must be a positive integer")
        for key in _REQUIRED_STRINGS:
            if not getattr(self, key).strip():
                problems.append(f"{key} must be a non-empty string")
        return problems

    @property
    def is_valid(self) -> bool:
        return not self.problems()

    def require_valid(self) -> None:
        problems = self.problems()
        if problems:
            raise InvalidConfigurationError(
                "Invalid Canto configuration",
                details={"problems": problems},
            )

    @property
    def api_base_url(self) -> str:
        """Base URL of the REST API, e.g. https://acme.canto.com/api/v1."""
        return f"https://{self.canto_name}.{self.canto_domain}/api/v1"

    @property
    def token_url(self) -> str:
        """OAuth token endpoint for the client-credentials grant."""
        return f"https://oauth.{self.canto_domain}/oauth/api/oauth2/token"


def _to_int_or_none(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
