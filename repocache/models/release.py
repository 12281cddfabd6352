"""Release-related data models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ReleaseAsset(BaseModel):
    """A single file attached to a release."""

    name: str = Field(description="Asset file name")
    size: int = Field(default=0, ge=0, description="Asset size in bytes")
    download_url: str | None = Field(
        default=None,
        description="Browser download URL",
    )
    content_type: str | None = Field(default=None, description="MIME type")


class ReleaseInfo(BaseModel):
    """Metadata for a published release."""

    tag_name: str = Field(description="Git tag the release points at")
    name: str | None = Field(default=None, description="Release title")
    draft: bool = Field(default=False)
    prerelease: bool = Field(default=False)
    published_at: datetime | None = Field(default=None)
    assets: list[ReleaseAsset] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ReleaseInfo":
        """Build from a GitHub REST release payload.

        Args:
            data: Decoded JSON body of a release endpoint.

        Returns:
            ReleaseInfo instance.
        """
        return cls(
            tag_name=data["tag_name"],
            name=data.get("name"),
            draft=bool(data.get("draft", False)),
            prerelease=bool(data.get("prerelease", False)),
            published_at=data.get("published_at"),
            assets=[
                ReleaseAsset(
                    name=asset["name"],
                    size=asset.get("size") or 0,
                    download_url=asset.get("browser_download_url"),
                    content_type=asset.get("content_type"),
                )
                for asset in data.get("assets", [])
            ],
        )

    def find_asset(self, name: str) -> ReleaseAsset | None:
        """Return the asset called ``name``, if the release has one."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None
