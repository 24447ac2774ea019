"""
Package model — a resolved Oz ``.deb`` download.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, computed_field


class PackageReference(BaseModel):
    """Where to fetch the package for one channel/version/arch.

    ``arch`` is the kernel name (``x86_64``), ``deb_arch`` the Debian
    name (``amd64``).  ``version`` is the concrete version once ``latest``
    has been resolved.
    """

    model_config = ConfigDict(frozen=True)

    channel: str
    url: str
    arch: str
    deb_arch: str
    version: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cache_key(self) -> str:
        return f"{self.channel}-{self.version}"
