"""
Package locator — find (or fetch) the Oz ``.deb`` for this runner.

Concrete versions map straight onto the release bucket's URL scheme.
``latest`` is resolved by asking the download endpoint where it would
redirect, without following it: the redirect target is the package
URL and its second path segment is the version tag.

Network and disk errors propagate as-is; nothing is retried.
"""

from __future__ import annotations

import logging
import platform
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Any

from oz_action.adapters.cache.tool_cache import ToolCache, download_tool
from oz_action.core.errors import (
    MissingRedirectLocation,
    RedirectExpected,
    UnsupportedArchitecture,
    UnsupportedPlatform,
)
from oz_action.core.models.package import PackageReference

logger = logging.getLogger(__name__)

LATEST = "latest"

TOOL_NAME = "oz"
PACKAGE_FILE = "oz.deb"

DOWNLOAD_ENDPOINT = "https://app.warp.dev/download/cli"
RELEASES_HOST = "https://releases.warp.dev"

_USER_AGENT = "oz-action"

# platform.machine() → (kernel arch, Debian arch)
_ARCH_MAP: dict[str, tuple[str, str]] = {
    "x86_64": ("x86_64", "amd64"),
    "amd64": ("x86_64", "amd64"),
    "aarch64": ("aarch64", "arm64"),
    "arm64": ("aarch64", "arm64"),
}


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Surface 3xx responses as ``HTTPError`` instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):
        return None


def _redirect_opener() -> urllib.request.OpenerDirector:
    return urllib.request.build_opener(_NoRedirect)


def detect_architecture(
    system: str | None = None,
    machine: str | None = None,
) -> tuple[str, str]:
    """Check the host and return its ``(arch, deb_arch)`` names.

    Raises:
        UnsupportedPlatform: If the kernel is not Linux.
        UnsupportedArchitecture: If no package is built for the CPU.
    """
    system = system if system is not None else platform.system()
    if system.lower() != "linux":
        raise UnsupportedPlatform(system.lower())

    machine = machine if machine is not None else platform.machine()
    try:
        return _ARCH_MAP[machine.lower()]
    except KeyError:
        raise UnsupportedArchitecture(machine) from None


def normalize_version(version: str) -> tuple[str, str]:
    """Split a version into ``(package_version, tag_version)``.

    ``1.2.3`` and ``v1.2.3`` both give ``("1.2.3", "v1.2.3")``.
    """
    if version.startswith("v"):
        return version[1:], version
    return version, f"v{version}"


def package_url(channel: str, version: str, deb_arch: str) -> str:
    """URL of a concrete release in the release bucket."""
    package_version, tag_version = normalize_version(version)
    return (
        f"{RELEASES_HOST}/{channel}/{tag_version}/"
        f"oz_{channel}_{package_version}_{deb_arch}.deb"
    )


def version_from_url(url: str, default: str) -> str:
    """Pick the version tag out of a release URL's path.

    ``https://host/<channel>/<version>/<file>`` → ``<version>``.  Falls back
    to ``default`` when the path has fewer than two segments.
    """
    segments = [s for s in urllib.parse.urlsplit(url).path.split("/") if s]
    if len(segments) >= 2:
        return segments[1]
    return default


def resolve_latest(
    channel: str,
    arch: str,
    *,
    opener: Any = None,
    timeout: int = 30,
) -> tuple[str, str]:
    """Ask the download endpoint for the newest package on ``channel``.

    Returns:
        ``(download_url, version)``.

    Raises:
        RedirectExpected: If the endpoint does not answer 301/302.
        MissingRedirectLocation: If the redirect has no ``location``.
    """
    query = urllib.parse.urlencode(
        {"os": "linux", "package": "deb", "arch": arch, "channel": channel}
    )
    req = urllib.request.Request(
        f"{DOWNLOAD_ENDPOINT}?{query}",
        headers={"User-Agent": _USER_AGENT},
    )
    opener = opener or _redirect_opener()

    try:
        with opener.open(req, timeout=timeout) as resp:
            status, headers = resp.status, resp.headers
    except urllib.error.HTTPError as e:
        # 3xx (and 4xx/5xx) land here since redirects are not followed
        status, headers = e.code, e.headers
        e.close()

    if status not in (301, 302):
        raise RedirectExpected(status)

    location = headers.get("location") if headers is not None else None
    if not location:
        raise MissingRedirectLocation()

    version = version_from_url(location, LATEST)
    logger.info("Latest version on %s is %s", channel, version)
    return location, version


def locate_package(
    channel: str,
    version: str,
    *,
    opener: Any = None,
    system: str | None = None,
    machine: str | None = None,
) -> PackageReference:
    """Resolve the download URL and concrete version for this runner.

    The platform check runs first, so an unsupported host never
    touches the network.
    """
    arch, deb_arch = detect_architecture(system, machine)

    if version == LATEST:
        url, version = resolve_latest(channel, arch, opener=opener)
    else:
        url = package_url(channel, version, deb_arch)
        _, version = normalize_version(version)

    return PackageReference(
        channel=channel,
        url=url,
        arch=arch,
        deb_arch=deb_arch,
        version=version,
    )


def download_oz_deb(
    channel: str,
    version: str,
    *,
    cache: ToolCache | None = None,
    opener: Any = None,
    download_opener: Any = None,
    system: str | None = None,
    machine: str | None = None,
) -> Path:
    """Return a local path to the Oz package, downloading it on a cache miss."""
    ref = locate_package(channel, version, opener=opener, system=system, machine=machine)
    cache = cache or ToolCache()

    cached = cache.find(TOOL_NAME, ref.cache_key, ref.deb_arch)
    if cached is None:
        logger.debug("Downloading from %s...", ref.url)
        downloaded = download_tool(ref.url, opener=download_opener)
        try:
            cached = cache.cache_file(downloaded, PACKAGE_FILE, TOOL_NAME, ref.cache_key, ref.deb_arch)
        finally:
            downloaded.unlink(missing_ok=True)
    else:
        logger.debug("Using cached .deb package")

    return cached / PACKAGE_FILE
