"""Static payloads shipped inside the package."""

from functools import cached_property
from importlib import resources

FAVICON_PATH = "/favicon.ico"
FAVICON_MEDIA_TYPE = "image/x-icon"


class AssetSource:
    """Loads bundled assets from ``toolbench/static`` on first use."""

    def __init__(self, package: str = "toolbench.static"):
        self.package = package

    def read_bytes(self, name: str) -> bytes:
        return resources.files(self.package).joinpath(name).read_bytes()

    @cached_property
    def favicon(self) -> bytes:
        return self.read_bytes("favicon.ico")

    @cached_property
    def stylesheet(self) -> str:
        return self.read_bytes("style.css").decode("utf-8")
