"""Azure App Service zone-redundancy audit."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("az-zr-audit")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
