"""ferry — install prebuilt binaries from a small TOML package registry."""

__version__ = "0.1.0"
