"""Distribution version of keywordsai-node."""

from importlib import metadata

DISTRIBUTION_NAME = "keywordsai-node"


def get_version() -> str:
    """Version of the installed distribution, or the package's own when running from a checkout."""
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        from keywordsai_node import __version__

        return __version__
