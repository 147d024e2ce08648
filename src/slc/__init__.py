"""Self-learning classifier package metadata."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("self-learning-classifier")
except PackageNotFoundError:
    __version__ = "0.1.0"
