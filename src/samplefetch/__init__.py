"""samplefetch: list, inspect and download samples from a sample registry.

Built on httpx and rich with a strict layered architecture.
"""

from samplefetch.version import __version__

__all__: list[str] = ["__version__"]
