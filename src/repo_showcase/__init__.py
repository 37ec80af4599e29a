"""Repo Showcase.

Backend and view state for a personal-site repository widget: fetches a
user's GitHub repositories, proxies starring for signed-in visitors and
derives the filtered, sorted and hover-previewed list the page renders.
"""

__version__ = "0.1.0"
__author__ = "Repo Showcase Team"

__all__ = [
    "__version__",
    "__author__",
]
