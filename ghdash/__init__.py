"""gh-dash: pull request turn dashboard for GitHub."""

__version__ = "0.1.0"
