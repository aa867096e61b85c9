"""Worker-side toolkit for a distributed job scheduler: task registry, job models, discovery and management API."""

__version__ = "0.0.1"