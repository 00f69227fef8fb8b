"""Scrape, store and export modules for the PGCB generation report project."""

from . import client, errors, export, load, parse, run, transform, validate

__all__ = ["client", "errors", "export", "load", "parse", "run", "transform", "validate"]
