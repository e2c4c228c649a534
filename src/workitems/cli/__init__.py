"""Command-line interface for workitems."""

from __future__ import annotations

from workitems.cli.app import main as main
from workitems.cli.parser import build_parser as build_parser

__all__ = ["build_parser", "main"]
