#!/usr/bin/env python3
"""schemadoc - Entry point."""
from schemadoc.cli.main import cli

if __name__ == "__main__":
    cli()
