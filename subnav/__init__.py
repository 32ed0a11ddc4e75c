"""Command-line shell for subnav_core."""
