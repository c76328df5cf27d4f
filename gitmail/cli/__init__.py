"""CLI commands for gitmail.

The entry point ``gitmail`` lives in ``gitmail.main``; this package holds the
commands and helpers that are large enough to deserve their own module.

Key Commands:
    health-check (gitmail.cli.health):
        Validates the configuration, resolves the API key and tests that
        the model backend is reachable.

Helpers:
    review_issues (gitmail.cli.review):
        Interactive keep/edit/remove pass over extracted issues.
"""
