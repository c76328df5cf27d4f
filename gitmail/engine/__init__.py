"""Triage engine: prompts, post-processing and the session state machine."""
