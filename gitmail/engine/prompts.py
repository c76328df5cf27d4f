"""Prompt and response schema for issue extraction."""

from collections.abc import Iterable
from typing import Any

AVAILABLE_LABELS = ("bug", "documentation", "enhancement", "question")


def build_system_instruction(labels: Iterable[str] = AVAILABLE_LABELS) -> str:
    """Build the triage instruction offering `labels` to the model."""
    label_list = ", ".join(f'"{label}"' for label in labels)
    return f"""
You are an expert DevOps assistant designed to triage emails and convert them into GitHub Issues.

Your goal is to analyze the email Subject and Body to identify distinct actionable tasks.

Rules:
1. Identify both **explicit requests** (e.g., "Please fix the login bug") and **implicit requests** (e.g., "It would be great if the logo was larger").
2. Treat unrelated requests as separate issues.
3. **Extract** the specific text segment from the email that triggered this issue into the 'originalContext' field.
4. **Draft a Body:** Create a professional Markdown description for the 'body' field. **IMPORTANT:** Do NOT include the 'originalContext' quote inside the 'body'. The body should be a standalone summary.
5. **Assign Labels:** Add relevant labels in the 'labels' array (available labels: {label_list}).
6. **Identify Sender:** Extract the name of the person requesting this feature/bug fix from headers (From:) or signature. If unknown, use "Unknown".
7. If the email contains NO actionable requests, return an empty array.
"""


SYSTEM_INSTRUCTION = build_system_instruction()

# Upper-case type names are the generative language API's schema vocabulary.
ISSUE_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {
                "type": "STRING",
                "description": "A concise, imperative title for the GitHub issue.",
            },
            "body": {
                "type": "STRING",
                "description": (
                    "The detailed, standalone description for the issue in Markdown. "
                    "Do NOT include the original quote here."
                ),
            },
            "labels": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": "List of labels. Include 'bug' or 'feature' here if applicable.",
            },
            "originalContext": {
                "type": "STRING",
                "description": "The exact quote from the email that justifies this issue.",
            },
            "sender": {
                "type": "STRING",
                "description": "Name of the sender/requestor. e.g. 'Alice'.",
            },
        },
        "required": ["title", "body", "labels"],
    },
}


def build_user_prompt(subject: str, body: str) -> str:
    """Build the user turn sent alongside the system instruction."""
    return f"Please parse the following email into GitHub Issues:\n\nSubject: {subject}\n\nBody:\n{body}"


def to_json_schema(schema: dict[str, Any] | None = None) -> dict[str, Any]:
    """Convert a response schema to standard (lower-case) JSON Schema.

    Args:
        schema: Schema in the upper-case vocabulary. Defaults to
            ``ISSUE_RESPONSE_SCHEMA``.

    Returns:
        A new schema dict; the input is left untouched.
    """
    if schema is None:
        schema = ISSUE_RESPONSE_SCHEMA

    converted: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "type" and isinstance(value, str):
            converted[key] = value.lower()
        elif key == "properties" and isinstance(value, dict):
            converted[key] = {name: to_json_schema(prop) for name, prop in value.items()}
        elif key == "items" and isinstance(value, dict):
            converted[key] = to_json_schema(value)
        elif isinstance(value, list):
            converted[key] = list(value)
        else:
            converted[key] = value
    return converted
