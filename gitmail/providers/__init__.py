"""Model backends that extract issues from an email.

Modules:
    - base: IssueExtractor interface and shared JSON payload parsing
    - gemini: Generative language API with structured output
    - ollama: Local Ollama server with JSON Schema output
    - factory: Builds the configured extractor
"""
