"""
Triage session: the state behind one "paste an email, get commands" run.

A session owns the pasted email, the extracted issues and a four-state
status. Only one extraction request may be outstanding at a time.

Example:
    >>> session = TriageSession(extractor)
    >>> session.email = EmailContent(subject="Feedback", body="The logo is tiny...")
    >>> await session.generate()
    >>> session.status
    <ProcessingStatus.COMPLETE: 'COMPLETE'>
    >>> print(session.all_commands())
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from gitmail.engine.processor import process_parsed_issues
from gitmail.exceptions import GitMailError, SessionBusyError
from gitmail.models.domain import EmailContent, ParsedIssue, ProcessingStatus
from gitmail.providers.base import IssueExtractor
from gitmail.rendering.commands import DEFAULT_EXECUTABLE, generate_all_commands

log = structlog.get_logger(__name__)

NO_ACTIONABLE_REQUESTS = "No actionable requests found in the email content."
EXTRACTION_FAILED = "Failed to parse email. Please check your API key and try again."

ClipboardWriter = Callable[[str], Awaitable[None]]


class TriageSession:
    """State machine driving extraction, editing and copying of issues.

    Attributes:
        extractor: Backend used to extract issues
        email: The email to triage
        issues: Display-ready issues from the last successful run
        status: Current processing status
        error_message: User-facing message for the last failure or empty result
        executable: Issue tracker CLI used in generated commands
    """

    def __init__(
        self,
        extractor: IssueExtractor,
        email: EmailContent | None = None,
        executable: str = DEFAULT_EXECUTABLE,
    ):
        self.extractor = extractor
        self.email = email or EmailContent()
        self.executable = executable
        self.issues: list[ParsedIssue] = []
        self.status = ProcessingStatus.IDLE
        self.error_message: str | None = None

    async def generate(self) -> list[ParsedIssue]:
        """Extract issues from the current email.

        Does nothing when both subject and body are blank. Extraction
        failures are recorded on the session rather than raised.

        Returns:
            The display-ready issues (empty on failure or empty result)

        Raises:
            SessionBusyError: If a previous request has not finished
        """
        if self.email.is_empty:
            log.debug("generate_skipped_empty_email")
            return self.issues

        if self.status == ProcessingStatus.ANALYZING:
            raise SessionBusyError("An extraction request is already in progress")

        self.status = ProcessingStatus.ANALYZING
        self.error_message = None
        self.issues = []

        try:
            raw_issues = await self.extractor.extract_issues(self.email.subject, self.email.body)
        except GitMailError as e:
            log.error("extraction_failed", error=e.message, error_type=type(e).__name__)
            self.error_message = EXTRACTION_FAILED
            self.status = ProcessingStatus.ERROR
            return self.issues
        except Exception as e:
            log.error("extraction_failed_unexpected", error=str(e), error_type=type(e).__name__, exc_info=True)
            self.error_message = EXTRACTION_FAILED
            self.status = ProcessingStatus.ERROR
            return self.issues
        except asyncio.CancelledError:
            self.status = ProcessingStatus.IDLE
            raise

        if not raw_issues:
            log.info("no_actionable_requests")
            self.error_message = NO_ACTIONABLE_REQUESTS
            self.status = ProcessingStatus.IDLE
            return self.issues

        self.issues = process_parsed_issues(raw_issues)
        self.status = ProcessingStatus.COMPLETE
        log.info("session_complete", issue_count=len(self.issues))
        return self.issues

    def get_issue(self, issue_id: str) -> ParsedIssue | None:
        return next((issue for issue in self.issues if issue.id == issue_id), None)

    def update_issue(self, updated: ParsedIssue) -> None:
        """Replace the issue with the same id; unknown ids are ignored."""
        self.issues = [updated if issue.id == updated.id else issue for issue in self.issues]

    def delete_issue(self, issue_id: str) -> None:
        """Remove an issue; the session returns to IDLE once none remain."""
        self.issues = [issue for issue in self.issues if issue.id != issue_id]
        if not self.issues:
            self.status = ProcessingStatus.IDLE

    def clear(self) -> None:
        """Drop all issues."""
        self.issues = []
        self.status = ProcessingStatus.IDLE

    def dismiss_error(self) -> None:
        """Acknowledge a failure so the user can try again."""
        self.status = ProcessingStatus.IDLE

    def all_commands(self) -> str:
        """All issue commands, one per line."""
        return generate_all_commands(self.issues, self.executable)

    async def copy_all(self, clipboard: ClipboardWriter) -> str:
        """Copy every command to the clipboard.

        Args:
            clipboard: Async callable writing text to the clipboard

        Returns:
            The copied text
        """
        commands = self.all_commands()
        await clipboard(commands)
        log.info("commands_copied", issue_count=len(self.issues))
        return commands
