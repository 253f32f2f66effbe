"""Custom exception hierarchy for mkprompt."""


class PromptError(Exception):
    """Base error for all custom exceptions."""


class FilesystemError(PromptError):
    """Raised when a path cannot be resolved or its metadata cannot be read."""


class PathTextError(PromptError):
    """Raised when a path cannot be represented as text."""


class UnexpectedPathPartError(PromptError):
    """Raised when a path contains a component that is not a plain name."""

    def __init__(self, part: str, path: object | None = None):
        message = f"Unexpected path part: {part!r}"
        if path is not None:
            message = f"{message} in {path}"
        super().__init__(message)
        self.part = part
        self.path = path


class GitCommandError(PromptError):
    """Raised when a git invocation fails."""

    def __init__(self, command: list[str], returncode: int, stderr: str | None = None):
        message = "Git command failed"
        if command:
            message = f"Git command failed: {' '.join(command)}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr or ""
