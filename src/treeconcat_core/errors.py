from pathlib import Path


class TreeConcatError(Exception):
    """Base error for failures that abort a run before traversal."""


class InvalidRootError(TreeConcatError):
    def __init__(self, path: Path, reason: str = "Invalid directory") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class OutputError(TreeConcatError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to create output file {path} ({detail})")
