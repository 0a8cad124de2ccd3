from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str


class ValidationError(Exception):
    """
    Raised for user-input problems (empty token, nothing selected, ...).
    Callers abort the operation and show the messages to the user.
    """

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__("\n".join(f"{i.code}: {i.message}" for i in issues))

    @classmethod
    def single(cls, code: str, message: str) -> "ValidationError":
        return cls([ValidationIssue(code, message)])

    @property
    def codes(self) -> list[str]:
        return [i.code for i in self.issues]

    @property
    def user_message(self) -> str:
        return " ".join(i.message for i in self.issues)
