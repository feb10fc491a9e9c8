"""Pydantic models describing publish outcomes."""

from typing import Literal

from pydantic import BaseModel, Field


type OutputType = Literal["css", "json", "html", "history"]


class OutputEntry(BaseModel):
    """A file the publisher wrote."""

    type: OutputType
    path: str = Field(..., description="Location reported by the writer")


class PublishResult(BaseModel):
    """Report of one publish call; not persisted."""

    success: bool = True
    outputs: list[OutputEntry] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    def record_output(self, output_type: OutputType, path: str) -> None:
        """Register a successful write."""
        self.outputs.append(OutputEntry(type=output_type, path=path))

    def record_error(self, message: str) -> None:
        """Register a failed write and mark the result unsuccessful."""
        self.errors.append(message)
        self.success = False


__all__ = ["OutputEntry", "OutputType", "PublishResult"]
