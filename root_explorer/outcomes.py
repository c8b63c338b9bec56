from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class ErrorKind(str, Enum):
	INVALID_PATH = "InvalidPath"
	NOT_FOUND = "NotFound"
	CONFLICT_KIND = "ConflictKind"
	IO_FAILURE = "IOFailure"


class FileOpError(Exception):
	"""Raised inside the core; converted to an Outcome before leaving it."""

	kind = ErrorKind.IO_FAILURE

	def __init__(self, message: str, *paths: str):
		super().__init__(message)
		self.message = message
		self.paths = tuple(p for p in paths if p)


class InvalidPathError(FileOpError):
	kind = ErrorKind.INVALID_PATH


class NotFoundError(FileOpError):
	kind = ErrorKind.NOT_FOUND


class ConflictKindError(FileOpError):
	kind = ErrorKind.CONFLICT_KIND


class IOFailureError(FileOpError):
	kind = ErrorKind.IO_FAILURE


@dataclass(frozen=True)
class Failure:
	kind: ErrorKind
	operation: str
	message: str
	paths: Tuple[str, ...] = ()

	def to_dict(self) -> dict:
		return {
			"kind": self.kind.value,
			"operation": self.operation,
			"message": self.message,
			"paths": list(self.paths),
		}


@dataclass
class Outcome:
	ok: bool
	value: Any = None
	error: Optional[Failure] = field(default=None)

	@classmethod
	def success(cls, value: Any = None) -> "Outcome":
		return cls(ok=True, value=value)

	@classmethod
	def from_error(cls, operation: str, exc: FileOpError) -> "Outcome":
		return cls(ok=False, error=Failure(exc.kind, operation, exc.message, exc.paths))

	@property
	def kind(self) -> Optional[ErrorKind]:
		return self.error.kind if self.error else None
