import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .config import SandboxConfig
from .file_io import FileIO
from .file_types import FOLDER_KIND, kind_for
from .outcomes import FileOpError, InvalidPathError, IOFailureError, Outcome
from .path_utils import resolve_path

logger = logging.getLogger(__name__)


@dataclass
class Entry:
	name: str
	folder: str
	size: Optional[int]
	kind: str
	last_modified: datetime
	full_path: str

	@property
	def is_dir(self) -> bool:
		return self.kind == FOLDER_KIND


@dataclass
class Listing:
	directories: List[Entry] = field(default_factory=list)
	files: List[Entry] = field(default_factory=list)

	@property
	def directory_count(self) -> int:
		return len(self.directories)

	@property
	def file_count(self) -> int:
		return len(self.files)

	def merged(self, directories_first: bool = True) -> List[Entry]:
		if directories_first:
			return self.directories + self.files
		return self.files + self.directories


def _matches(name: str, term: str) -> bool:
	return not term or term in name.casefold()


class Lister:
	"""Enumerates a directory (optionally its whole subtree) into Entry records."""

	def __init__(self, config: SandboxConfig, file_io: Optional[FileIO] = None):
		self.config = config
		self.file_io = file_io or FileIO(config.chunk_size)

	def list(self, path: str = "", search_term: Optional[str] = None, recursive: bool = False) -> Outcome:
		try:
			return Outcome.success(self._list(path, search_term, recursive))
		except FileOpError as e:
			return Outcome.from_error("list", e)
		except OSError as e:
			logger.error("Listing %s failed: %s", path or self.config.root, e)
			return Outcome.from_error("list", IOFailureError(str(e), path or self.config.root))

	def _list(self, path: str, search_term: Optional[str], recursive: bool) -> Listing:
		if not path or not path.strip():
			path = self.config.root
		if not path:
			raise InvalidPathError("No path given and no root directory configured")
		allowed, abs_dir = resolve_path(path, self.config)
		if not allowed:
			raise InvalidPathError("Path is outside the root directory", path)
		if not self.file_io.is_dir(abs_dir):
			raise InvalidPathError("Directory not found", abs_dir)

		term = (search_term or "").strip().casefold()
		listing = Listing()
		# Reversed push keeps name order when popping
		stack = [abs_dir]
		first = True
		while stack:
			current = stack.pop()
			try:
				children = self.file_io.scan_dir(current)
			except OSError:
				if first:
					raise
				logger.debug("Skipping unreadable directory %s", current, exc_info=True)
				continue
			first = False

			subdirs = []
			for child in children:
				try:
					is_dir = child.is_dir()
					stat = child.stat()
				except OSError:
					logger.debug("Skipping %s: stat failed", child.path)
					continue
				if is_dir:
					if recursive and not child.is_symlink():
						subdirs.append(child.path)
					if _matches(child.name, term):
						listing.directories.append(self._entry(child.name, current, None, stat.st_mtime))
				elif _matches(child.name, term):
					listing.files.append(self._entry(child.name, current, int(stat.st_size), stat.st_mtime))
			stack.extend(reversed(subdirs))
		return listing

	def _entry(self, name: str, folder: str, size: Optional[int], mtime: float) -> Entry:
		return Entry(
			name=name,
			folder=folder,
			size=size,
			kind=FOLDER_KIND if size is None else kind_for(name),
			last_modified=datetime.fromtimestamp(mtime, tz=timezone.utc),
			full_path=os.path.join(folder, name),
		)
