import logging
import os
from dataclasses import dataclass
from typing import Optional

from .config import SandboxConfig
from .file_io import FileIO
from .listing import Lister
from .outcomes import (
	ConflictKindError,
	FileOpError,
	InvalidPathError,
	IOFailureError,
	NotFoundError,
	Outcome,
)
from .path_utils import resolve_path, within_root
from .transfer import Transferer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadTicket:
	path: str
	filename: str
	size: int


@dataclass(frozen=True)
class UploadResult:
	path: str
	size: int


class Explorer:
	"""Entry point for every file operation, all confined to one root."""

	def __init__(self, config: SandboxConfig, file_io: Optional[FileIO] = None):
		self.config = config
		self.file_io = file_io or FileIO(config.chunk_size)
		self.lister = Lister(config, self.file_io)
		self.transferer = Transferer(config)

	def list(self, path: str = "", search_term: Optional[str] = None, recursive: bool = False) -> Outcome:
		return self.lister.list(path, search_term, recursive)

	def move(self, source: str, dest: str) -> Outcome:
		return self.transferer.move(source, dest)

	def copy(self, source: str, dest: str) -> Outcome:
		return self.transferer.copy(source, dest)

	def delete(self, path: str) -> Outcome:
		return self.transferer.delete(path)

	def download(self, path: str) -> Outcome:
		try:
			if not path or not path.strip():
				raise InvalidPathError("Path is required")
			allowed, abs_file = resolve_path(path, self.config)
			if not allowed:
				raise InvalidPathError("Path is outside the root directory", path)
			if not self.file_io.is_file(abs_file):
				raise NotFoundError("File not found", abs_file)
			size = int(self.file_io.stat(abs_file).st_size)
		except FileOpError as e:
			return Outcome.from_error("download", e)
		except OSError as e:
			return Outcome.from_error("download", IOFailureError(str(e), path))
		return Outcome.success(DownloadTicket(abs_file, os.path.basename(abs_file), size))

	async def upload(self, dest_dir: str, filename: str, stream) -> Outcome:
		"""Write ``stream`` to ``dest_dir/filename``; blank dest_dir means the root."""
		target = ""
		try:
			target = self._upload_target(dest_dir, filename)
			size = await self.file_io.save_stream(target, stream)
		except FileOpError as e:
			return Outcome.from_error("upload", e)
		except OSError as e:
			logger.error("upload to %s failed: %s", target or dest_dir, e)
			return Outcome.from_error("upload", IOFailureError(str(e), target or dest_dir))
		logger.info("Uploaded %s (%d bytes)", target, size)
		return Outcome.success(UploadResult(target, size))

	def _upload_target(self, dest_dir: str, filename: str) -> str:
		if not dest_dir or not dest_dir.strip():
			dest_dir = self.config.root
		if not dest_dir:
			raise InvalidPathError("No destination given and no root directory configured")
		allowed, abs_dest = resolve_path(dest_dir, self.config)
		if not allowed:
			raise InvalidPathError("Destination is outside the root directory", dest_dir)
		if not self.file_io.is_dir(abs_dest):
			raise InvalidPathError("Destination directory not found", abs_dest)
		# Browsers may send a client-side path; keep only the last component
		name = os.path.basename((filename or "").replace("\\", "/"))
		if name.strip() in ("", ".", ".."):
			raise InvalidPathError("A file name is required", filename)
		target = os.path.join(abs_dest, name)
		if not within_root(target, self.config.root, self.config.case_insensitive):
			raise InvalidPathError("Upload target is outside the root directory", target)
		if self.file_io.is_dir(target):
			raise InvalidPathError("A directory with that name already exists", target)
		return target

	def mkdir(self, path: str) -> Outcome:
		try:
			if not path or not path.strip():
				raise InvalidPathError("Path is required")
			allowed, abs_path = resolve_path(path, self.config)
			if not allowed:
				raise InvalidPathError("Path is outside the root directory", path)
			if self.file_io.is_file(abs_path):
				raise ConflictKindError("A file already exists at this path", abs_path)
			os.makedirs(abs_path, exist_ok=True)
		except FileOpError as e:
			return Outcome.from_error("mkdir", e)
		except OSError as e:
			logger.error("mkdir %s failed: %s", path, e)
			return Outcome.from_error("mkdir", IOFailureError(str(e), path))
		return Outcome.success(abs_path)
