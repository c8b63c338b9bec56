import os
from typing import List

import aiofiles

DEFAULT_CHUNK_SIZE = 1024 * 1024


class FileIO:
	"""Byte-level access used by listing, download checks and uploads."""

	def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
		self.chunk_size = chunk_size

	def stat(self, path: str) -> os.stat_result:
		return os.stat(path)

	def is_file(self, path: str) -> bool:
		return os.path.isfile(path)

	def is_dir(self, path: str) -> bool:
		return os.path.isdir(path)

	def scan_dir(self, path: str) -> List[os.DirEntry]:
		"""Children of a directory in name order."""
		with os.scandir(path) as it:
			return sorted(it, key=lambda e: e.name)

	async def save_stream(self, target: str, source) -> int:
		"""Copy an async ``read(n)`` source (e.g. UploadFile) into target.

		The target is created or truncated. Returns the number of bytes written.
		"""
		written = 0
		# aiofiles keeps the event loop free while the disk is busy
		async with aiofiles.open(target, "wb") as f:
			while True:
				chunk = await source.read(self.chunk_size)
				if not chunk:
					break
				await f.write(chunk)
				written += len(chunk)
		return written
