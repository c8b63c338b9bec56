import errno
import logging
import os
import shutil
from enum import Enum
from typing import List, Tuple

from .config import SandboxConfig
from .outcomes import (
	ConflictKindError,
	FileOpError,
	InvalidPathError,
	IOFailureError,
	NotFoundError,
	Outcome,
)
from .path_utils import is_inside, resolve_path, same_path, within_root

logger = logging.getLogger(__name__)


class TransferMode(str, Enum):
	MOVE = "move"
	COPY = "copy"


def _check_write_target(path: str, root: str, case_insensitive: bool) -> None:
	if os.path.islink(path):
		raise InvalidPathError("Refusing to write through a symbolic link", path)
	if root and not within_root(path, root, case_insensitive):
		raise InvalidPathError("Target is outside the root directory", path)


def copy_tree(src: str, dst: str, root: str = "", case_insensitive: bool = False) -> None:
	"""Copy a directory tree into dst, overwriting files that already exist.

	Walks with an explicit stack. Every directory and file written must stay
	under root and must not be a symbolic link. There is no rollback: a
	failure partway leaves dst partially populated.
	"""
	stack: List[Tuple[str, str]] = [(src, dst)]
	while stack:
		cur_src, cur_dst = stack.pop()
		_check_write_target(cur_dst, root, case_insensitive)
		if os.path.isfile(cur_dst):
			raise ConflictKindError("Cannot copy a directory onto a file path", cur_src, cur_dst)
		os.makedirs(cur_dst, exist_ok=True)
		subdirs = []
		with os.scandir(cur_src) as it:
			children = sorted(it, key=lambda e: e.name)
		for child in children:
			target = os.path.join(cur_dst, child.name)
			if child.is_dir(follow_symlinks=False):
				subdirs.append((child.path, target))
				continue
			_check_write_target(target, root, case_insensitive)
			if os.path.isdir(target):
				raise ConflictKindError("Cannot overwrite a directory with a file", child.path, target)
			shutil.copy2(child.path, target, follow_symlinks=False)
		stack.extend(reversed(subdirs))


def remove_tree(path: str) -> None:
	"""Remove a directory tree bottom-up without recursion."""
	dirs = []
	stack = [path]
	while stack:
		current = stack.pop()
		dirs.append(current)
		with os.scandir(current) as it:
			for child in it:
				if child.is_dir(follow_symlinks=False):
					stack.append(child.path)
				else:
					os.unlink(child.path)
	# Parents were collected before their children
	for d in reversed(dirs):
		os.rmdir(d)


class Transferer:
	"""Move, copy and delete inside the sandbox root."""

	def __init__(self, config: SandboxConfig):
		self.config = config

	def move(self, source: str, dest: str) -> Outcome:
		return self.move_or_copy(source, dest, TransferMode.MOVE)

	def copy(self, source: str, dest: str) -> Outcome:
		return self.move_or_copy(source, dest, TransferMode.COPY)

	def move_or_copy(self, source: str, dest: str, mode: TransferMode) -> Outcome:
		operation = TransferMode(mode).value
		try:
			return Outcome.success(self._move_or_copy(source, dest, TransferMode(mode)))
		except FileOpError as e:
			return Outcome.from_error(operation, e)
		except OSError as e:
			logger.error("%s %s -> %s failed: %s", operation, source, dest, e)
			return Outcome.from_error(operation, IOFailureError(str(e), source, dest))

	def delete(self, path: str) -> Outcome:
		try:
			return Outcome.success(self._delete(path))
		except FileOpError as e:
			return Outcome.from_error("delete", e)
		except OSError as e:
			logger.error("delete %s failed: %s", path, e)
			return Outcome.from_error("delete", IOFailureError(str(e), path))

	def _guard(self, path: str, label: str) -> str:
		if not path or not path.strip():
			raise InvalidPathError(f"{label} is required")
		allowed, abs_path = resolve_path(path, self.config)
		if not allowed:
			raise InvalidPathError(f"{label} is outside the root directory", path)
		return abs_path

	def _move_or_copy(self, source: str, dest: str, mode: TransferMode) -> str:
		abs_src = self._guard(source, "Source path")
		abs_dst = self._guard(dest, "Destination path")
		ci = self.config.case_insensitive

		if os.path.isfile(abs_src):
			target = abs_dst
			if os.path.isdir(abs_dst):
				target = os.path.join(abs_dst, os.path.basename(abs_src))
			if not within_root(target, self.config.root, ci):
				raise InvalidPathError("Target is outside the root directory", target)
			if os.path.isdir(target):
				raise ConflictKindError("Cannot overwrite a directory with a file", abs_src, target)
			if same_path(abs_src, target, ci):
				return target
			if mode is TransferMode.MOVE:
				self._rename(abs_src, target, is_dir=False)
			else:
				_check_write_target(target, self.config.root, ci)
				shutil.copy2(abs_src, target)
			logger.info("%s file %s -> %s", mode.value, abs_src, target)
			return target

		if os.path.isdir(abs_src):
			if os.path.isfile(abs_dst):
				raise ConflictKindError(f"Cannot {mode.value} a directory onto a file path", abs_src, abs_dst)
			target = abs_dst
			if os.path.isdir(abs_dst):
				target = os.path.join(abs_dst, os.path.basename(abs_src.rstrip(os.sep)))
			if not within_root(target, self.config.root, ci):
				raise InvalidPathError("Target is outside the root directory", target)
			if same_path(abs_src, self.config.root, ci):
				raise InvalidPathError(f"Cannot {mode.value} the root directory", abs_src)
			if is_inside(target, abs_src, ci):
				raise ConflictKindError(f"Cannot {mode.value} a directory into itself", abs_src, target)
			if mode is TransferMode.MOVE:
				if os.path.lexists(target):
					raise ConflictKindError("Destination already exists", abs_src, target)
				self._rename(abs_src, target, is_dir=True)
			else:
				if os.path.isfile(target):
					raise ConflictKindError("Cannot copy a directory onto a file path", abs_src, target)
				copy_tree(abs_src, target, self.config.root, ci)
			logger.info("%s directory %s -> %s", mode.value, abs_src, target)
			return target

		raise NotFoundError("Source not found", abs_src)

	def _rename(self, src: str, dst: str, is_dir: bool) -> None:
		try:
			os.replace(src, dst)
		except OSError as e:
			if e.errno != errno.EXDEV:
				raise
			# Different device: copy then remove
			logger.info("Cross-device move %s -> %s, copying", src, dst)
			if is_dir:
				copy_tree(src, dst, self.config.root, self.config.case_insensitive)
				remove_tree(src)
			else:
				shutil.copy2(src, dst)
				os.unlink(src)

	def _delete(self, path: str) -> str:
		abs_path = self._guard(path, "Path")
		if same_path(abs_path, self.config.root, self.config.case_insensitive):
			raise InvalidPathError("Refusing to delete the root directory", abs_path)
		if os.path.isfile(abs_path) or os.path.islink(abs_path):
			os.unlink(abs_path)
		elif os.path.isdir(abs_path):
			remove_tree(abs_path)
		else:
			raise NotFoundError("Path not found", abs_path)
		logger.info("Deleted %s", abs_path)
		return abs_path
