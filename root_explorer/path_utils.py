import os
from typing import Tuple

from .config import SandboxConfig


def normalize_path(input_path: str) -> str:
	"""Normalize user input to an absolute path without following symlinks."""
	if not input_path or not input_path.strip():
		return ""
	path = input_path
	# Accept either separator from browser clients
	if os.sep != "/":
		path = path.replace("/", os.sep)
	return os.path.abspath(path)


def _canonical(path: str, case_insensitive: bool) -> str:
	canon = os.path.realpath(os.path.abspath(path))
	# The filesystem root collapses to "" so that root + sep still reads "/"
	canon = canon.rstrip(os.sep + (os.altsep or ""))
	return canon.casefold() if case_insensitive else canon


def within_root(candidate_path: str, root: str, case_insensitive: bool = False) -> bool:
	"""Check that candidate_path is root itself or lies underneath it.

	Both sides are resolved (``.``/``..`` and symlinks) before comparing.
	"""
	if not candidate_path or not candidate_path.strip():
		return False
	if not root or not root.strip():
		return False
	try:
		return is_inside(normalize_path(candidate_path), normalize_path(root), case_insensitive)
	except (OSError, ValueError):
		return False


def resolve_path(request_path: str, config: SandboxConfig) -> Tuple[bool, str]:
	"""Resolve a request path to an absolute path and confirm it is allowed.

	Relative paths are taken relative to the root.
	Returns (allowed, absolute_path).
	"""
	if not request_path or not request_path.strip():
		return False, ""
	path = request_path
	if not os.path.isabs(path) and config.has_root:
		path = os.path.join(config.root, path)
	abs_target = normalize_path(path)
	allowed = within_root(abs_target, config.root, config.case_insensitive)
	return allowed, abs_target


def same_path(a: str, b: str, case_insensitive: bool = False) -> bool:
	return _canonical(a, case_insensitive) == _canonical(b, case_insensitive)


def is_inside(path: str, parent: str, case_insensitive: bool = False) -> bool:
	"""True when path is parent or a descendant of it (both resolved)."""
	child = _canonical(path, case_insensitive)
	base = _canonical(parent, case_insensitive)
	return child == base or child.startswith(base + os.sep)
