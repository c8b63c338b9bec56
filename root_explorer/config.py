import os
from dataclasses import dataclass
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
	port: int = 8080
	host: str = "127.0.0.1"
	root_dir: str = ""
	case_insensitive: bool = os.name == "nt"
	cors_allow_origins: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
	log_file: str = "root_explorer.log"
	log_level: str = "INFO"
	chunk_size: int = 1024 * 1024

	class Config:
		env_prefix = "ROOT_EXPLORER_"
		env_file = ".env"
		env_file_encoding = "utf-8"


@dataclass(frozen=True)
class SandboxConfig:
	"""The single directory every operation is confined to.

	Built once at startup and handed to each component; never reassigned.
	An empty ``root`` means no implicit root is configured.
	"""

	root: str = ""
	case_insensitive: bool = False
	chunk_size: int = 1024 * 1024

	@classmethod
	def from_settings(cls, settings: Settings) -> "SandboxConfig":
		root = (settings.root_dir or "").strip()
		if root:
			root = os.path.realpath(os.path.expanduser(root))
		return cls(root=root, case_insensitive=settings.case_insensitive, chunk_size=settings.chunk_size)

	@property
	def has_root(self) -> bool:
		return bool(self.root)
