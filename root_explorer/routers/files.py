import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Request, UploadFile
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field

from ..explorer import Explorer
from ..listing import Entry
from ..outcomes import ErrorKind, Outcome

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_BY_KIND = {
	ErrorKind.INVALID_PATH: 400,
	ErrorKind.NOT_FOUND: 404,
	ErrorKind.CONFLICT_KIND: 409,
	ErrorKind.IO_FAILURE: 500,
}


def get_explorer(request: Request) -> Explorer:
	return request.app.state.explorer


def _unwrap(outcome: Outcome):
	"""Return the success value or raise the matching HTTPException."""
	if outcome.ok:
		return outcome.value
	error = outcome.error
	if error.kind is ErrorKind.IO_FAILURE:
		logger.error("%s failed: %s %s", error.operation, error.message, list(error.paths))
	else:
		logger.warning("%s rejected (%s): %s %s", error.operation, error.kind.value, error.message, list(error.paths))
	raise HTTPException(status_code=STATUS_BY_KIND[error.kind], detail=error.to_dict())


class EntryModel(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	name: str
	folder: str
	size: Optional[int] = None
	type: str
	last_modified: datetime = Field(alias="lastModified")
	full_path: str = Field(alias="fullPath")

	@classmethod
	def from_entry(cls, entry: Entry) -> "EntryModel":
		return cls(
			name=entry.name,
			folder=entry.folder,
			size=entry.size,
			type=entry.kind,
			last_modified=entry.last_modified,
			full_path=entry.full_path,
		)


class SearchResponse(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	results: List[EntryModel]
	file_count: int = Field(alias="fileCount")
	directory_count: int = Field(alias="directoryCount")


@router.get("/search", response_model=SearchResponse, response_model_by_alias=True)
def search(
	path: str = Query(""),
	search: str = Query(""),
	recursive: bool = False,
	directories_first: bool = True,
	explorer: Explorer = Depends(get_explorer),
):
	"""List a directory, optionally recursive and filtered by name."""
	listing = _unwrap(explorer.list(path, search, recursive))
	return SearchResponse(
		results=[EntryModel.from_entry(e) for e in listing.merged(directories_first)],
		file_count=listing.file_count,
		directory_count=listing.directory_count,
	)


@router.get("/download")
def download(path: str = Query(""), explorer: Explorer = Depends(get_explorer)):
	ticket = _unwrap(explorer.download(path))
	return FileResponse(ticket.path, filename=ticket.filename)


@router.post("/upload")
async def upload(
	file: UploadFile = File(...),
	path: str = Form(""),
	explorer: Explorer = Depends(get_explorer),
):
	try:
		outcome = await explorer.upload(path, file.filename, file)
	finally:
		await file.close()
	result = _unwrap(outcome)
	return {"ok": True, "path": result.path, "size": result.size}


@router.delete("/delete")
def delete(path: str = Form(""), explorer: Explorer = Depends(get_explorer)):
	deleted = _unwrap(explorer.delete(path))
	return {"ok": True, "path": deleted}


@router.post("/move")
def move(
	source_path: str = Form("", alias="sourcePath"),
	dest_path: str = Form("", alias="destPath"),
	explorer: Explorer = Depends(get_explorer),
):
	target = _unwrap(explorer.move(source_path, dest_path))
	return {"ok": True, "path": target}


@router.post("/copy")
def copy(
	source_path: str = Form("", alias="sourcePath"),
	dest_path: str = Form("", alias="destPath"),
	explorer: Explorer = Depends(get_explorer),
):
	target = _unwrap(explorer.copy(source_path, dest_path))
	return {"ok": True, "path": target}


@router.post("/mkdir")
def make_dir(path: str = Form(""), explorer: Explorer = Depends(get_explorer)):
	created = _unwrap(explorer.mkdir(path))
	return {"ok": True, "path": created}
