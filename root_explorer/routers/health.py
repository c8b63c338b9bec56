from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health(request: Request):
	config = request.app.state.explorer.config
	return {"status": "ok", "root": config.root or None}
