from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/")
def api_root() -> dict[str, str]:
    return {"status": "ok", "message": "komorph noun analysis backend"}


@router.get("/health")
def health(request: Request) -> dict[str, object]:
    nlp_ready = bool(getattr(request.app.state, "nlp_ready", False))
    payload: dict[str, object] = {
        "status": "ok" if nlp_ready else "degraded",
        "service": "backend",
        "components": {
            "analyzer": "ok" if nlp_ready else "degraded",
        },
    }

    nlp_error = getattr(request.app.state, "nlp_error", None)
    if nlp_error:
        payload["nlp_error"] = str(nlp_error)

    analyzer = getattr(request.app.state, "analyzer", None)
    if analyzer is not None:
        payload["analyzer"] = analyzer.metadata()

    return payload
