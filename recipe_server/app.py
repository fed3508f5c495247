import logging
import time
from contextlib import asynccontextmanager
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from . import crud, errors, schemas
from .config import Settings
from .db import init_db, make_engine, make_sessionmaker
from .projection import to_payload, to_view
from .selection import select_recipe


log = logging.getLogger(__name__)

NO_RECIPE = "No recipe found"


def get_db(request: Request):
    db = request.app.state.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def log_unavailable(e: errors.RecipeError, what: str):
    if isinstance(e, errors.RecipeDecodeError):
        log.error("%s: corrupt recipe data: %s", what, e)
    else:
        log.warning("%s: %s: %s", what, type(e).__name__, e)


router = APIRouter(prefix="/api/v1", tags=["recipes"])


@router.get(
    "/recipe/{recipe_id}",
    response_model=schemas.RecipePayload,
    responses={404: {"model": schemas.ErrorDetail}},
)
def api_get_recipe(request: Request, recipe_id: str, db: Session = Depends(get_db)):
    """Return the recipe with the given id."""
    try:
        recipe = select_recipe(db, recipe_id)
    except errors.UNAVAILABLE as e:
        log_unavailable(e, f"recipe {recipe_id!r}")
        raise HTTPException(status_code=404, detail=NO_RECIPE)
    return to_payload(recipe, request.app.state.settings.tags_policy)


@router.get(
    "/random-recipe",
    response_model=schemas.RecipePayload,
    responses={404: {"model": schemas.ErrorDetail}},
)
def api_random_recipe(request: Request, db: Session = Depends(get_db)):
    """Return a recipe chosen uniformly at random."""
    try:
        recipe = select_recipe(db)
    except errors.UNAVAILABLE as e:
        log_unavailable(e, "random recipe")
        raise HTTPException(status_code=404, detail=NO_RECIPE)
    return to_payload(recipe, request.app.state.settings.tags_policy)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the app. Serve with ``uvicorn --factory recipe_server.app:create_app``."""
    settings = settings or Settings()
    engine = make_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create the schema once at startup
        init_db(engine)
        yield
        engine.dispose()

    app = FastAPI(
        title="Recipe Server",
        description="Random recipes, as HTML or JSON.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.SessionLocal = make_sessionmaker(engine)

    templates = Jinja2Templates(directory=str(settings.templates_dir))
    static_dir = settings.static_dir
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        log.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon():
        return FileResponse(str(static_dir / "favicon.ico"), media_type="image/vnd.microsoft.icon")

    @app.get("/", response_class=HTMLResponse)
    def read_root(request: Request, id: Optional[str] = None, db: Session = Depends(get_db)):
        """Show a recipe page; without ``id``, redirect to a random recipe."""
        if id is None:
            try:
                recipe_id = crud.get_random_recipe_id(db)
            except errors.UNAVAILABLE as e:
                log_unavailable(e, "random recipe")
                return templates.TemplateResponse(
                    request, "not_found.html", {"message": NO_RECIPE}, status_code=404
                )
            return RedirectResponse("/?" + urlencode({"id": recipe_id}), status_code=303)

        try:
            recipe = select_recipe(db, id)
        except errors.UNAVAILABLE as e:
            log_unavailable(e, f"recipe {id!r}")
            return templates.TemplateResponse(
                request, "not_found.html", {"message": NO_RECIPE}, status_code=404
            )
        return templates.TemplateResponse(
            request,
            "index.html",
            {"recipe": to_view(recipe), "stylesheet": "/static/recipe.css"},
        )

    app.include_router(router)
    return app
