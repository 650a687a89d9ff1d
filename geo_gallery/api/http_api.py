from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from geo_gallery.core.env import configure_logging, load_dotenv_if_present
from geo_gallery.core.errors import ReadFailed, WriteFailed
from geo_gallery.gallery import GalleryController

load_dotenv_if_present()
configure_logging()

controller = GalleryController.from_env()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # StorageUnavailable here aborts startup; there is no mode without storage.
    await controller.start()
    yield
    await controller.close()


app = FastAPI(title="Geo Gallery API", lifespan=lifespan)


class IngestRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    uri: str = Field(min_length=1)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@app.post("/images", status_code=201)
async def ingest_image(req: IngestRequest) -> dict:
    try:
        record = await controller.acquire(req.uri)
    except WriteFailed as exc:
        raise HTTPException(status_code=503, detail=f"Image was not saved: {exc}") from exc
    return {"image": record.model_dump()}


@app.get("/images")
async def list_images() -> dict:
    try:
        records = await controller.store.list_all()
    except ReadFailed as exc:
        raise HTTPException(status_code=503, detail=f"Images could not be read: {exc}") from exc
    return {"images": [record.model_dump() for record in records]}


@app.get("/gallery")
async def gallery() -> dict:
    """Return the grid and map projections, falling back to the last good one."""
    try:
        projection = await controller.refresh()
    except ReadFailed:
        projection = controller.projection
    return {**projection.model_dump(), "stale": controller.stale}
