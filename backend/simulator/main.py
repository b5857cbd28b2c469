import logging

from fastapi import FastAPI

from .db import init_db
from .settings import settings
from .routers import analysis
from .routers import credentials
from .routers import demo
from .routers import gallery
from .routers import responses

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Student Response Simulator API")
app.include_router(credentials.router)
app.include_router(demo.router)
app.include_router(responses.router)
app.include_router(analysis.router)
app.include_router(gallery.router)


@app.get("/info")
def root():
	return {"status": "ok", "openai_configured": bool(settings.openai_api_key)}


@app.on_event("startup")
async def startup_event():
	init_db()
