import logging

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from linkscrap.api import company, jobs, people, posts
from linkscrap.core.config import settings
from linkscrap.core.errors import LinkscrapError
from linkscrap.core.logging import setup_logging
from linkscrap.db.session import get_db

load_dotenv()
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(title="LinkedIn BrightData API")


@app.exception_handler(LinkscrapError)
def handle_linkscrap_error(request: Request, exc: LinkscrapError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
def index():
    return "LinkedIn data collection API over BrightData"


@app.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"status": "ok"}


app.include_router(people.profile_collect_router)
app.include_router(people.profile_discover_router)
app.include_router(people.people_search_router)
app.include_router(company.router)
app.include_router(jobs.collect_router)
app.include_router(jobs.keyword_router)
app.include_router(jobs.url_router)
app.include_router(posts.collect_router)
app.include_router(posts.company_router)
app.include_router(posts.profile_router)
app.include_router(posts.url_router)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
