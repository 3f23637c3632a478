from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from discourse_graph.api.routes import router
from discourse_graph.config import CORS_ORIGINS, configure_logging

configure_logging()

app = FastAPI(
    title="Discourse Graph",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)
