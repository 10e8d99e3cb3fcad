from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plantflow.config import settings
from plantflow.routers import documents, entities, form, graph, health, simulation
from plantflow.domain.errors import NetworkError, NotFoundError, ValidationError
from plantflow.application.event_handlers import register_event_handlers

app = FastAPI(
    title="PlantFlow API",
    description="Graph editing and plant configuration compilation for the plant simulator",
    version=settings.VERSION,
)

# Register domain event handlers on startup
@app.on_event("startup")
async def startup_event():
    register_event_handlers()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_credentials=True,
    allow_methods=["*"],  # Allows all methods
    allow_headers=["*"],  # Allows all headers
)


# Domain error handlers
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})



@app.exception_handler(NetworkError)
async def network_error_handler(request: Request, exc: NetworkError):
    return JSONResponse(status_code=502, content={"detail": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(entities.router, tags=["Entities"])
app.include_router(graph.router, tags=["Graph"])
app.include_router(form.router, tags=["Form"])
app.include_router(documents.router, tags=["Documents"])
app.include_router(simulation.router, tags=["Simulation"])

@app.get("/")
async def root():
    return {"message": "Welcome to PlantFlow API. See /docs for API documentation"}
