"""
PlantFlow Application Package

Directory Structure:
├── domain/            # Entity catalog, graph state, commands, events
├── application/       # Property form, config compiler, persistence, simulation
├── infrastructure/    # HTTP clients for the simulation and analysis services
├── routers/           # FastAPI route handlers
├── schemas/           # Pydantic models for API requests/responses
│   └── api_schemas.py # HTTP request/response structures
├── storage/           # Storage implementations for simulation results
│   ├── filesystem.py  # Local filesystem storage
│   └── s3.py          # S3 storage
└── config.py          # Application configuration

Value Kinds Clarification:
1. **Raw values** (domain.entities.Node.values): what the user typed, kept as strings or booleans
2. **Typed params** (application.config_compiler): numbers coerced once, when the plant config is compiled

The editor owns the graph; the simulator and the analysis service only ever
see the compiled plant configuration and the results it produced.
"""
