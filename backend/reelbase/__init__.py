"""
Reelbase Backend — Application Package Initializer
===================================================

What: Marks the `reelbase` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │      Routes (API + HTML views)      │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Query policy)     │  ← id resolution, partial updates
    ├─────────────────────────────────────┤
    │            Schemas (Data)           │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │        Store (Persistence)          │  ← DocumentStore: MongoDB or memory
    └─────────────────────────────────────┘

    Services receive their collection explicitly; nothing below the routes
    reaches for a module-level database handle.
"""

__version__ = "1.0.0"
