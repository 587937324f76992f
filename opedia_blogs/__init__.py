"""
Opedia Blogs API — Application Package
========================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← sanitization, pagination
    ├─────────────────────────────────────┤
    │             Schemas (Data)          │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Motor client in the AppContext
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
