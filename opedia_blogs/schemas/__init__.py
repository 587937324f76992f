"""
Opedia Blogs API — Request/Response Schemas

Pydantic models defining the wire format of every route. Python fields are
snake_case; JSON keys are camelCase.
"""
