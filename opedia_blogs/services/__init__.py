# Services package init
"""
Opedia Blogs API — Services Layer
===================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Each service is a stateless singleton whose methods take the
       database handle as their first argument and return response schemas.

Service Inventory:
    - UserService:    list and register users
    - BlogService:    create, paginate, edit and delete blogs
    - CommentService: create, list, edit and delete comments

Every method wraps its collection call and turns driver failures into
DatabaseError, which the global handler answers with a generic 500.
"""
