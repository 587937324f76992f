# Routes package init
"""
Opedia Blogs API — API Routes Package
=======================================

Route Inventory:
    - health.py:    GET  /                       (liveness banner)
                    GET  /health                 (database ping)
    - auth.py:      POST /jwt                    (issue bearer token)
    - users.py:     GET  /users                  (bearer)
                    POST /users
    - blogs.py:     POST /blogs, GET /blogs?page=N
                    PUT  /blogs/{id}, DELETE /blogs/{id}
    - comments.py:  GET  /comments
                    POST /blogs/{id}/comments    (bearer)
                    GET  /blogs/{id}/comments
                    PUT  /comments/{id}          (bearer)
                    DELETE /comments/{id}        (bearer)

Routes stay thin: pull data out of the request, call a service, pick the
status code. Collection access lives in services.
"""
