"""
Service layer abstraction.

Each service encapsulates the business rules of one resource.  Routers
call services and translate their exceptions into HTTP errors;
services talk to SQLite only through ``core.repository``.
"""
