"""
Service layer.

Each service encapsulates the business rules for one domain: the
in-memory series catalog, user accounts and watched items.  Endpoints
stay thin and only translate between HTTP and these calls.
"""
