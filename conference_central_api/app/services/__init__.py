"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to
storage only through the ``Datastore`` interface, so API handlers and
tests can hand in any datastore implementation.
"""
