"""
Service layer abstraction.

Each service encapsulates business logic for a domain on top of the
DAOs in ``app.dao``.  Services are constructed once per process and
shared through ``ServiceContext``; they hold no mutable state after
construction.
"""
