"""
Application package initializer.

The project is split into layers rather than one monolithic module:

* ``core``: configuration, logging, error types and the database
  connection provider;
* ``dao``: hand-written data access objects, one per table;
* ``services``: business operations built on top of the DAOs;
* ``commands``: request commands and the dispatcher that routes to
  them;
* ``api``: the versioned HTTP surface.
"""

from .main import app  # noqa: F401
