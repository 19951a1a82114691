"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives
its database handles explicitly, so API handlers stay thin and tests
can substitute an in-memory collection.
"""
