"""
handlers/ - Presentation Layer
================================
FastAPI routers for the JSON API. Each handler parses the request,
delegates to the appropriate Service, and maps the returned Outcome
to an HTTP response. No business logic lives here.
"""
