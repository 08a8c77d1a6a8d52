"""
db/ - Database Layer
====================
Handles PostgreSQL connections and schema initialization.
This layer is the lowest in the architecture; it depends only on config and utils.
"""
