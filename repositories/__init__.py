"""
repositories/ - Data Access Layer
==================================
Each repository encapsulates all SQL queries for a specific domain entity.
Repositories receive raw rows from the database and return domain model objects.
Every method opens one connection and releases it on every exit path.
"""
