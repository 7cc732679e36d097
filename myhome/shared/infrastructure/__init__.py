"""
Infrastructure layer package for the MyHome service.
Provides the database engine, sessions and the unit of work.
"""
