"""Feature modules of the MyHome service."""
