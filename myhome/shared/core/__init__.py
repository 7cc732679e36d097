# 📄 File: myhome/shared/core/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the core helpers: error types and id generation.
# 🧪 Purpose (Technical Summary):
# Shared core package exports.
# 🔗 Dependencies:
# myhome.shared.core.exceptions, myhome.shared.core.identifiers
# 🔄 Connected Modules / Calls From:
# Domain services, repository implementations, session manager

from .exceptions import (
    ConflictError,
    DatabaseError,
    MyHomeException,
    RepositoryError,
    TransactionError,
    ValidationError,
)
from .identifiers import IdGenerator, generate_unique_id

__all__ = [
    "MyHomeException",
    "ValidationError",
    "ConflictError",
    "DatabaseError",
    "RepositoryError",
    "TransactionError",
    "IdGenerator",
    "generate_unique_id",
]
