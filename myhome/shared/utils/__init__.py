# 📄 File: myhome/shared/utils/__init__.py
# 🧭 Purpose (Layman Explanation):
# Small helpers shared across the service: logging setup and paging.
# 🧪 Purpose (Technical Summary):
# Utility package exports.
# 🔗 Dependencies:
# myhome.shared.utils.pagination
# 🔄 Connected Modules / Calls From:
# Domain services, repository implementations

from .pagination import PageRequest

__all__ = ["PageRequest"]
