# 📄 File: myhome/shared/config/__init__.py
# 🧭 Purpose (Layman Explanation):
# Makes the service settings easy to import from one place.
# 🧪 Purpose (Technical Summary):
# Re-exports the Settings model and the cached settings factory.
# 🔗 Dependencies:
# myhome.shared.config.settings
# 🔄 Connected Modules / Calls From:
# Database connection, logging setup, domain services

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
