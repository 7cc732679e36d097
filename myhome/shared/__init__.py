# 📄 File: myhome/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Holds the common building blocks every part of the MyHome service uses,
# like settings, error types, logging and the database connection.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, exceptions, logging utilities
# and async database infrastructure.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - myhome.modules.community_management (all layers)
# - migrations/env.py
