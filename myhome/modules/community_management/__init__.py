# 📄 File: myhome/modules/community_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# The part of MyHome that keeps track of communities, their houses, the people
# living in them and who runs each community.
# 🧪 Purpose (Technical Summary):
# Community hierarchy module: domain entities, repository contracts, lifecycle
# services, SQLAlchemy persistence and FastAPI dependency wiring.
# 🔗 Dependencies:
# domain, infrastructure, presentation subpackages
# 🔄 Connected Modules / Calls From:
# Transport layers built on top of the service
