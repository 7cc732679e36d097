# 📄 File: myhome/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main package for the MyHome community service, which keeps track of residential
# communities, the houses inside them, the people living in those houses and the admins.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version info for the community hierarchy service.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - myhome.shared (configuration, logging, database infrastructure)
# - myhome.modules.community_management (hierarchy consistency engine)

"""
MyHome Community Service

Manages the Community → CommunityHouse → HouseMember → HouseMemberDocument
hierarchy and the Community ↔ admin User relation.
"""

__version__ = "1.0.0"
__title__ = "MyHome Community Service"
__description__ = "Residential community hierarchy management"
