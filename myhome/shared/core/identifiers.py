# 📄 File: myhome/shared/core/identifiers.py
# 🧭 Purpose (Layman Explanation):
# Hands out brand-new unique names (ids) for communities, houses, members and documents.
# 🧪 Purpose (Technical Summary):
# UUID4-based string identifier generation used for every newly created entity.
# 🔗 Dependencies:
# uuid
# 🔄 Connected Modules / Calls From:
# CommunityService, HouseService, HouseMemberDocumentService

import uuid
from typing import Callable

IdGenerator = Callable[[], str]


def generate_unique_id() -> str:
    """Return a new globally unique identifier as text."""
    return str(uuid.uuid4())
