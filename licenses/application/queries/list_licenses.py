"""
ListLicensesQuery.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class ListLicensesQuery:
    """
    Query licenses visible to the caller.

    Superadmins see every license, admins only their own.
    """

    caller: Optional[Caller]
