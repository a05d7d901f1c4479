from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import Role
from .views import (
    AdminDashboard,
    Dashboard,
    DashboardServices,
    EmployeeDashboard,
    InvalidRoleDashboard,
    OwnerDashboard,
)

DASHBOARDS: dict[Role, type[Dashboard]] = {
    Role.OWNER: OwnerDashboard,
    Role.ADMIN: AdminDashboard,
    Role.EMPLOYEE: EmployeeDashboard,
}


@dataclass
class DashboardDispatcher:
    """Factory: pick the dashboard bound to a role.

    Unknown roles get ``InvalidRoleDashboard`` instead of an exception.
    """

    services: DashboardServices

    def for_role(self, role: Union[Role, str, None]) -> Dashboard:
        resolved: Optional[Role]
        try:
            resolved = Role(role)
        except ValueError:
            resolved = None

        dashboard_cls = DASHBOARDS.get(resolved, InvalidRoleDashboard)
        return dashboard_cls(self.services)
