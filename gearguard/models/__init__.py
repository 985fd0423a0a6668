from .department import Department
from .category import Category
from .user import AppUser
from .session import UserSession
from .team import Team
from .team_member import TeamMember
from .equipment import Equipment
from .work_center import WorkCenter
from .maintenance_request import MaintenanceRequest
from .request_technician import RequestTechnician
from .worksheet import Worksheet
from .activity_log import ActivityLog
__all__ = [
    "Department", "Category", "AppUser", "UserSession", "Team", "TeamMember", "Equipment",
    "WorkCenter", "MaintenanceRequest", "RequestTechnician", "Worksheet", "ActivityLog",
]
