from typing import Dict, Optional

from .schemas.user import User, UserRole

EMPLOYEE_PAGES = {
    "1_Dashboard.py": "Dashboard",
    "2_Clock.py": "Clock In/Out",
    "3_History.py": "Attendance History",
    "4_Requests.py": "Leave/Time Requests",
}

MANAGER_PAGES = {
    "5_Manager_Dashboard.py": "Manager Dashboard",
    "6_Team_Overview.py": "Team Overview",
    "7_Approval_Queue.py": "Approval Queue",
    "8_Reports.py": "Reports",
}


def role_of(user: Optional[User]) -> str:
    if user is None:
        return ""
    return user.role.value


def pages_for_role(role: str) -> Dict[str, str]:
    role = role.upper() if role else ""
    if role == UserRole.MANAGER.value:
        return MANAGER_PAGES
    if role == UserRole.EMPLOYEE.value:
        return EMPLOYEE_PAGES
    return {}


def can_access(role: str, page_file: str) -> bool:
    return page_file in pages_for_role(role)


def home_page(role: str) -> Optional[str]:
    """First page of the role's section; where the root of the app lands."""
    pages = pages_for_role(role)
    return next(iter(pages), None)
