"""Notification type catalog.

Each notification type the system can send is listed here together with the
settings key an administrator override is stored under and the variables its
template is expected to use. The catalog is static; types are never created
or removed at runtime.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from attendance_mailer.core.exceptions import UnknownNotificationTypeError

TEMPLATE_KEY_PREFIX = "email.templates."


class NotificationType(str, Enum):
    """Identifiers of the notifications the system sends."""

    ATTENDANCE_REMINDER = "attendanceReminder"
    ABSENTEE_REPORT = "absenteeReport"
    WEEKLY_REPORT = "weeklyReport"
    END_OF_DAY_REPORT = "endOfDayReport"
    MONTHLY_REPORT = "monthlyReport"
    WELCOME = "welcome"
    PASSWORD_RESET = "passwordReset"
    PASSWORD_CHANGED = "passwordChanged"
    ACCOUNT_LOCKED = "accountLocked"
    LEAVE_REQUEST = "leaveRequest"
    LEAVE_APPROVED = "leaveApproved"
    LEAVE_REJECTED = "leaveRejected"
    CUSTOM = "custom"

    @property
    def storage_key(self) -> str:
        """Settings key an administrator override is stored under."""
        return f"{TEMPLATE_KEY_PREFIX}{self.value}"

    @classmethod
    def parse(cls, value: "NotificationType | str") -> "NotificationType":
        """Coerce an identifier string to a NotificationType.

        Raises:
            UnknownNotificationTypeError: If the identifier is not in the catalog.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownNotificationTypeError(str(value)) from None


@dataclass(frozen=True)
class NotificationTypeInfo:
    """Catalog entry describing one notification type.

    Attributes:
        type: The notification type identifier.
        name: Human-readable name for the admin UI.
        description: When the notification is sent.
        variables: Placeholder names the template is expected to use, in order.
    """

    type: NotificationType
    name: str
    description: str
    variables: tuple[str, ...]

    @property
    def key(self) -> str:
        return self.type.storage_key

    def to_dict(self) -> dict[str, object]:
        return {
            "type": self.type.value,
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "variables": list(self.variables),
        }


_CATALOG: dict[NotificationType, NotificationTypeInfo] = {
    info.type: info
    for info in (
        # Attendance
        NotificationTypeInfo(
            NotificationType.ATTENDANCE_REMINDER,
            "Daily Attendance Reminder",
            "Sent to employees who haven't marked attendance",
            ("employeeName", "date", "time", "companyName", "loginUrl"),
        ),
        NotificationTypeInfo(
            NotificationType.ABSENTEE_REPORT,
            "Daily Absentee Report",
            "Sent to admin with list of absent employees",
            ("date", "totalAbsent", "absenteeList", "companyName", "departmentSummary"),
        ),
        NotificationTypeInfo(
            NotificationType.WEEKLY_REPORT,
            "Weekly Attendance Report",
            "Weekly summary sent to admin",
            (
                "weekStart",
                "weekEnd",
                "totalPresent",
                "totalAbsent",
                "totalLate",
                "attendanceRate",
                "companyName",
                "reportDetails",
            ),
        ),
        NotificationTypeInfo(
            NotificationType.END_OF_DAY_REPORT,
            "End of Day Summary",
            "Daily summary sent at end of work day",
            (
                "date",
                "totalPresent",
                "totalAbsent",
                "totalLate",
                "totalEarlyLeave",
                "companyName",
                "departmentBreakdown",
            ),
        ),
        NotificationTypeInfo(
            NotificationType.MONTHLY_REPORT,
            "Monthly Attendance Report",
            "Monthly summary sent to admin",
            (
                "month",
                "year",
                "totalWorkingDays",
                "averageAttendance",
                "topPerformers",
                "companyName",
                "reportDetails",
            ),
        ),
        # User accounts
        NotificationTypeInfo(
            NotificationType.WELCOME,
            "Welcome Email",
            "Sent when a new employee account is created",
            ("employeeName", "email", "temporaryPassword", "loginUrl", "companyName"),
        ),
        NotificationTypeInfo(
            NotificationType.PASSWORD_RESET,
            "Password Reset",
            "Sent when password reset is requested",
            ("employeeName", "resetLink", "resetToken", "expiryTime", "companyName"),
        ),
        NotificationTypeInfo(
            NotificationType.PASSWORD_CHANGED,
            "Password Changed Confirmation",
            "Sent after password is successfully changed",
            ("employeeName", "changeTime", "companyName", "supportEmail"),
        ),
        NotificationTypeInfo(
            NotificationType.ACCOUNT_LOCKED,
            "Account Locked",
            "Sent when account is locked due to failed attempts",
            ("employeeName", "lockTime", "unlockTime", "supportEmail", "companyName"),
        ),
        # Leave
        NotificationTypeInfo(
            NotificationType.LEAVE_REQUEST,
            "Leave Request Notification",
            "Sent to manager when leave is requested",
            (
                "employeeName",
                "leaveType",
                "startDate",
                "endDate",
                "reason",
                "approvalUrl",
                "companyName",
            ),
        ),
        NotificationTypeInfo(
            NotificationType.LEAVE_APPROVED,
            "Leave Approved",
            "Sent when leave request is approved",
            ("employeeName", "leaveType", "startDate", "endDate", "approvedBy", "companyName"),
        ),
        NotificationTypeInfo(
            NotificationType.LEAVE_REJECTED,
            "Leave Rejected",
            "Sent when leave request is rejected",
            (
                "employeeName",
                "leaveType",
                "startDate",
                "endDate",
                "rejectedBy",
                "rejectionReason",
                "companyName",
            ),
        ),
        NotificationTypeInfo(
            NotificationType.CUSTOM,
            "Custom Message",
            "Manually sent custom subject and body",
            ("customSubject", "customBody", "employeeName", "companyName", "supportEmail"),
        ),
    )
}

NOTIFICATION_CATALOG: Mapping[NotificationType, NotificationTypeInfo] = MappingProxyType(_CATALOG)


def get_notification_type_info(notification_type: NotificationType | str) -> NotificationTypeInfo:
    """Look up the catalog entry for a notification type.

    Raises:
        UnknownNotificationTypeError: If the identifier is not in the catalog.
    """
    return NOTIFICATION_CATALOG[NotificationType.parse(notification_type)]


def list_notification_types() -> list[NotificationTypeInfo]:
    """Return every catalog entry in declaration order."""
    return list(NOTIFICATION_CATALOG.values())
