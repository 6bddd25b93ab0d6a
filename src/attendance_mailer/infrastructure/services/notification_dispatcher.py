"""Notification dispatcher: the public entry point for sending email.

Composes template resolution, rendering and the transport manager. Transport
failures are classified into user-facing messages and raised as
:class:`DeliveryFailureError`. Nothing is retried here; retry policy belongs
to the caller.
"""

from datetime import datetime
from typing import Any, Mapping

from attendance_mailer.core.exceptions import DeliveryFailureError
from attendance_mailer.core.logging import get_logger
from attendance_mailer.domain.entities.email_template import OutboundEmail, RenderedEmail
from attendance_mailer.domain.entities.notification_type import (
    NotificationType,
    NotificationTypeInfo,
    list_notification_types,
)
from attendance_mailer.domain.services.failure_classifier import classify, find_rule
from attendance_mailer.domain.services.template_renderer import TemplateRenderer
from attendance_mailer.infrastructure.persistence.database import DatabaseManager
from attendance_mailer.infrastructure.services.email.smtp_transport import SMTPTransport
from attendance_mailer.infrastructure.services.email.template_resolver import TemplateResolver
from attendance_mailer.infrastructure.services.email.transport_manager import (
    TransportFactory,
    TransportManager,
)
from attendance_mailer.infrastructure.settings.config_loader import ConfigLoader
from attendance_mailer.infrastructure.settings.settings_gateway import (
    DatabaseSettingsGateway,
    SettingsGateway,
)


class NotificationDispatcher:
    """Sends catalog notifications and raw messages."""

    def __init__(
        self,
        config_loader: ConfigLoader,
        resolver: TemplateResolver,
        transport_manager: TransportManager,
        renderer: TemplateRenderer | None = None,
        logger: Any | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            config_loader: Source of organization identity and sender address.
            resolver: Template resolver.
            transport_manager: Owner of the mail transport.
            renderer: Optional template renderer.
            logger: Optional structured logger.
        """
        self.config_loader = config_loader
        self.resolver = resolver
        self.transport_manager = transport_manager
        self.logger = logger or get_logger(__name__)
        self.renderer = renderer or TemplateRenderer(logger=self.logger)

    @classmethod
    def from_gateway(
        cls,
        gateway: SettingsGateway,
        transport_factory: TransportFactory = SMTPTransport,
        logger: Any | None = None,
    ) -> "NotificationDispatcher":
        """Wire a dispatcher and its collaborators around one settings gateway."""
        logger = logger or get_logger(__name__)
        config_loader = ConfigLoader(gateway, logger=logger)
        return cls(
            config_loader=config_loader,
            resolver=TemplateResolver(gateway, logger=logger),
            transport_manager=TransportManager(
                config_loader, transport_factory=transport_factory, logger=logger
            ),
            logger=logger,
        )

    @classmethod
    def from_database(cls, db: DatabaseManager, logger: Any | None = None) -> "NotificationDispatcher":
        """Wire a dispatcher reading settings from the admin_settings table."""
        return cls.from_gateway(DatabaseSettingsGateway(db), logger=logger)

    def list_notification_types(self) -> list[NotificationTypeInfo]:
        """Return the notification catalog for the admin UI."""
        return list_notification_types()

    async def render(
        self,
        notification_type: NotificationType | str,
        variables: Mapping[str, Any] | None = None,
    ) -> RenderedEmail:
        """Resolve and render a notification without sending it.

        Raises:
            UnknownNotificationTypeError: If the identifier is not in the catalog.
        """
        template = await self.resolver.resolve(notification_type)
        identity = await self.config_loader.current_organization_identity()
        return self.renderer.render(template, variables, identity)

    async def send(
        self,
        notification_type: NotificationType | str,
        recipient: str,
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        """Send a catalog notification.

        Args:
            notification_type: Catalog type or its identifier.
            recipient: Recipient address.
            variables: Template variables supplied by the caller.

        Raises:
            UnknownNotificationTypeError: If the identifier is not in the catalog.
            TransportUnavailableError: If no transport could be constructed.
            DeliveryFailureError: If the transport failed to deliver.
        """
        notification_type = NotificationType.parse(notification_type)
        rendered = await self.render(notification_type, variables)
        await self._deliver(
            recipient,
            rendered.subject,
            rendered.body,
            rendered.text,
            notification_type=notification_type.value,
        )

    async def send_raw(
        self,
        recipient: str,
        subject: str,
        html: str,
        text: str | None = None,
    ) -> None:
        """Send fully custom content without a catalog template.

        Raises:
            TransportUnavailableError: If no transport could be constructed.
            DeliveryFailureError: If the transport failed to deliver.
        """
        await self._deliver(recipient, subject, html, text, notification_type=None)

    async def test_connection(self) -> bool:
        """Probe the mail server. Never raises."""
        return await self.transport_manager.test_connection()

    async def refresh(self) -> None:
        """Reload mail and organization settings and rebuild the transport.

        Call after an administrator edits mail or company settings.
        """
        await self.transport_manager.refresh()

    async def reload_settings(self) -> None:
        """Alias of :meth:`refresh` used by settings controllers."""
        await self.refresh()

    async def _deliver(
        self,
        recipient: str,
        subject: str,
        html: str,
        text: str | None,
        notification_type: str | None,
    ) -> None:
        # The sender comes from the same config snapshot the captured transport was built from
        transport = await self.transport_manager.current_transport()
        identity = await self.config_loader.current_organization_identity()
        message = OutboundEmail(
            to=recipient,
            from_address=transport.config.sender(identity),
            subject=subject,
            html=html,
            text=text,
        )
        log = self.logger.bind(notification_type=notification_type or "raw", to=recipient)
        try:
            await transport.deliver(message)
        except Exception as e:
            user_message = classify(e)
            rule = find_rule(e)
            log.error(
                "Email delivery failed",
                category=rule.category if rule else "unclassified",
                user_message=user_message,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DeliveryFailureError(
                user_message,
                original=e,
                notification_type=notification_type,
                recipient=recipient,
            ) from e
        log.info("Email sent")

    # ------------------------------------------------------------------
    # Convenience senders for the notification catalog
    # ------------------------------------------------------------------

    async def send_attendance_reminder(
        self, email: str, employee_name: str, date: str, time: str | None = None
    ) -> None:
        await self.send(
            NotificationType.ATTENDANCE_REMINDER,
            email,
            {
                "employeeName": employee_name,
                "date": date,
                "time": time or datetime.now().strftime("%H:%M:%S"),
            },
        )

    async def send_daily_absentee_report(
        self,
        admin_email: str,
        date: str,
        total_absent: int,
        absentee_list: str,
        department_summary: str = "",
    ) -> None:
        await self.send(
            NotificationType.ABSENTEE_REPORT,
            admin_email,
            {
                "date": date,
                "totalAbsent": total_absent,
                "absenteeList": absentee_list,
                "departmentSummary": department_summary,
            },
        )

    async def send_weekly_report(
        self,
        admin_email: str,
        week_start: str,
        week_end: str,
        total_present: int,
        total_absent: int,
        total_late: int,
        attendance_rate: float,
        report_details: str = "",
    ) -> None:
        await self.send(
            NotificationType.WEEKLY_REPORT,
            admin_email,
            {
                "weekStart": week_start,
                "weekEnd": week_end,
                "totalPresent": total_present,
                "totalAbsent": total_absent,
                "totalLate": total_late,
                "attendanceRate": f"{attendance_rate:.1f}",
                "reportDetails": report_details,
            },
        )

    async def send_end_of_day_report(
        self,
        admin_email: str,
        date: str,
        total_present: int,
        total_absent: int,
        total_late: int,
        total_early_leave: int,
        department_breakdown: str = "",
    ) -> None:
        await self.send(
            NotificationType.END_OF_DAY_REPORT,
            admin_email,
            {
                "date": date,
                "totalPresent": total_present,
                "totalAbsent": total_absent,
                "totalLate": total_late,
                "totalEarlyLeave": total_early_leave,
                "departmentBreakdown": department_breakdown,
            },
        )

    async def send_monthly_report(
        self,
        admin_email: str,
        month: str,
        year: str,
        total_working_days: int,
        average_attendance: float,
        top_performers: str = "",
        report_details: str = "",
    ) -> None:
        await self.send(
            NotificationType.MONTHLY_REPORT,
            admin_email,
            {
                "month": month,
                "year": year,
                "totalWorkingDays": total_working_days,
                "averageAttendance": f"{average_attendance:.1f}",
                "topPerformers": top_performers,
                "reportDetails": report_details,
            },
        )

    async def send_welcome_email(
        self, email: str, employee_name: str, temporary_password: str
    ) -> None:
        await self.send(
            NotificationType.WELCOME,
            email,
            {
                "employeeName": employee_name,
                "email": email,
                "temporaryPassword": temporary_password,
            },
        )

    async def send_password_reset_email(
        self,
        email: str,
        employee_name: str,
        reset_token: str,
        reset_link: str,
        expiry_time: str = "1 hour",
    ) -> None:
        await self.send(
            NotificationType.PASSWORD_RESET,
            email,
            {
                "employeeName": employee_name,
                "resetToken": reset_token,
                "resetLink": reset_link,
                "expiryTime": expiry_time,
            },
        )

    async def send_password_changed_email(self, email: str, employee_name: str) -> None:
        await self.send(
            NotificationType.PASSWORD_CHANGED,
            email,
            {
                "employeeName": employee_name,
                "changeTime": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            },
        )

    async def send_account_locked_email(
        self, email: str, employee_name: str, unlock_time: str
    ) -> None:
        await self.send(
            NotificationType.ACCOUNT_LOCKED,
            email,
            {
                "employeeName": employee_name,
                "lockTime": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                "unlockTime": unlock_time,
            },
        )

    async def send_leave_request_email(
        self,
        manager_email: str,
        employee_name: str,
        leave_type: str,
        start_date: str,
        end_date: str,
        reason: str,
        approval_url: str,
    ) -> None:
        await self.send(
            NotificationType.LEAVE_REQUEST,
            manager_email,
            {
                "employeeName": employee_name,
                "leaveType": leave_type,
                "startDate": start_date,
                "endDate": end_date,
                "reason": reason,
                "approvalUrl": approval_url,
            },
        )

    async def send_leave_approved_email(
        self,
        email: str,
        employee_name: str,
        leave_type: str,
        start_date: str,
        end_date: str,
        approved_by: str,
    ) -> None:
        await self.send(
            NotificationType.LEAVE_APPROVED,
            email,
            {
                "employeeName": employee_name,
                "leaveType": leave_type,
                "startDate": start_date,
                "endDate": end_date,
                "approvedBy": approved_by,
            },
        )

    async def send_leave_rejected_email(
        self,
        email: str,
        employee_name: str,
        leave_type: str,
        start_date: str,
        end_date: str,
        rejected_by: str,
        rejection_reason: str,
    ) -> None:
        await self.send(
            NotificationType.LEAVE_REJECTED,
            email,
            {
                "employeeName": employee_name,
                "leaveType": leave_type,
                "startDate": start_date,
                "endDate": end_date,
                "rejectedBy": rejected_by,
                "rejectionReason": rejection_reason,
            },
        )

    async def send_test_email(self, to: str) -> None:
        """Send an attendance reminder addressed to a test user."""
        now = datetime.now()
        await self.send_attendance_reminder(
            to,
            "Test User",
            now.strftime("%Y-%m-%d"),
            now.strftime("%H:%M:%S"),
        )
