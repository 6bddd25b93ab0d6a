"""Built-in email templates.

Used whenever an administrator has not stored an override for a notification
type, or the stored override cannot be parsed. Every catalog type has exactly
one default here.
"""

from types import MappingProxyType
from typing import Mapping

from attendance_mailer.domain.entities.email_template import ResolvedTemplate
from attendance_mailer.domain.entities.notification_type import (
    NOTIFICATION_CATALOG,
    NotificationType,
)

_FOOTER = """
  <div style="background: #333; padding: 20px; text-align: center;">
    <p style="color: #999; margin: 0; font-size: 12px;">&copy; {{companyName}} - Attendance Management System</p>
  </div>"""


def _layout(gradient: str, header: str, content: str, footer: str = _FOOTER) -> str:
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background: linear-gradient(135deg, {gradient}); padding: 20px; text-align: center;">
    {header}
  </div>
  <div style="padding: 30px; background: #f9f9f9;">
    {content}
  </div>{footer}
</div>
"""


def _button(href: str, label: str, gradient: str) -> str:
    return (
        '<div style="text-align: center; margin: 30px 0;">'
        f'<a href="{href}" style="background: linear-gradient(135deg, {gradient}); color: white; '
        'padding: 15px 30px; text-decoration: none; border-radius: 5px; font-weight: bold;">'
        f"{label}</a></div>"
    )


def _stat(value: str, label: str, color: str) -> str:
    return (
        f'<div style="background: {color}; padding: 20px; border-radius: 10px; text-align: center;">'
        f'<h3 style="color: white; margin: 0;">{value}</h3>'
        f'<p style="color: white; margin: 5px 0 0 0;">{label}</p></div>'
    )


def _stats_grid(*stats: str) -> str:
    return (
        '<div style="display: grid; grid-template-columns: 1fr 1fr; gap: 15px; margin: 20px 0;">'
        + "".join(stats)
        + "</div>"
    )


_PURPLE = "#667eea 0%, #764ba2 100%"
_PINK = "#f093fb 0%, #f5576c 100%"
_GREEN = "#11998e 0%, #38ef7d 100%"
_RED = "#ff416c 0%, #ff4b2b 100%"

_CARD = 'style="background: white; padding: 20px; border-radius: 10px; margin: 20px 0;"'
_TEXT = 'style="color: #666; font-size: 16px; line-height: 1.6;"'

_DEFAULTS: dict[NotificationType, ResolvedTemplate] = {
    NotificationType.ATTENDANCE_REMINDER: ResolvedTemplate(
        subject="⏰ Attendance Reminder - {{date}}",
        body=_layout(
            _PURPLE,
            '<h1 style="color: white; margin: 0;">{{companyName}}</h1>',
            '<h2 style="color: #333;">Hello {{employeeName}}! 👋</h2>'
            f"<p {_TEXT}>This is a friendly reminder that you haven't marked your attendance "
            "for today (<strong>{{date}}</strong>).</p>"
            f"<p {_TEXT}>Please mark your attendance as soon as possible to maintain accurate records.</p>"
            + _button("{{loginUrl}}", "Mark Attendance Now", _PURPLE)
            + '<p style="color: #999; font-size: 14px;">Current time: {{time}}</p>',
        ),
    ),
    NotificationType.ABSENTEE_REPORT: ResolvedTemplate(
        subject="📋 Daily Absentee Report - {{date}}",
        body=_layout(
            _PINK,
            '<h1 style="color: white; margin: 0;">{{companyName}}</h1>'
            '<p style="color: white; margin: 5px 0 0 0;">Daily Absentee Report</p>',
            '<h2 style="color: #333;">Attendance Summary for {{date}}</h2>'
            f'<div {_CARD}><h3 style="color: #f5576c; margin-top: 0;">Total Absent: {{{{totalAbsent}}}}</h3>'
            "{{absenteeList}}</div>"
            f'<div {_CARD}><h3 style="color: #333; margin-top: 0;">Department Summary</h3>'
            "{{departmentSummary}}</div>",
        ),
    ),
    NotificationType.WEEKLY_REPORT: ResolvedTemplate(
        subject="📊 Weekly Attendance Report - {{weekStart}} to {{weekEnd}}",
        body=_layout(
            "#4facfe 0%, #00f2fe 100%",
            '<h1 style="color: white; margin: 0;">{{companyName}}</h1>'
            '<p style="color: white; margin: 5px 0 0 0;">Weekly Attendance Report</p>',
            '<h2 style="color: #333;">Week: {{weekStart}} - {{weekEnd}}</h2>'
            + _stats_grid(
                _stat("{{totalPresent}}", "Total Present", "#4CAF50"),
                _stat("{{totalAbsent}}", "Total Absent", "#f44336"),
                _stat("{{totalLate}}", "Late Arrivals", "#ff9800"),
                _stat("{{attendanceRate}}%", "Attendance Rate", "#2196F3"),
            )
            + f"<div {_CARD}>{{{{reportDetails}}}}</div>",
        ),
    ),
    NotificationType.END_OF_DAY_REPORT: ResolvedTemplate(
        subject="🌅 End of Day Summary - {{date}}",
        body=_layout(
            "#fa709a 0%, #fee140 100%",
            '<h1 style="color: white; margin: 0;">{{companyName}}</h1>'
            '<p style="color: white; margin: 5px 0 0 0;">End of Day Summary</p>',
            "<h2 style=\"color: #333;\">Today's Summary - {{date}}</h2>"
            + _stats_grid(
                _stat("{{totalPresent}}", "Present", "#4CAF50"),
                _stat("{{totalAbsent}}", "Absent", "#f44336"),
                _stat("{{totalLate}}", "Late", "#ff9800"),
                _stat("{{totalEarlyLeave}}", "Early Leave", "#9C27B0"),
            )
            + f'<div {_CARD}><h3 style="color: #333; margin-top: 0;">Department Breakdown</h3>'
            "{{departmentBreakdown}}</div>",
        ),
    ),
    NotificationType.MONTHLY_REPORT: ResolvedTemplate(
        subject="📅 Monthly Attendance Report - {{month}} {{year}}",
        body=_layout(
            "#a8edea 0%, #fed6e3 100%",
            '<h1 style="color: #333; margin: 0;">{{companyName}}</h1>'
            '<p style="color: #333; margin: 5px 0 0 0;">Monthly Attendance Report</p>',
            '<h2 style="color: #333;">{{month}} {{year}} Summary</h2>'
            f"<div {_CARD}><p><strong>Total Working Days:</strong> {{{{totalWorkingDays}}}}</p>"
            "<p><strong>Average Attendance:</strong> {{averageAttendance}}%</p></div>"
            f'<div {_CARD}><h3 style="margin-top: 0;">🏆 Top Performers</h3>{{{{topPerformers}}}}</div>'
            f"<div {_CARD}>{{{{reportDetails}}}}</div>",
        ),
    ),
    NotificationType.WELCOME: ResolvedTemplate(
        subject="🎉 Welcome to {{companyName}}!",
        body=_layout(
            _PURPLE,
            '<h1 style="color: white; margin: 0;">Welcome to {{companyName}}! 🎉</h1>',
            '<h2 style="color: #333;">Hello {{employeeName}}! 👋</h2>'
            f"<p {_TEXT}>We're excited to have you on board! Your account has been created successfully.</p>"
            f'<div {_CARD}><h3 style="color: #667eea; margin-top: 0;">Your Login Details</h3>'
            "<p><strong>Email:</strong> {{email}}</p>"
            "<p><strong>Temporary Password:</strong> "
            '<code style="background: #f0f0f0; padding: 5px 10px; border-radius: 3px;">{{temporaryPassword}}</code></p>'
            "</div>"
            '<p style="color: #f44336; font-size: 14px;">⚠️ Please change your password after your first login.</p>'
            + _button("{{loginUrl}}", "Login Now", _PURPLE),
        ),
    ),
    NotificationType.PASSWORD_RESET: ResolvedTemplate(
        subject="🔐 Password Reset Request - {{companyName}}",
        body=_layout(
            _PINK,
            '<h1 style="color: white; margin: 0;">Password Reset</h1>',
            '<h2 style="color: #333;">Hello {{employeeName}},</h2>'
            f"<p {_TEXT}>We received a request to reset your password. "
            "Click the button below to create a new password.</p>"
            + _button("{{resetLink}}", "Reset Password", _PINK)
            + '<p style="color: #666; font-size: 14px;">This link will expire in <strong>{{expiryTime}}</strong>.</p>'
            '<p style="color: #999; font-size: 12px;">If you didn\'t request this, please ignore this email '
            "or contact support if you have concerns.</p>"
            '<div style="background: #fff3cd; padding: 15px; border-radius: 5px; margin-top: 20px;">'
            '<p style="color: #856404; margin: 0; font-size: 12px;"><strong>Reset Token:</strong> {{resetToken}}</p>'
            "</div>",
        ),
    ),
    NotificationType.PASSWORD_CHANGED: ResolvedTemplate(
        subject="✅ Password Changed Successfully - {{companyName}}",
        body=_layout(
            _GREEN,
            '<h1 style="color: white; margin: 0;">Password Changed ✅</h1>',
            '<h2 style="color: #333;">Hello {{employeeName}},</h2>'
            f"<p {_TEXT}>Your password has been successfully changed on <strong>{{{{changeTime}}}}</strong>.</p>"
            '<div style="background: #d4edda; padding: 15px; border-radius: 5px; margin: 20px 0;">'
            '<p style="color: #155724; margin: 0;">✅ Your account is now secured with the new password.</p></div>'
            '<p style="color: #666; font-size: 14px;">If you did not make this change, please contact our support '
            'team immediately at <a href="mailto:{{supportEmail}}">{{supportEmail}}</a>.</p>',
        ),
    ),
    NotificationType.ACCOUNT_LOCKED: ResolvedTemplate(
        subject="🔒 Account Locked - {{companyName}}",
        body=_layout(
            _RED,
            '<h1 style="color: white; margin: 0;">Account Locked 🔒</h1>',
            '<h2 style="color: #333;">Hello {{employeeName}},</h2>'
            f"<p {_TEXT}>Your account has been temporarily locked due to multiple failed login attempts.</p>"
            '<div style="background: #f8d7da; padding: 15px; border-radius: 5px; margin: 20px 0;">'
            '<p style="color: #721c24; margin: 0;"><strong>Locked at:</strong> {{lockTime}}<br>'
            "<strong>Unlock time:</strong> {{unlockTime}}</p></div>"
            '<p style="color: #666; font-size: 14px;">If you need immediate access, please contact our support '
            'team at <a href="mailto:{{supportEmail}}">{{supportEmail}}</a>.</p>',
        ),
    ),
    NotificationType.LEAVE_REQUEST: ResolvedTemplate(
        subject="📝 Leave Request from {{employeeName}} - {{companyName}}",
        body=_layout(
            _PURPLE,
            '<h1 style="color: white; margin: 0;">New Leave Request</h1>',
            '<h2 style="color: #333;">Leave Request Details</h2>'
            f"<div {_CARD}>"
            "<p><strong>Employee:</strong> {{employeeName}}</p>"
            "<p><strong>Leave Type:</strong> {{leaveType}}</p>"
            "<p><strong>From:</strong> {{startDate}}</p>"
            "<p><strong>To:</strong> {{endDate}}</p>"
            "<p><strong>Reason:</strong> {{reason}}</p></div>"
            + _button("{{approvalUrl}}", "Review Request", _PURPLE),
        ),
    ),
    NotificationType.LEAVE_APPROVED: ResolvedTemplate(
        subject="✅ Leave Approved - {{companyName}}",
        body=_layout(
            _GREEN,
            '<h1 style="color: white; margin: 0;">Leave Approved ✅</h1>',
            '<h2 style="color: #333;">Good news, {{employeeName}}!</h2>'
            f"<p {_TEXT}>Your leave request has been approved.</p>"
            '<div style="background: #d4edda; padding: 20px; border-radius: 10px; margin: 20px 0;">'
            "<p><strong>Leave Type:</strong> {{leaveType}}</p>"
            "<p><strong>From:</strong> {{startDate}}</p>"
            "<p><strong>To:</strong> {{endDate}}</p>"
            "<p><strong>Approved by:</strong> {{approvedBy}}</p></div>",
        ),
    ),
    NotificationType.LEAVE_REJECTED: ResolvedTemplate(
        subject="❌ Leave Request Rejected - {{companyName}}",
        body=_layout(
            _RED,
            '<h1 style="color: white; margin: 0;">Leave Request Rejected</h1>',
            '<h2 style="color: #333;">Hello {{employeeName}},</h2>'
            f"<p {_TEXT}>Unfortunately, your leave request has been rejected.</p>"
            '<div style="background: #f8d7da; padding: 20px; border-radius: 10px; margin: 20px 0;">'
            "<p><strong>Leave Type:</strong> {{leaveType}}</p>"
            "<p><strong>From:</strong> {{startDate}}</p>"
            "<p><strong>To:</strong> {{endDate}}</p>"
            "<p><strong>Rejected by:</strong> {{rejectedBy}}</p>"
            "<p><strong>Reason:</strong> {{rejectionReason}}</p></div>",
        ),
    ),
    NotificationType.CUSTOM: ResolvedTemplate(
        subject="{{customSubject}}",
        body="""
<div style="font-family: Arial, sans-serif; max-width: 640px; margin: 0 auto;">
  <div style="padding: 16px 0; text-align: center;">
    <h2 style="margin: 0; color: #333;">{{companyName}}</h2>
    <p style="margin: 4px 0; color: #666;">Hello {{employeeName}},</p>
  </div>
  <div style="padding: 20px; background: #f9f9f9; border-radius: 8px;">
    {{customBody}}
  </div>
  <div style="padding: 12px 0; text-align: center; color: #999; font-size: 12px;">
    Need help? Contact <a href="mailto:{{supportEmail}}" style="color: #2563eb;">{{supportEmail}}</a>
  </div>
</div>
""",
    ),
}

if set(_DEFAULTS) != set(NOTIFICATION_CATALOG):
    raise RuntimeError("Every notification type must have exactly one default template")

DEFAULT_TEMPLATES: Mapping[NotificationType, ResolvedTemplate] = MappingProxyType(_DEFAULTS)


def get_default_template(notification_type: NotificationType) -> ResolvedTemplate:
    """Return the built-in template for a notification type."""
    return DEFAULT_TEMPLATES[notification_type]
