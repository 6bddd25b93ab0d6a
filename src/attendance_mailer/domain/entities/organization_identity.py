"""Organization identity used to fill implicit template variables."""

from dataclasses import dataclass

DEFAULT_COMPANY_NAME = "Company"
DEFAULT_SUPPORT_EMAIL = "support@company.com"
DEFAULT_LOGIN_URL = "http://localhost:3000/login"


@dataclass(frozen=True)
class OrganizationIdentity:
    """Company name, support address and login URL.

    Each field falls back to its default independently of the others.
    """

    company_name: str = DEFAULT_COMPANY_NAME
    support_email: str = DEFAULT_SUPPORT_EMAIL
    login_url: str = DEFAULT_LOGIN_URL

    def as_variables(self) -> dict[str, str]:
        """Return the identity as template variables."""
        return {
            "companyName": self.company_name,
            "supportEmail": self.support_email,
            "loginUrl": self.login_url,
        }
