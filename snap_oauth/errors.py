"""Exceptions raised by the snap login flow"""


class AuthError(Exception):
    """Base class for login and provisioning failures"""


class PreconditionError(AuthError):
    """Malformed redirect URL, unbindable port or no secure random source"""


class MissingAuthorizationCode(AuthError):
    """The provider redirected back without a 'code' parameter"""


class TokenExchangeFailed(AuthError):
    """The token endpoint could not be reached or returned an unusable response"""


class ClaimDecodeError(AuthError):
    """The ID token could not be decoded or lacks the expected claims"""


class PersistenceFailed(AuthError):
    """The session credential could not be written to the config file"""


class LoginTimeout(AuthError):
    """No callback arrived before the configured login timeout"""


class ProvisioningRejected(AuthError):
    """The server rejected a proposed account name"""

    def __init__(self, account: str):
        super().__init__(f"account name '{account}' is either invalid or already taken")
        self.account = account


class ProvisioningFailed(AuthError):
    """Account or profile creation failed after a name was accepted"""

    def __init__(self, message: str, web_url: str = ""):
        if web_url:
            message = f"{message}\nPlease complete the account creation via the web app at {web_url}"
        super().__init__(message)
        self.web_url = web_url
