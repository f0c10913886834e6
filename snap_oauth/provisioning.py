"""First-login account provisioning"""

import logging
from typing import Callable, Optional, Protocol

from rich.console import Console

from .errors import ProvisioningFailed, ProvisioningRejected
from .models import Identity, UserProfile

logger = logging.getLogger(__name__)

WELCOME = """
Hi {name}, welcome to SnapMaster!
First things first: please select an account (tenant) name, so we can set
things up for you.

Your account will be part of the namespace that will identify your snaps,
much like your github account is used to name your repos. You can't change it
later, so pick a good one!

Account names must start with a letter and must be entirely composed of
alphanumeric characters, with a 20 character limit.
"""

NEXT_STEPS = """[green]Account successfully created![/green]

Some things to try next:

$ snap gallery list     # will list snaps in the gallery
$ snap tools list       # will list available tools to connect to
$ snap tools get <tool> # will describe a tool and how to connect it

Also, be sure to check out {web_url} for the GUI experience ;)
"""


class AccountAPI(Protocol):
    """Server calls the provisioning flow depends on"""

    def get_account(self) -> str: ...

    def validate_account(self, account: str) -> bool: ...

    def create_account(self, account: str) -> str: ...

    def store_profile(self, profile: dict) -> str: ...


class AccountProvisioner:
    """Walk a first-time user through choosing an account name

    Args:
        api: Account/profile API
        web_url: SnapMaster web app URL for the manual fallback
        console: Rich console for output
        input_func: Reads one line from the user (default: input)
        max_attempts: Stop after this many rejected names; None keeps asking
    """

    def __init__(
        self,
        api: AccountAPI,
        web_url: str,
        console: Optional[Console] = None,
        input_func: Callable[[str], str] = input,
        max_attempts: Optional[int] = None,
    ):
        self.api = api
        self.web_url = web_url
        self.console = console or Console()
        self.input_func = input_func
        self.max_attempts = max_attempts

    def check_account_name(self, account: str) -> str:
        """Validate a proposed name with the server

        Raises:
            ProvisioningRejected: if the name is invalid or already taken
        """
        if not self.api.validate_account(account):
            raise ProvisioningRejected(account)
        return account

    def choose_account_name(self) -> str:
        """Prompt until the server accepts an account name"""
        prompt = "Enter account name: "
        attempts = 0

        while True:
            try:
                account = self.input_func(prompt).strip()
            except EOFError:
                raise ProvisioningFailed("no account name entered", self.web_url) from None

            try:
                return self.check_account_name(account)
            except ProvisioningRejected as e:
                attempts += 1
                logger.info(f"Rejected account name: {e}")
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    raise ProvisioningFailed(f"gave up after {attempts} rejected account names", self.web_url) from e

            self.console.print(f"Unfortunately, account name '{account}' is either invalid or already taken.")
            prompt = "Please try another name: "

    def provision(self, identity: Identity) -> str:
        """Create the account and profile for a first-time user

        Returns:
            The account name that was created

        Raises:
            ProvisioningFailed: if the server does not report success
        """
        self.console.print(WELCOME.format(name=identity.name), markup=False)

        account = self.choose_account_name()

        message = self.api.create_account(account)
        if message != "success":
            raise ProvisioningFailed(f"could not create account name '{account}'", self.web_url)

        profile = UserProfile(name=identity.name, email=identity.email, account=account)
        message = self.api.store_profile(profile.to_dict())
        if message != "success":
            raise ProvisioningFailed("error creating profile", self.web_url)

        logger.info(f"Provisioned account '{account}' for {identity.email}")
        self.console.print(NEXT_STEPS.format(web_url=self.web_url))
        return account
